"""Tests for the per-day and per-habit analytics views."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from habitlog.domain.habit import HabitCategory, TimeOfDay
from habitlog.services import analytics
from habitlog.services.analytics import CompletionTier, DayProgress


class TestProgressFor:
    def test_counts_only_scheduled_habits(self, habit_factory, index_for, today):
        everyday = habit_factory(name="Water")
        weekday_only = habit_factory(name="Standup", target_days={1, 2, 3, 4, 5})
        weekend_only = habit_factory(name="Hike", target_days={0, 6})
        index = index_for({everyday: [today], weekend_only: [today]})

        progress = analytics.progress_for(today, [everyday, weekday_only, weekend_only], index)

        assert progress == DayProgress(completed=1, total=2)
        assert progress.percentage == pytest.approx(0.5)
        assert analytics.day_completion_rate(today, [everyday, weekday_only, weekend_only], index) == pytest.approx(0.5)

    def test_nothing_scheduled(self, habit_factory, index_for, today):
        habit = habit_factory(target_days=set())
        progress = analytics.progress_for(today, [habit], index_for({habit: [today]}))

        assert progress == DayProgress(completed=0, total=0)
        assert progress.percentage == 0.0

    def test_orphaned_completions_are_ignored(self, habit_factory, index_for, today):
        habit = habit_factory()
        ghost = habit_factory(name="Deleted")
        index = index_for({ghost: [today]})

        assert analytics.progress_for(today, [habit], index) == DayProgress(0, 1)


class TestSortedTodayView:
    def test_incomplete_first_then_completed(self, habit_factory, index_for, today):
        a, b, c = (habit_factory(name=n) for n in ("A", "B", "C"))
        index = index_for({b: [today]})

        view = analytics.sorted_today_view([c, b, a], index, today)

        assert [h.name for h in view] == ["A", "C", "B"]

    def test_each_bucket_alphabetical(self, habit_factory, index_for, today):
        names = ["delta", "Alpha", "charlie", "Bravo"]
        habits = [habit_factory(name=n) for n in names]
        done = {h: [today] for h in habits if h.name in {"delta", "Bravo"}}

        view = analytics.sorted_today_view(habits, index_for(done), today)

        assert [h.name for h in view] == ["Alpha", "charlie", "Bravo", "delta"]

    def test_unscheduled_habits_hidden(self, habit_factory, index_for, today):
        due = habit_factory(name="Due")
        not_due = habit_factory(name="Tomorrow", target_days={4})
        view = analytics.sorted_today_view([due, not_due], index_for({}), today)

        assert view == [due]

    def test_split_today_time_filter(self, habit_factory, index_for, today):
        morning = habit_factory(name="Stretch", time_of_day=TimeOfDay.MORNING)
        evening = habit_factory(name="Read", time_of_day=TimeOfDay.EVENING)
        untagged = habit_factory(name="Water")
        index = index_for({morning: [today]})

        active, completed = analytics.split_today(
            [morning, evening, untagged], index, today, time_of_day=TimeOfDay.MORNING
        )
        assert active == []
        assert completed == [morning]

        active, completed = analytics.split_today([morning, evening, untagged], index, today)
        assert [h.name for h in active] == ["Read", "Water"]
        assert completed == [morning]


class TestCompletionTier:
    @pytest.mark.parametrize(
        "rate, tier",
        [
            (0.0, CompletionTier.NONE),
            (0.2, CompletionTier.PARTIAL),
            (0.5, CompletionTier.HIGH),
            (0.99, CompletionTier.HIGH),
            (1.0, CompletionTier.FULL),
        ],
    )
    def test_buckets(self, rate, tier):
        assert analytics.completion_tier(rate) is tier


class TestStats:
    def test_habit_stats(self, habit_factory, index_for, today):
        habit = habit_factory(created_at=today - timedelta(days=9))
        days = [today - timedelta(days=i) for i in (0, 1, 5, 6, 7)]
        stats = analytics.habit_stats(habit, index_for({habit: days}), today)

        assert stats.current_streak == 2
        assert stats.longest_streak == 3
        assert stats.total_completions == 5
        assert stats.completion_rate == pytest.approx(0.5)

    def test_empty_habit_stats(self, habit_factory, index_for, today):
        habit = habit_factory()
        stats = analytics.habit_stats(habit, index_for({}), today)

        assert (stats.current_streak, stats.longest_streak, stats.completion_rate) == (0, 0, 0.0)

    def test_overall_stats(self, habit_factory, index_for, today):
        a = habit_factory(name="A")
        b = habit_factory(name="B")
        index = index_for({a: [today, today - timedelta(days=1)], b: [today - timedelta(days=3)]})

        overall = analytics.overall_stats([a, b], index, today)

        assert overall.total_habits == 2
        assert overall.total_completions == 3
        assert overall.today == DayProgress(completed=1, total=2)
        assert overall.best_current_streak == 2

    def test_overall_stats_without_habits(self, index_for, today):
        overall = analytics.overall_stats([], index_for({}), today)
        assert overall.best_current_streak == 0
        assert overall.today.total == 0

    def test_habits_by_category(self, habit_factory):
        fit = habit_factory(name="Run", category=HabitCategory.FITNESS)
        other = habit_factory(name="Budget", category=HabitCategory.FINANCE)
        assert analytics.habits_by_category([fit, other], HabitCategory.FITNESS) == [fit]


class TestCalendarViews:
    def test_week_view(self, habit_factory, index_for, today):
        habit = habit_factory(target_days={1, 3, 5})
        week = analytics.week_view(habit, index_for({habit: [today]}), today)

        assert [d.date for d in week][0] == date(2024, 6, 10)
        assert [d.scheduled for d in week] == [True, False, True, False, True, False, False]
        assert [d.completed for d in week] == [False, False, True, False, False, False, False]

    def test_activity_grid_ends_today(self, habit_factory, index_for, today):
        habit = habit_factory()
        index = index_for({habit: [today, today - timedelta(days=1), today - timedelta(days=16)]})

        grid = analytics.activity_grid(habit, index, today, rows=7, columns=16)

        assert len(grid) == 7 and all(len(row) == 16 for row in grid)
        assert grid[-1][-1].date == today and grid[-1][-1].completed
        assert grid[-1][-2].date == today - timedelta(days=1) and grid[-1][-2].completed
        assert grid[-2][-1].date == today - timedelta(days=16) and grid[-2][-1].completed
        assert grid[0][0].date == today - timedelta(days=7 * 16 - 1)

    def test_month_overview(self, habit_factory, index_for):
        habit = habit_factory(created_at=date(2024, 1, 1))
        other = habit_factory(name="Other", created_at=date(2024, 1, 1))
        index = index_for({habit: [date(2024, 6, 1)], other: [date(2024, 6, 1), date(2024, 6, 2)]})

        overview = analytics.month_overview(2024, 6, [habit, other], index)

        assert overview[:6] == [None] * 6
        first, second = overview[6], overview[7]
        assert first.date == date(2024, 6, 1) and first.tier is CompletionTier.FULL
        assert second.progress == DayProgress(1, 2) and second.tier is CompletionTier.HIGH
        assert overview[8].tier is CompletionTier.NONE

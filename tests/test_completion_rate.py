"""Tests for completion-rate calculations."""

from __future__ import annotations

from datetime import timedelta

import pytest

from habitlog.services.completion_rate import (
    completion_rate,
    elapsed_days,
    expected_occurrences,
    scheduled_completion_rate,
)


class TestCompletionRate:
    def test_no_completions_is_zero(self, habit_factory, index_for, today):
        habit = habit_factory(created_at=today - timedelta(days=10))
        assert completion_rate(habit, index_for({habit: []}), today) == 0.0

    def test_three_of_six_days(self, habit_factory, index_for, today):
        """Created five days ago, three completions including today: 3/6."""
        habit = habit_factory(created_at=today - timedelta(days=5))
        index = index_for({habit: [today, today - timedelta(days=2), today - timedelta(days=4)]})

        assert elapsed_days(habit, today) == 6
        assert completion_rate(habit, index, today) == pytest.approx(0.5)

    def test_created_today_counts_one_day(self, habit_factory, index_for, today):
        habit = habit_factory(created_at=today)
        assert completion_rate(habit, index_for({habit: [today]}), today) == 1.0

    def test_created_in_future_is_zero(self, habit_factory, index_for, today):
        habit = habit_factory(created_at=today + timedelta(days=3))
        assert completion_rate(habit, index_for({habit: [today]}), today) == 0.0

    def test_not_weighted_by_schedule(self, habit_factory, index_for, today):
        habit = habit_factory(created_at=today - timedelta(days=3), target_days={3})
        index = index_for({habit: [today - timedelta(days=1), today]})

        assert completion_rate(habit, index, today) == pytest.approx(0.5)

    def test_capped_at_one(self, habit_factory, index_for, today):
        habit = habit_factory(created_at=today)
        index = index_for({habit: [today - timedelta(days=i) for i in range(4)]})

        assert completion_rate(habit, index, today) == 1.0


class TestScheduledCompletionRate:
    def test_expected_occurrences_counts_scheduled_days(self, habit_factory, today):
        # Two full weeks of Mon/Wed/Fri.
        habit = habit_factory(target_days={1, 3, 5}, created_at=today - timedelta(days=30))
        start = today - timedelta(days=13)
        assert expected_occurrences(habit, start, today) == 6

    def test_expected_occurrences_starts_at_creation(self, habit_factory, today):
        habit = habit_factory(created_at=today)
        assert expected_occurrences(habit, today - timedelta(days=10), today) == 1

    def test_only_scheduled_hits_count(self, habit_factory, index_for, today):
        # Wednesday today; habit runs Mon/Wed since Monday.
        habit = habit_factory(target_days={1, 3}, created_at=today - timedelta(days=2))
        index = index_for({habit: [today, today - timedelta(days=1)]})

        assert scheduled_completion_rate(habit, index, today) == pytest.approx(0.5)

    def test_nothing_expected_is_zero(self, habit_factory, index_for, today):
        habit = habit_factory(target_days=set(), created_at=today - timedelta(days=7))
        assert scheduled_completion_rate(habit, index_for({habit: [today]}), today) == 0.0

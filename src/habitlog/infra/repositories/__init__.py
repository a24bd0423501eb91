"""Concrete repository implementations using SQLModel."""

from .habit import SQLModelHabitStore

__all__ = ["SQLModelHabitStore"]

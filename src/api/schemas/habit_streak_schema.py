"""Схемы Pydantic для модели HabitStreak."""

from datetime import date

from .base_schema import BaseSchema


class HabitStreakSchemaRead(BaseSchema):
    """Серии выполнения привычки."""

    habit_id: int
    current_streak: int = 0
    longest_streak: int = 0
    last_completed_date: date | None = None
    streak_start_date: date | None = None
    total_completions: int = 0

"""Инициализация модуля репозиториев."""

from .base_repository import BaseRepository
from .category_repository import CategoryRepository
from .habit_log_repository import HabitLogRepository
from .habit_repository import HabitRepository
from .habit_streak_repository import HabitStreakRepository
from .moment_repository import MomentRepository
from .sleep_log_repository import SleepLogRepository

__all__ = [
    "BaseRepository",
    "HabitRepository",
    "HabitLogRepository",
    "HabitStreakRepository",
    "CategoryRepository",
    "SleepLogRepository",
    "MomentRepository",
]

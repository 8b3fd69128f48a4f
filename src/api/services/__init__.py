"""Инициализация модуля сервисов."""

from .base_service import BaseService
from .category_service import CategoryService
from .habit_log_service import HabitLogService
from .habit_service import HabitService
from .moment_service import MomentService
from .sleep_log_service import SleepLogService
from .stats_service import StatsService

__all__ = [
    "BaseService",
    "HabitService",
    "HabitLogService",
    "SleepLogService",
    "MomentService",
    "CategoryService",
    "StatsService",
]

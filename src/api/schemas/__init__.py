"""Инициализация модуля схем Pydantic."""

# Экспортируем Enum
from src.api.models import DifficultyLevel, FrequencyType, HabitType

from .auth_schema import Identity, TokenPayload
from .base_schema import BaseSchema
from .category_schema import CategorySchemaCreate, CategorySchemaRead
from .habit_log_schema import HabitLogIncrement, HabitLogSchemaRead, HabitProgressSchemaRead, HabitStatsSchemaRead
from .habit_schema import (
    HabitRulesSchema,
    HabitSchemaCreate,
    HabitSchemaRead,
    HabitSchemaReadWithLogs,
    HabitSchemaUpdate,
)
from .habit_streak_schema import HabitStreakSchemaRead
from .moment_schema import MomentSchemaCreate, MomentSchemaRead
from .sleep_log_schema import SleepLogSchemaRead, SleepLogSchemaUpsert
from .stats_schema import MonthlyStatsSchemaRead

__all__ = [
    "BaseSchema",
    "Identity",
    "TokenPayload",
    "HabitRulesSchema",
    "HabitSchemaCreate",
    "HabitSchemaRead",
    "HabitSchemaReadWithLogs",
    "HabitSchemaUpdate",
    "HabitLogSchemaRead",
    "HabitLogIncrement",
    "HabitProgressSchemaRead",
    "HabitStatsSchemaRead",
    "HabitStreakSchemaRead",
    "CategorySchemaCreate",
    "CategorySchemaRead",
    "SleepLogSchemaUpsert",
    "SleepLogSchemaRead",
    "MomentSchemaCreate",
    "MomentSchemaRead",
    "MonthlyStatsSchemaRead",
    "HabitType",  # Экспорт Enum
    "FrequencyType",
    "DifficultyLevel",
]


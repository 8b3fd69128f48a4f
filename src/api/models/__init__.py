from .base import Base, metadata_obj
from .enums import WEEKDAY_FREQUENCIES, DifficultyLevel, FrequencyType, HabitType
from .habit import Habit
from .habit_category import HabitCategory
from .habit_log import HabitLog
from .habit_streak import HabitStreak
from .memorable_moment import MemorableMoment
from .sleep_log import SleepLog

__all__ = [
    "metadata_obj",
    "Base",
    "Habit",
    "HabitLog",
    "HabitStreak",
    "HabitCategory",
    "SleepLog",
    "MemorableMoment",
    "HabitType",
    "FrequencyType",
    "DifficultyLevel",
    "WEEKDAY_FREQUENCIES",
]

"""Перечисления, общие для моделей и схем."""

from enum import Enum as PyEnum  # Чтобы не конфликтовать с sqlalchemy.Enum


class HabitType(str, PyEnum):
    """Тип привычки."""

    BOOLEAN = "boolean"  # Выполнено / не выполнено
    COUNTER = "counter"  # Счетчик с целевым значением


class FrequencyType(str, PyEnum):
    """Правило периодичности привычки."""

    DAILY = "daily"  # Каждый день
    WEEKLY = "weekly"  # По выбранным дням недели
    INTERVAL = "interval"  # Раз в N дней
    CUSTOM = "custom"  # Произвольный набор дней недели


class DifficultyLevel(str, PyEnum):
    """Сложность привычки."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# Типы периодичности, для которых обязателен список дней недели
WEEKDAY_FREQUENCIES = frozenset({FrequencyType.WEEKLY, FrequencyType.CUSTOM})

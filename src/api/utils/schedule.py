"""Правила периодичности: в какие дни привычка запланирована."""

from datetime import date
from typing import Iterable, Protocol, Sequence

from src.api.models.enums import WEEKDAY_FREQUENCIES, FrequencyType


class ScheduledHabitLike(Protocol):
    frequency_type: FrequencyType
    frequency_days: Sequence[int] | None
    frequency_interval_days: int | None


def weekday_index(day: date) -> int:
    """Индекс дня недели с воскресенья: 0 - воскресенье, 1 - понедельник, ..., 6 - суббота."""
    return (day.weekday() + 1) % 7


def is_habit_due(habit: ScheduledHabitLike, day: date, anchor: date) -> bool:
    """
    Проверяет, запланирована ли привычка на день `day`.

    Args:
        habit (ScheduledHabitLike): Привычка с правилом периодичности.
        day (date): Проверяемый день.
        anchor (date): Опорная дата для интервальных привычек (дата создания привычки).

    Returns:
        bool: True, если день плановый.
    """
    if habit.frequency_type == FrequencyType.DAILY:
        return True

    if habit.frequency_type in WEEKDAY_FREQUENCIES:
        return weekday_index(day) in set(habit.frequency_days or ())

    # Интервальная привычка: каждые N дней от опорной даты (в обе стороны)
    interval = max(1, habit.frequency_interval_days or 1)
    return (day - anchor).days % interval == 0


def due_days(habit: ScheduledHabitLike, days: Iterable[date], anchor: date) -> list[date]:
    """Отбирает из `days` плановые дни привычки, сохраняя порядок."""
    return [day for day in days if is_habit_due(habit, day, anchor)]

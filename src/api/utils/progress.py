"""
Вычисление прогресса привычки за день.

Единственное место, где из определения привычки и записи за день получаются
видимые пользователю числа: счетчик, цель, процент и признак выполнения.
Функции чистые: не обращаются к БД и не изменяют переданные объекты.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Protocol

from src.api.models.enums import HabitType


class HabitLike(Protocol):
    """Поля привычки, необходимые для вычисления прогресса."""

    habit_type: HabitType
    target_count: int | None


class HabitLogLike(Protocol):
    """Поля записи о выполнении, необходимые для вычисления прогресса."""

    done: bool
    current_count: int | None


@dataclass(frozen=True)
class HabitProgress:
    """Прогресс привычки за один день."""

    count: int
    target: int
    percentage: int
    done: bool


@dataclass(frozen=True)
class HabitStats:
    """Сводка по набору записей о выполнении."""

    completed: int
    total: int
    percentage: int


def round_percentage(part: int, whole: int) -> int:
    """
    Процент `part / whole`, округленный половиной вверх (12.5 -> 13).

    Для `whole <= 0` возвращает 0.
    """
    if whole <= 0:
        return 0
    # Целочисленная арифметика: floor(100 * part / whole + 0.5)
    return (200 * part + whole) // (2 * whole)


def get_target(habit: HabitLike) -> int:
    """Целевое значение счетчика: `target_count`, по умолчанию 1."""
    if habit.habit_type == HabitType.BOOLEAN:
        return 1
    return habit.target_count or 1


def progress_from_count(habit: HabitLike, count: int) -> HabitProgress:
    """Прогресс счетчика привычки при заданном значении `count`."""
    target = get_target(habit)
    return HabitProgress(
        count=count,
        target=target,
        percentage=min(100, round_percentage(count, target)),
        done=count >= target,
    )


def progress_from_done(done: bool) -> HabitProgress:
    """Прогресс булевой привычки."""
    return HabitProgress(count=1 if done else 0, target=1, percentage=100 if done else 0, done=done)


def get_habit_progress(habit: HabitLike, log: HabitLogLike | None) -> HabitProgress:
    """
    Вычисляет прогресс привычки за день по записи о выполнении (если она есть).

    Args:
        habit (HabitLike): Привычка.
        log (HabitLogLike | None): Запись за день или None, если записи нет.

    Returns:
        HabitProgress: count, target, percentage, done.
    """
    if log is None:
        return HabitProgress(count=0, target=get_target(habit), percentage=0, done=False)

    if habit.habit_type == HabitType.BOOLEAN:
        return progress_from_done(bool(log.done))

    return progress_from_count(habit, log.current_count or 0)


def toggle_progress(habit: HabitLike, log: HabitLogLike | None) -> HabitProgress:
    """
    Новый прогресс булевой привычки после переключения.

    Если записи нет, привычка становится выполненной.
    """
    current = get_habit_progress(habit, log)
    return progress_from_done(not current.done)


def increment_progress(habit: HabitLike, log: HabitLogLike | None, delta: int) -> HabitProgress | None:
    """
    Новый прогресс счетчика после изменения на `delta`.

    Значение не опускается ниже 0. Уменьшение при нулевом счетчике отклоняется.

    Returns:
        HabitProgress | None: Новый прогресс или None, если изменение отклонено.
    """
    current = get_habit_progress(habit, log)

    if delta == 0 or (delta < 0 and current.count <= 0):
        return None

    return progress_from_count(habit, max(0, current.count + delta))


def is_date_mutable(target_date: date, today: date) -> bool:
    """Отметки можно менять только за сегодня и прошлые дни."""
    return target_date <= today


def get_habit_stats(logs: Iterable[HabitLogLike]) -> HabitStats:
    """
    Сводка по записям: сколько выполнено, сколько всего, процент.

    Args:
        logs (Iterable[HabitLogLike]): Записи о выполнении (например, за месяц).
    """
    logs = list(logs)
    completed = sum(1 for log in logs if log.done)
    return HabitStats(completed=completed, total=len(logs), percentage=round_percentage(completed, len(logs)))

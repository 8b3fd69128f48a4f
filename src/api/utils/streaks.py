"""Пересчет серий (стриков) привычки по записям о выполнении."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Protocol

from .date_utils import iter_days
from .schedule import ScheduledHabitLike, due_days


class DatedLogLike(Protocol):
    log_date: date
    done: bool


@dataclass(frozen=True)
class StreakSnapshot:
    """Результат пересчета серий."""

    current_streak: int = 0
    longest_streak: int = 0
    last_completed_date: date | None = None
    streak_start_date: date | None = None
    total_completions: int = 0


def compute_streak(
    habit: ScheduledHabitLike,
    logs: Iterable[DatedLogLike],
    *,
    today: date,
    anchor: date,
) -> StreakSnapshot:
    """
    Вычисляет текущую и максимальную серии подряд выполненных плановых дней.

    Выполнения в неплановые дни учитываются только в `total_completions`.
    Если сегодня плановый день и он еще не отмечен, серия не прерывается.
    Записи с датой после `today` игнорируются.

    Args:
        habit (ScheduledHabitLike): Привычка с правилом периодичности.
        logs (Iterable[DatedLogLike]): Все записи о выполнении привычки.
        today (date): Текущая дата пользователя.
        anchor (date): Опорная дата для интервальных привычек.

    Returns:
        StreakSnapshot: Пересчитанные значения.
    """
    completed = {log.log_date for log in logs if log.done and log.log_date <= today}

    if not completed:
        return StreakSnapshot()

    scheduled = due_days(habit, iter_days(min(completed), today), anchor)

    # Максимальная серия: проход по плановым дням от первого выполнения до сегодня
    longest = run = 0
    for day in scheduled:
        run = run + 1 if day in completed else 0
        longest = max(longest, run)

    # Текущая серия: проход назад от сегодня
    current = 0
    start: date | None = None
    for day in reversed(scheduled):
        if day in completed:
            current += 1
            start = day
        elif day == today:
            continue
        else:
            break

    return StreakSnapshot(
        current_streak=current,
        longest_streak=longest,
        last_completed_date=max(completed),
        streak_start_date=start,
        total_completions=len(completed),
    )

"""Месячная статистика для дашборда: ряды, разбивка по привычкам, распределение, сводка."""

from dataclasses import dataclass, field
from datetime import date
from typing import Protocol, Sequence

from .progress import HabitLogLike, round_percentage


class StatsLogLike(HabitLogLike, Protocol):
    log_date: date


class StatsStreakLike(Protocol):
    current_streak: int


class StatsHabitLike(Protocol):
    id: int
    name: str
    color: str
    logs: Sequence[StatsLogLike]
    streak: StatsStreakLike | None


# Пороговые значения доли выполненных записей для распределения привычек
DISTRIBUTION_BUCKETS: tuple[tuple[str, float], ...] = (
    ("Beginner", 0.25),
    ("Developing", 0.5),
    ("Strong", 0.75),
)
NOT_STARTED = "Not Started"
CONSISTENT = "Consistent"


@dataclass(frozen=True)
class DailyCompletion:
    day: date
    completion: int
    total: int
    percentage: int


@dataclass(frozen=True)
class HabitBreakdown:
    habit_id: int
    name: str
    color: str
    completed: int
    total: int
    percentage: int


@dataclass(frozen=True)
class DistributionEntry:
    name: str
    value: int


@dataclass(frozen=True)
class SummaryCards:
    total_completions: int
    overall_percentage: int
    best_habit: str | None
    best_habit_percentage: int
    average_completion: int
    active_streaks: int


@dataclass(frozen=True)
class SleepSummary:
    total_nights: int = 0
    average_hours: float = 0.0
    min_hours: float | None = None
    max_hours: float | None = None


@dataclass(frozen=True)
class MonthlyStats:
    month: date
    daily: list[DailyCompletion]
    breakdown: list[HabitBreakdown]
    distribution: list[DistributionEntry]
    summary: SummaryCards
    sleep: SleepSummary = field(default_factory=SleepSummary)


def _done_dates(habit: StatsHabitLike) -> set[date]:
    return {log.log_date for log in habit.logs if log.done}


def daily_completion(habits: Sequence[StatsHabitLike], days: Sequence[date]) -> list[DailyCompletion]:
    """Для каждого дня: сколько привычек выполнено из общего числа."""
    done_by_habit = [_done_dates(habit) for habit in habits]
    total = len(habits)

    series = []
    for day in days:
        completion = sum(1 for done_dates in done_by_habit if day in done_dates)
        series.append(
            DailyCompletion(day=day, completion=completion, total=total, percentage=round_percentage(completion, total))
        )
    return series


def habit_breakdown(habits: Sequence[StatsHabitLike]) -> list[HabitBreakdown]:
    """Процент выполненных записей по каждой привычке, по убыванию процента."""
    breakdown = []
    for habit in habits:
        completed = sum(1 for log in habit.logs if log.done)
        total = len(habit.logs)
        breakdown.append(
            HabitBreakdown(
                habit_id=habit.id,
                name=habit.name,
                color=habit.color,
                completed=completed,
                total=total,
                percentage=round_percentage(completed, total),
            )
        )
    # sorted стабилен: при равных процентах сохраняется исходный порядок
    return sorted(breakdown, key=lambda entry: entry.percentage, reverse=True)


def classify_habit(completed: int, total: int) -> str:
    """Относит привычку к группе по доле выполненных записей."""
    if completed == 0:
        return NOT_STARTED

    ratio = completed / total if total else 0.0
    for name, threshold in DISTRIBUTION_BUCKETS:
        if ratio <= threshold:
            return name
    return CONSISTENT


def habit_distribution(habits: Sequence[StatsHabitLike]) -> list[DistributionEntry]:
    """Количество привычек в каждой группе (пустые группы не возвращаются)."""
    order = [NOT_STARTED, *(name for name, _ in DISTRIBUTION_BUCKETS), CONSISTENT]
    counts = dict.fromkeys(order, 0)

    for habit in habits:
        completed = sum(1 for log in habit.logs if log.done)
        counts[classify_habit(completed, len(habit.logs))] += 1

    return [DistributionEntry(name=name, value=value) for name, value in counts.items() if value]


def summary_cards(habits: Sequence[StatsHabitLike], days: Sequence[date]) -> SummaryCards:
    """Сводные показатели месяца."""
    days_count = len(days)
    completed_by_habit = [sum(1 for log in habit.logs if log.done) for habit in habits]
    total_completions = sum(completed_by_habit)

    best_habit: str | None = None
    best_completed = 0
    for habit, completed in zip(habits, completed_by_habit):
        # Строгое сравнение: при равенстве остается первая привычка
        if completed > best_completed:
            best_habit, best_completed = habit.name, completed

    rates = [completed / days_count * 100 if days_count else 0.0 for completed in completed_by_habit]
    average = sum(rates) / len(rates) if rates else 0.0

    return SummaryCards(
        total_completions=total_completions,
        overall_percentage=round_percentage(total_completions, days_count * len(habits)),
        best_habit=best_habit,
        best_habit_percentage=round_percentage(best_completed, days_count),
        average_completion=int(average + 0.5),
        active_streaks=sum(1 for habit in habits if habit.streak and habit.streak.current_streak > 0),
    )


def sleep_summary(hours: Sequence[float]) -> SleepSummary:
    """Сводка по сну за месяц."""
    if not hours:
        return SleepSummary()

    return SleepSummary(
        total_nights=len(hours),
        average_hours=round(sum(hours) / len(hours), 2),
        min_hours=min(hours),
        max_hours=max(hours),
    )


def build_monthly_stats(
    month: date,
    habits: Sequence[StatsHabitLike],
    days: Sequence[date],
    sleep_hours: Sequence[float] = (),
) -> MonthlyStats:
    """
    Собирает всю месячную статистику.

    Args:
        month (date): Первый день месяца.
        habits (Sequence[StatsHabitLike]): Привычки с записями только за этот месяц.
        days (Sequence[date]): Все дни месяца.
        sleep_hours (Sequence[float]): Часы сна за месяц.
    """
    return MonthlyStats(
        month=month,
        daily=daily_completion(habits, days),
        breakdown=habit_breakdown(habits),
        distribution=habit_distribution(habits),
        summary=summary_cards(habits, days),
        sleep=sleep_summary(sleep_hours),
    )

from dataclasses import dataclass, field
from datetime import date

from src.api.utils.date_utils import days_in_month
from src.api.utils.statistics import (
    build_monthly_stats,
    classify_habit,
    daily_completion,
    habit_breakdown,
    habit_distribution,
    sleep_summary,
    summary_cards,
)

MONTH = date(2024, 4, 1)
DAYS = days_in_month(MONTH)


@dataclass
class FakeLog:
    log_date: date
    done: bool = True
    current_count: int = 1


@dataclass
class FakeStreak:
    current_streak: int


@dataclass
class FakeHabit:
    id: int
    name: str
    color: str = "#3B82F6"
    logs: list[FakeLog] = field(default_factory=list)
    streak: FakeStreak | None = None


def logs_on(*days: int, done: bool = True) -> list[FakeLog]:
    return [FakeLog(date(2024, 4, day), done=done) for day in days]


def test_daily_completion():
    habits = [FakeHabit(1, "Run", logs=logs_on(1, 2)), FakeHabit(2, "Read", logs=logs_on(1))]

    series = daily_completion(habits, DAYS[:3])

    assert [(entry.completion, entry.total, entry.percentage) for entry in series] == [
        (2, 2, 100),
        (1, 2, 50),
        (0, 2, 0),
    ]


def test_habit_breakdown_is_sorted_by_percentage():
    habits = [
        FakeHabit(1, "Low", logs=logs_on(1) + logs_on(2, 3, done=False)),
        FakeHabit(2, "High", logs=logs_on(1, 2)),
        FakeHabit(3, "Empty"),
    ]

    breakdown = habit_breakdown(habits)

    assert [(entry.name, entry.percentage) for entry in breakdown] == [("High", 100), ("Low", 33), ("Empty", 0)]


def test_classify_habit_buckets():
    assert classify_habit(0, 10) == "Not Started"
    assert classify_habit(2, 10) == "Beginner"
    assert classify_habit(5, 10) == "Developing"
    assert classify_habit(7, 10) == "Strong"
    assert classify_habit(8, 10) == "Consistent"


def test_habit_distribution_skips_empty_buckets():
    habits = [FakeHabit(1, "A"), FakeHabit(2, "B", logs=logs_on(1)), FakeHabit(3, "C", logs=logs_on(2))]

    distribution = habit_distribution(habits)

    assert [(entry.name, entry.value) for entry in distribution] == [("Not Started", 1), ("Consistent", 2)]


def test_summary_cards():
    habits = [
        FakeHabit(1, "Run", logs=logs_on(1, 2, 3), streak=FakeStreak(2)),
        FakeHabit(2, "Read", logs=logs_on(1, 2, 3), streak=FakeStreak(0)),
        FakeHabit(3, "Yoga", logs=logs_on(1)),
    ]

    summary = summary_cards(habits, DAYS)

    assert summary.total_completions == 7
    assert summary.overall_percentage == 8  # 7 / 90
    # При равенстве остается первая привычка
    assert summary.best_habit == "Run"
    assert summary.best_habit_percentage == 10  # 3 / 30
    assert summary.average_completion == 8  # (10 + 10 + 3.33) / 3
    assert summary.active_streaks == 1


def test_summary_cards_without_habits():
    summary = summary_cards([], DAYS)

    assert summary.best_habit is None
    assert summary.total_completions == 0
    assert summary.average_completion == 0


def test_sleep_summary():
    summary = sleep_summary([7.0, 8.5, 6.0])

    assert summary.total_nights == 3
    assert summary.average_hours == 7.17
    assert (summary.min_hours, summary.max_hours) == (6.0, 8.5)
    assert sleep_summary([]).total_nights == 0


def test_build_monthly_stats():
    stats = build_monthly_stats(MONTH, [FakeHabit(1, "Run", logs=logs_on(1))], DAYS, [8.0])

    assert stats.month == MONTH
    assert len(stats.daily) == 30
    assert stats.breakdown[0].percentage == 100
    assert stats.sleep.total_nights == 1

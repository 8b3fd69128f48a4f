from dataclasses import dataclass, field
from datetime import date, timedelta

from src.api.models import FrequencyType
from src.api.utils.streaks import StreakSnapshot, compute_streak

TODAY = date(2024, 5, 10)  # пятница


@dataclass
class FakeHabit:
    frequency_type: FrequencyType = FrequencyType.DAILY
    frequency_days: list[int] = field(default_factory=list)
    frequency_interval_days: int = 1


@dataclass
class FakeLog:
    log_date: date
    done: bool = True


def days_ago(*offsets: int) -> list[FakeLog]:
    return [FakeLog(TODAY - timedelta(days=offset)) for offset in offsets]


def test_no_completions():
    assert compute_streak(FakeHabit(), [], today=TODAY, anchor=TODAY) == StreakSnapshot()


def test_consecutive_days_including_today():
    snapshot = compute_streak(FakeHabit(), days_ago(0, 1, 2), today=TODAY, anchor=TODAY)

    assert snapshot.current_streak == 3
    assert snapshot.longest_streak == 3
    assert snapshot.streak_start_date == TODAY - timedelta(days=2)
    assert snapshot.last_completed_date == TODAY
    assert snapshot.total_completions == 3


def test_today_not_done_does_not_break_streak():
    snapshot = compute_streak(FakeHabit(), days_ago(1, 2), today=TODAY, anchor=TODAY)

    assert snapshot.current_streak == 2


def test_missed_day_breaks_streak_but_keeps_longest():
    snapshot = compute_streak(FakeHabit(), days_ago(0, 2, 3, 4, 5), today=TODAY, anchor=TODAY)

    assert snapshot.current_streak == 1
    assert snapshot.longest_streak == 4


def test_non_due_days_do_not_break_weekly_streak():
    # Понедельник, среда, пятница
    habit = FakeHabit(frequency_type=FrequencyType.WEEKLY, frequency_days=[1, 3, 5])

    snapshot = compute_streak(habit, days_ago(0, 2, 4, 7), today=TODAY, anchor=TODAY)

    assert snapshot.current_streak == 4
    assert snapshot.longest_streak == 4


def test_undone_and_future_logs_are_ignored():
    logs = [FakeLog(TODAY, done=False), FakeLog(TODAY + timedelta(days=1)), *days_ago(1)]

    snapshot = compute_streak(FakeHabit(), logs, today=TODAY, anchor=TODAY)

    assert snapshot.current_streak == 1
    assert snapshot.total_completions == 1
    assert snapshot.last_completed_date == TODAY - timedelta(days=1)

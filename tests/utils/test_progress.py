from dataclasses import dataclass
from datetime import date

import pytest

from src.api.models import HabitType
from src.api.utils.progress import (
    get_habit_progress,
    get_habit_stats,
    increment_progress,
    is_date_mutable,
    round_percentage,
    toggle_progress,
)


@dataclass
class FakeHabit:
    habit_type: HabitType = HabitType.BOOLEAN
    target_count: int | None = 1


@dataclass
class FakeLog:
    done: bool = False
    current_count: int | None = 0


COUNTER_5 = FakeHabit(habit_type=HabitType.COUNTER, target_count=5)


def test_boolean_habit_without_log():
    progress = get_habit_progress(FakeHabit(), None)

    assert (progress.count, progress.target, progress.percentage, progress.done) == (0, 1, 0, False)


def test_boolean_habit_ignores_target_count():
    progress = get_habit_progress(FakeHabit(target_count=10), FakeLog(done=True, current_count=1))

    assert (progress.count, progress.target, progress.percentage, progress.done) == (1, 1, 100, True)


@pytest.mark.parametrize(
    ("count", "percentage", "done"),
    [(0, 0, False), (1, 20, False), (2, 40, False), (4, 80, False), (5, 100, True), (9, 100, True)],
)
def test_counter_progress(count: int, percentage: int, done: bool):
    progress = get_habit_progress(COUNTER_5, FakeLog(current_count=count))

    assert progress.percentage == percentage
    assert progress.done is done
    assert progress.count == count


def test_counter_without_target_defaults_to_one():
    progress = get_habit_progress(FakeHabit(habit_type=HabitType.COUNTER, target_count=None), FakeLog(current_count=1))

    assert (progress.target, progress.done) == (1, True)


@pytest.mark.parametrize(
    ("part", "whole", "expected"),
    [(1, 8, 13), (1, 3, 33), (2, 3, 67), (1, 2, 50), (0, 5, 0), (3, 0, 0), (5, 5, 100)],
)
def test_round_percentage_rounds_half_up(part: int, whole: int, expected: int):
    assert round_percentage(part, whole) == expected


def test_toggle_progress():
    assert toggle_progress(FakeHabit(), None).done is True

    undone = toggle_progress(FakeHabit(), FakeLog(done=True, current_count=1))
    assert (undone.count, undone.percentage, undone.done) == (0, 0, False)


def test_increment_from_empty():
    progress = increment_progress(COUNTER_5, None, 1)

    assert (progress.count, progress.percentage, progress.done) == (1, 20, False)


def test_increment_reaches_target():
    progress = increment_progress(COUNTER_5, FakeLog(current_count=4), 1)

    assert (progress.count, progress.percentage, progress.done) == (5, 100, True)


def test_decrement_at_zero_is_rejected():
    assert increment_progress(COUNTER_5, None, -1) is None
    assert increment_progress(COUNTER_5, FakeLog(current_count=0), -3) is None


def test_decrement_is_clamped_at_zero():
    progress = increment_progress(COUNTER_5, FakeLog(current_count=2), -5)

    assert progress.count == 0


def test_zero_delta_is_rejected():
    assert increment_progress(COUNTER_5, FakeLog(current_count=2), 0) is None


def test_is_date_mutable():
    today = date(2024, 5, 10)

    assert is_date_mutable(date(2024, 5, 10), today)
    assert is_date_mutable(date(2023, 1, 1), today)
    assert not is_date_mutable(date(2024, 5, 11), today)


def test_get_habit_stats():
    stats = get_habit_stats([FakeLog(done=True), FakeLog(done=False), FakeLog(done=True)])

    assert (stats.completed, stats.total, stats.percentage) == (2, 3, 67)
    assert get_habit_stats([]).percentage == 0

from datetime import date, datetime, timezone

import pytest

from src.api.utils.date_utils import days_in_month, get_today_date, month_bounds, parse_month


def test_get_today_date_falls_back_to_utc():
    assert get_today_date("Not/AZone") in {
        datetime.now(timezone.utc).date(),
        # На границе суток значение могло смениться между вызовами
        get_today_date("UTC"),
    }


@pytest.mark.parametrize(("value", "expected"), [("2024-02", date(2024, 2, 1)), ("2024-02-17", date(2024, 2, 1))])
def test_parse_month(value: str, expected: date):
    assert parse_month(value) == expected


@pytest.mark.parametrize("value", ["2024", "2024-13", "abc-de"])
def test_parse_month_rejects_invalid_values(value: str):
    with pytest.raises(ValueError):
        parse_month(value)


def test_month_bounds_and_days():
    assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert len(days_in_month(date(2023, 2, 1))) == 28

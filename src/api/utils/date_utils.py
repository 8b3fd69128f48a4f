"""Модуль вспомогательных утилит для работы с датами/таймзонами."""

import calendar
from datetime import date, datetime, timedelta, timezone
from typing import Iterator
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.api.core.logging import api_log as log


def get_today_date(timezone_name: str | None) -> date:
    """
    Вычисляет текущую дату ("сегодня") в указанном часовом поясе.

    Если часовой пояс некорректен или не задан, используется UTC.

    Args:
        timezone_name (str | None): Имя часового пояса IANA (например, "Europe/Moscow").

    Returns:
        date: Объект даты (YYYY-MM-DD), соответствующий "сегодня" в часовом поясе.
    """
    # Получаем текущее абсолютное время в UTC
    utc_now = datetime.now(timezone.utc)

    try:
        user_timezone = ZoneInfo(timezone_name or "UTC")

    except (ZoneInfoNotFoundError, ValueError):
        # Несуществующая таймзона (например, опечатка) не должна ронять запрос
        log.warning(f"Некорректный часовой пояс '{timezone_name}'. Используется UTC по умолчанию.")
        user_timezone = ZoneInfo("UTC")

    # astimezone() сохраняет абсолютный момент времени, меняя календарные атрибуты под смещение таймзоны
    return utc_now.astimezone(user_timezone).date()


def parse_month(value: str) -> date:
    """
    Разбирает месяц в формате YYYY-MM (или дату YYYY-MM-DD) и возвращает его первый день.

    Raises:
        ValueError: Если строка не является корректным месяцем.
    """
    parts = value.split("-")

    if len(parts) not in (2, 3):
        raise ValueError(f"Некорректный формат месяца: {value!r}")

    year, month = int(parts[0]), int(parts[1])
    return date(year, month, 1)


def month_bounds(month: date) -> tuple[date, date]:
    """
    Возвращает первый и последний день месяца (включительно).

    Args:
        month (date): Любая дата внутри месяца.

    Returns:
        tuple[date, date]: (первый день, последний день).
    """
    last_day = calendar.monthrange(month.year, month.month)[1]
    return month.replace(day=1), month.replace(day=last_day)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Итерирует по дням от `start` до `end` включительно."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def days_in_month(month: date) -> list[date]:
    """Возвращает список всех дней месяца."""
    return list(iter_days(*month_bounds(month)))

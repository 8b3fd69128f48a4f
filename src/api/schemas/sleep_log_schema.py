"""Схемы Pydantic для модели SleepLog."""

from datetime import date

from pydantic import Field

from .base_schema import BaseSchema


class SleepLogSchemaUpsert(BaseSchema):
    """Создание или обновление записи о сне за дату (дата берется из пути)."""

    hours: float = Field(..., ge=0, le=24, description="Количество часов сна (0..24)")


class SleepLogSchemaRead(BaseSchema):
    id: int
    log_date: date
    hours: float

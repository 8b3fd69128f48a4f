"""Схемы Pydantic для модели MemorableMoment."""

from datetime import date, datetime

from pydantic import Field

from .base_schema import BaseSchema


class MomentSchemaCreate(BaseSchema):
    """Новый момент; дата - сегодня по часовому поясу пользователя."""

    # Пустой после обрезки пробелов текст и превышение длины проверяет сервис
    text: str = Field(..., description="Текст момента")


class MomentSchemaRead(BaseSchema):
    id: int
    moment_date: date
    text: str
    created_at: datetime

"""Схемы Pydantic для модели HabitLog и прогресса привычки."""

from datetime import date, datetime

from pydantic import Field, field_validator

from .base_schema import BaseSchema


class HabitLogSchemaRead(BaseSchema):
    """Схема для чтения записи о выполнении (ответа API)."""

    id: int = Field(..., description="ID записи")
    habit_id: int = Field(..., description="ID привычки")
    log_date: date = Field(..., description="Дата записи")
    done: bool
    current_count: int
    completion_percentage: int
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class HabitLogIncrement(BaseSchema):
    """Изменение счетчика привычки на знаковую величину."""

    delta: int = Field(1, ge=-1000, le=1000, description="Величина изменения (не 0)")

    @field_validator("delta")
    @classmethod
    def non_zero(cls, value: int) -> int:
        if value == 0:
            raise ValueError("Изменение счетчика не может быть нулевым.")
        return value


class HabitProgressSchemaRead(BaseSchema):
    """Прогресс привычки за день."""

    habit_id: int
    log_date: date
    count: int = Field(..., description="Текущее значение (для boolean: 1 или 0)")
    target: int = Field(..., description="Цель")
    percentage: int = Field(..., ge=0, le=100, description="Процент выполнения")
    done: bool
    applied: bool = Field(
        True,
        description="False, если изменение не применено (дата в будущем или счетчик уже равен 0)",
    )


class HabitStatsSchemaRead(BaseSchema):
    """Сводка по записям привычки за запрошенный период."""

    completed: int = Field(..., description="Количество выполненных дней")
    total: int = Field(..., description="Количество дней с записями")
    percentage: int = Field(..., description="Доля выполненных дней, %")

"""Схемы Pydantic для модели HabitCategory."""

from pydantic import Field

from .base_schema import BaseSchema
from .habit_schema import COLOR_PATTERN


class CategorySchemaCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100, description="Название категории")
    description: str | None = Field(None, description="Описание категории")
    color: str = Field("#6B7280", pattern=COLOR_PATTERN, description="Цвет категории (#RRGGBB)")
    icon: str = Field("tag", min_length=1, max_length=50, description="Имя иконки")


class CategorySchemaRead(CategorySchemaCreate):
    id: int
    is_system: bool

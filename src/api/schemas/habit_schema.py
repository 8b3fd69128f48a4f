"""Схемы Pydantic для модели Habit."""

from datetime import datetime
from typing import Annotated

from pydantic import Field, computed_field, field_validator, model_validator

from src.api.models.enums import WEEKDAY_FREQUENCIES, DifficultyLevel, FrequencyType, HabitType
from src.api.utils.progress import get_habit_stats

from .base_schema import BaseSchema
from .habit_log_schema import HabitLogSchemaRead, HabitStatsSchemaRead
from .habit_streak_schema import HabitStreakSchemaRead

# Индекс дня недели: 0 - воскресенье .. 6 - суббота
WeekdayIndex = Annotated[int, Field(ge=0, le=6)]

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class HabitRulesSchema(BaseSchema):
    """
    Тип и периодичность привычки вместе с их инвариантами.

    - для boolean привычек `target_count` всегда 1;
    - для weekly / custom нужен хотя бы один день недели, дни сортируются без повторов;
    - для остальных типов периодичности список дней пуст;
    - `frequency_interval_days` имеет смысл только для interval, иначе 1.
    """

    habit_type: HabitType = Field(HabitType.BOOLEAN, description="Тип привычки (boolean / counter)")
    target_count: int = Field(1, ge=1, description="Целевое значение счетчика (для counter)")
    frequency_type: FrequencyType = Field(FrequencyType.DAILY, description="Правило периодичности")
    frequency_days: list[WeekdayIndex] = Field(
        default_factory=list,
        description="Дни недели для weekly / custom (0 - воскресенье .. 6 - суббота)",
    )
    frequency_interval_days: int = Field(1, ge=1, description="Интервал в днях для interval")

    @model_validator(mode="after")
    def normalize_rules(self) -> "HabitRulesSchema":
        if self.habit_type == HabitType.BOOLEAN:
            self.target_count = 1

        if self.frequency_type in WEEKDAY_FREQUENCIES:
            if not self.frequency_days:
                raise ValueError("Для периодичности weekly / custom нужно выбрать хотя бы один день недели.")
            self.frequency_days = sorted(set(self.frequency_days))
        else:
            self.frequency_days = []

        if self.frequency_type != FrequencyType.INTERVAL:
            self.frequency_interval_days = 1

        return self


def strip_habit_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Название привычки не может быть пустым.")
    return value


def strip_description(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class HabitSchemaCreate(HabitRulesSchema):
    """Схема для создания новой привычки."""

    # user_id берется из токена аутентифицированного пользователя на стороне сервера
    name: str = Field(..., min_length=1, max_length=255, description="Название привычки")
    color: str = Field("#3B82F6", pattern=COLOR_PATTERN, description="Цвет привычки (#RRGGBB)")
    description: str | None = Field(None, description="Описание привычки (может отсутствовать)")
    difficulty_level: DifficultyLevel = Field(DifficultyLevel.MEDIUM, description="Сложность привычки")
    category_id: int | None = Field(None, gt=0, description="ID категории (может отсутствовать)")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return strip_habit_name(value)

    @field_validator("description")
    @classmethod
    def empty_description_to_none(cls, value: str | None) -> str | None:
        return strip_description(value)


class HabitSchemaUpdate(BaseSchema):
    """
    Схема для обновления существующей привычки.
    Все поля опциональны; инварианты периодичности проверяются сервисом на итоговом состоянии.
    """

    name: str | None = Field(None, min_length=1, max_length=255, description="Новое название привычки")
    color: str | None = Field(None, pattern=COLOR_PATTERN, description="Новый цвет привычки")
    description: str | None = Field(None, description="Новое описание привычки")
    habit_type: HabitType | None = Field(None, description="Новый тип привычки")
    target_count: int | None = Field(None, ge=1, description="Новое целевое значение счетчика")
    frequency_type: FrequencyType | None = Field(None, description="Новое правило периодичности")
    frequency_days: list[WeekdayIndex] | None = Field(None, description="Новые дни недели")
    frequency_interval_days: int | None = Field(None, ge=1, description="Новый интервал в днях")
    difficulty_level: DifficultyLevel | None = Field(None, description="Новая сложность")
    category_id: int | None = Field(None, gt=0, description="Новая категория")
    # is_active меняется через отдельные эндпоинты архивации / восстановления

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str | None) -> str | None:
        # null для name означает "не менять" и отбрасывается сервисом
        if value is None:
            return None
        return strip_habit_name(value)

    @field_validator("description")
    @classmethod
    def empty_description_to_none(cls, value: str | None) -> str | None:
        return strip_description(value)


class HabitSchemaRead(BaseSchema):
    """Схема для чтения данных привычки (ответа API)."""

    id: int = Field(..., description="ID привычки")
    user_id: str = Field(..., description="ID пользователя, которому принадлежит привычка")
    name: str
    color: str
    description: str | None = None
    habit_type: HabitType
    target_count: int
    frequency_type: FrequencyType
    frequency_days: list[int]
    frequency_interval_days: int
    difficulty_level: DifficultyLevel
    category_id: int | None = None
    is_active: bool = Field(..., description="False - привычка в архиве")
    created_at: datetime = Field(..., description="Время создания привычки")
    updated_at: datetime = Field(..., description="Время последнего обновления привычки")


class HabitSchemaReadWithLogs(HabitSchemaRead):
    """Привычка с записями за запрошенный период и серией выполнений."""

    logs: list[HabitLogSchemaRead] = Field(default_factory=list)
    streak: HabitStreakSchemaRead | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def stats(self) -> HabitStatsSchemaRead:
        """Выполнено / всего / процент по записям за период."""
        habit_stats = get_habit_stats(self.logs)
        return HabitStatsSchemaRead(
            completed=habit_stats.completed, total=habit_stats.total, percentage=habit_stats.percentage
        )

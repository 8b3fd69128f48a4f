"""Модель SQLAlchemy для Habit (Привычка)."""

from typing import TYPE_CHECKING

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as SqlEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .enums import DifficultyLevel, FrequencyType, HabitType

if TYPE_CHECKING:  # pragma: no cover
    from .habit_category import HabitCategory
    from .habit_log import HabitLog
    from .habit_streak import HabitStreak


def _enum_values(enum_cls: type) -> list[str]:
    # Храним в БД значения ('boolean'), а не имена ('BOOLEAN') членов перечисления
    return [member.value for member in enum_cls]


class Habit(Base):
    """
    Представляет привычку пользователя.

    Attributes:
        id: Первичный ключ, идентификатор привычки (унаследован от Base).
        user_id: Непрозрачный идентификатор владельца (subject провайдера идентификации).
        name: Название привычки.
        color: Цвет привычки в формате #RRGGBB.
        habit_type: Тип привычки (boolean / counter).
        target_count: Целевое значение счетчика (>= 1, для boolean всегда 1).
        frequency_type: Правило периодичности (daily / weekly / interval / custom).
        frequency_days: Дни недели (0 - воскресенье .. 6 - суббота) для weekly / custom.
        frequency_interval_days: Интервал в днях для interval.
        difficulty_level: Сложность (easy / medium / hard).
        category_id: Внешний ключ на категорию (опционально).
        description: Описание привычки (опционально).
        is_active: Флаг активности (False - привычка в архиве).
        logs: Записи о выполнении по дням.
        streak: Денормализованная серия выполнений.
        category: Категория привычки.
    """

    __tablename__ = "habits"

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[str] = mapped_column(String(7), default="#3B82F6", nullable=False)
    habit_type: Mapped[HabitType] = mapped_column(
        SqlEnum(HabitType, name="habit_type_enum", values_callable=_enum_values),
        default=HabitType.BOOLEAN,
        nullable=False,
    )
    target_count: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    frequency_type: Mapped[FrequencyType] = mapped_column(
        SqlEnum(FrequencyType, name="frequency_type_enum", values_callable=_enum_values),
        default=FrequencyType.DAILY,
        nullable=False,
    )
    frequency_days: Mapped[list[int]] = mapped_column(JSON, default=list, nullable=False)
    frequency_interval_days: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    difficulty_level: Mapped[DifficultyLevel] = mapped_column(
        SqlEnum(DifficultyLevel, name="difficulty_level_enum", values_callable=_enum_values),
        default=DifficultyLevel.MEDIUM,
        nullable=False,
    )
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("habit_categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    description: Mapped[str | None] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(default=True, nullable=False, index=True)

    # Связи
    logs: Mapped[list["HabitLog"]] = relationship(
        back_populates="habit", cascade="all, delete-orphan", passive_deletes=True
    )
    streak: Mapped["HabitStreak | None"] = relationship(
        back_populates="habit", cascade="all, delete-orphan", passive_deletes=True, uselist=False
    )
    category: Mapped["HabitCategory | None"] = relationship(back_populates="habits")

    __table_args__ = (
        CheckConstraint("target_count >= 1", name="target_count_positive"),
        CheckConstraint("frequency_interval_days >= 1", name="interval_days_positive"),
    )

"""Модель SQLAlchemy для HabitLog (Запись о выполнении привычки за день)."""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:  # pragma: no cover
    from .habit import Habit


class HabitLog(Base):
    """
    Представляет результат привычки в конкретный день.

    Attributes:
        id: Первичный ключ (унаследован от Base).
        habit_id: Внешний ключ, связывающий запись с привычкой.
        log_date: Календарная дата записи.
        done: Выполнена ли привычка в этот день.
        current_count: Текущее значение счетчика (>= 0).
        completion_percentage: Процент выполнения (0..100), хранится для удобства запросов.
        notes: Заметка (опционально).
        habit: Связь с привычкой.
    """

    __tablename__ = "habit_logs"

    habit_id: Mapped[int] = mapped_column(ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True)
    log_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    done: Mapped[bool] = mapped_column(default=False, nullable=False)
    current_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    completion_percentage: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    # Связи
    habit: Mapped["Habit"] = relationship(back_populates="logs")

    # Одна запись на привычку за день
    __table_args__ = (
        UniqueConstraint("habit_id", "log_date", name="uq_habit_log_per_day"),
        CheckConstraint("current_count >= 0", name="current_count_non_negative"),
        CheckConstraint("completion_percentage BETWEEN 0 AND 100", name="completion_percentage_range"),
    )

"""Модель SQLAlchemy для HabitStreak (Серия выполнений привычки)."""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:  # pragma: no cover
    from .habit import Habit


class HabitStreak(Base):
    """
    Денормализованный агрегат серий выполнения привычки (одна строка на привычку).

    Пересчитывается сервисом после каждого изменения записей о выполнении.

    Attributes:
        habit_id: Внешний ключ на привычку (уникальный).
        user_id: Владелец привычки.
        current_streak: Текущая серия подряд выполненных плановых дней.
        longest_streak: Максимальная серия за всю историю.
        last_completed_date: Дата последнего выполнения.
        streak_start_date: Дата начала текущей серии.
        total_completions: Общее количество выполненных дней.
    """

    __tablename__ = "habit_streaks"

    habit_id: Mapped[int] = mapped_column(
        ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    current_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    longest_streak: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_completed_date: Mapped[date | None] = mapped_column(Date)
    streak_start_date: Mapped[date | None] = mapped_column(Date)
    total_completions: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Связи
    habit: Mapped["Habit"] = relationship(back_populates="streak")

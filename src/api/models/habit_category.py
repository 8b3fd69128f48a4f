"""Модель SQLAlchemy для HabitCategory (Категория привычек)."""

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

if TYPE_CHECKING:  # pragma: no cover
    from .habit import Habit


class HabitCategory(Base):
    """
    Категория привычек.

    Системные категории (`is_system=True`) общие для всех и не имеют владельца (`user_id` = None).
    """

    __tablename__ = "habit_categories"

    user_id: Mapped[str | None] = mapped_column(String(64), index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    color: Mapped[str] = mapped_column(String(7), default="#6B7280", nullable=False)
    icon: Mapped[str] = mapped_column(String(50), default="tag", nullable=False)
    is_system: Mapped[bool] = mapped_column(default=False, nullable=False)

    # Связи
    habits: Mapped[list["Habit"]] = relationship(back_populates="category")

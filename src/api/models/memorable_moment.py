"""Модель SQLAlchemy для MemorableMoment (Запоминающийся момент дня)."""

from datetime import date

from sqlalchemy import Date, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class MemorableMoment(Base):
    """Запись в дневнике: свободный текст, привязанный к дате. С прогрессом привычек не связана."""

    __tablename__ = "memorable_moments"

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    moment_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)

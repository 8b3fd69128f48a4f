"""Модель SQLAlchemy для SleepLog (Запись о сне)."""

from datetime import date

from sqlalchemy import CheckConstraint, Date, Float, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class SleepLog(Base):
    """Количество часов сна пользователя за ночь, отнесенную к дате `log_date`."""

    __tablename__ = "sleep_logs"

    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    log_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    hours: Mapped[float] = mapped_column(Float, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "log_date", name="uq_sleep_log_per_day"),
        CheckConstraint("hours >= 0 AND hours <= 24", name="hours_range"),
    )

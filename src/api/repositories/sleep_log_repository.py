"""Репозиторий для работы с моделью SleepLog."""

from datetime import date
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.logging import api_log as log
from src.api.models import SleepLog
from src.api.schemas import SleepLogSchemaUpsert

from .base_repository import BaseRepository


class SleepLogRepository(BaseRepository[SleepLog, SleepLogSchemaUpsert, SleepLogSchemaUpsert]):
    """Репозиторий записей о сне (одна запись на пользователя и дату)."""

    async def get_by_user_and_date(self, db_session: AsyncSession, *, user_id: str, log_date: date) -> SleepLog | None:
        return await self.get_by_filter_first_or_none(
            db_session,
            self.model.user_id == user_id,
            self.model.log_date == log_date,
        )

    async def get_by_user_in_range(
        self, db_session: AsyncSession, *, user_id: str, start_date: date, end_date: date
    ) -> Sequence[SleepLog]:
        """Записи о сне пользователя за период (включительно) по возрастанию даты."""
        return await self.get_multi_by_filter(
            db_session,
            self.model.user_id == user_id,
            self.model.log_date.between(start_date, end_date),
            order_by=[self.model.log_date.asc()],
        )

    async def upsert_sleep_log(
        self, db_session: AsyncSession, *, user_id: str, log_date: date, sleep_in: SleepLogSchemaUpsert
    ) -> SleepLog:
        """Создает запись о сне за дату или обновляет количество часов в существующей."""
        existing = await self.get_by_user_and_date(db_session, user_id=user_id, log_date=log_date)

        if existing:
            log.debug(f"Обновление записи о сне (ID: {existing.id}) на {log_date}.")
            return await self.update(db_session, db_obj=existing, obj_in=sleep_in)

        return await self.create(db_session, obj_in=sleep_in, user_id=user_id, log_date=log_date)

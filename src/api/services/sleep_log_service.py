"""Сервис для работы с записями о сне."""

from datetime import date
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.exceptions import BadRequestException, NotFoundException
from src.api.core.logging import api_log as log
from src.api.models import SleepLog
from src.api.repositories import SleepLogRepository
from src.api.schemas import Identity, SleepLogSchemaUpsert
from src.api.utils.date_utils import get_today_date, month_bounds
from src.api.utils.progress import is_date_mutable

from .base_service import BaseService


class SleepLogService(BaseService[SleepLog, SleepLogRepository, SleepLogSchemaUpsert, SleepLogSchemaUpsert]):
    """Сервис записей о сне: одна запись на пользователя и дату."""

    def __init__(self, sleep_repository: SleepLogRepository):
        super().__init__(repository=sleep_repository)

    async def upsert_sleep_log(
        self, db_session: AsyncSession, *, log_date: date, sleep_in: SleepLogSchemaUpsert, identity: Identity
    ) -> SleepLog:
        """
        Создает или обновляет запись о сне за дату.

        Raises:
            BadRequestException: Если дата в будущем.
        """
        if not is_date_mutable(log_date, get_today_date(identity.timezone)):
            raise BadRequestException(
                message="Нельзя записать сон на будущую дату.",
                error_type="future_date",
                loc=["path", "log_date"],
            )

        try:
            sleep_log = await self.repository.upsert_sleep_log(
                db_session, user_id=identity.user_id, log_date=log_date, sleep_in=sleep_in
            )
            await db_session.commit()

        except Exception as exc:
            await db_session.rollback()
            log.opt(exception=exc).error("Ошибка при сохранении записи о сне на {}: {}", log_date, exc)
            raise exc

        log.info(f"Сон пользователя {identity.user_id} на {log_date}: {sleep_in.hours} ч.")
        return sleep_log

    async def get_sleep_logs_for_month(
        self, db_session: AsyncSession, *, month: date, identity: Identity
    ) -> Sequence[SleepLog]:
        start_date, end_date = month_bounds(month)
        return await self.repository.get_by_user_in_range(
            db_session, user_id=identity.user_id, start_date=start_date, end_date=end_date
        )

    async def delete_sleep_log(self, db_session: AsyncSession, *, log_date: date, identity: Identity) -> None:
        """
        Raises:
            NotFoundException: Если записи о сне за дату нет.
        """
        sleep_log = await self.repository.get_by_user_and_date(db_session, user_id=identity.user_id, log_date=log_date)

        if not sleep_log:
            raise NotFoundException(message=f"Запись о сне на {log_date} не найдена.", error_type="sleeplog_not_found")

        await self.delete(db_session, db_obj=sleep_log)

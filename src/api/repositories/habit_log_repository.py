"""Репозиторий для работы с моделью HabitLog."""

from datetime import date
from typing import Sequence

from sqlalchemy import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.logging import api_log as log
from src.api.models import HabitLog
from src.api.schemas import BaseSchema
from src.api.utils.progress import HabitProgress

from .base_repository import BaseRepository


class HabitLogRepository(BaseRepository[HabitLog, BaseSchema, BaseSchema]):
    """
    Репозиторий для записей о выполнении привычек.

    Запись за день уникальна по паре (habit_id, log_date).
    """

    async def get_log_by_habit_id_and_date(
        self, db_session: AsyncSession, *, habit_id: int, log_date: date
    ) -> HabitLog | None:
        """
        Получает запись о выполнении привычки по ID привычки и дате.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.
            log_date (date): Дата записи.

        Returns:
            HabitLog | None: Экземпляр записи или None.
        """
        log.debug(f"Получение записи для привычки ID: {habit_id} на дату: {log_date}")
        return await self.get_by_filter_first_or_none(
            db_session,
            self.model.habit_id == habit_id,
            self.model.log_date == log_date,
        )

    async def get_logs_by_habit_id(
        self,
        db_session: AsyncSession,
        *,
        habit_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Sequence[HabitLog]:
        """
        Получает записи привычки, опционально ограниченные периодом, по возрастанию даты.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.
            start_date (date | None): Начало периода (включительно).
            end_date (date | None): Конец периода (включительно).
        """
        filters: list[ColumnElement[bool]] = [self.model.habit_id == habit_id]
        if start_date is not None:
            filters.append(self.model.log_date >= start_date)
        if end_date is not None:
            filters.append(self.model.log_date <= end_date)

        return await self.get_multi_by_filter(db_session, *filters, order_by=[self.model.log_date.asc()])

    async def upsert_log(
        self,
        db_session: AsyncSession,
        *,
        habit_id: int,
        log_date: date,
        progress: HabitProgress,
    ) -> HabitLog:
        """
        Создает запись за день или обновляет существующую значениями прогресса.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.
            log_date (date): Дата записи.
            progress (HabitProgress): Вычисленный прогресс.

        Returns:
            HabitLog: Созданная или обновленная запись.
        """
        values = self._progress_values(progress)

        existing = await self.get_log_by_habit_id_and_date(db_session, habit_id=habit_id, log_date=log_date)

        if existing:
            log.debug(f"Обновление записи (ID: {existing.id}) привычки ID: {habit_id} на {log_date}: {values}")
            return await self.update(db_session, db_obj=existing, obj_in=values)

        log.debug(f"Создание записи привычки ID: {habit_id} на {log_date}: {values}")
        return await self.create(db_session, obj_in=values, habit_id=habit_id, log_date=log_date)

    async def update_log_progress(
        self, db_session: AsyncSession, *, db_obj: HabitLog, progress: HabitProgress
    ) -> HabitLog:
        """Записывает пересчитанный прогресс в существующую запись."""
        return await self.update(db_session, db_obj=db_obj, obj_in=self._progress_values(progress))

    @staticmethod
    def _progress_values(progress: HabitProgress) -> dict[str, int | bool]:
        return {
            "done": progress.done,
            "current_count": progress.count,
            "completion_percentage": progress.percentage,
        }

"""Репозиторий для работы с моделью Habit."""

from datetime import date
from typing import Sequence

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.api.core.logging import api_log as log
from src.api.models import Habit, HabitLog
from src.api.schemas import HabitSchemaCreate, HabitSchemaUpdate

from .base_repository import BaseRepository


class HabitRepository(BaseRepository[Habit, HabitSchemaCreate, HabitSchemaUpdate]):
    """
    Репозиторий для выполнения CRUD-операций с моделью Habit.

    Наследует общие методы от BaseRepository и содержит специфичные для Habit методы.
    """

    async def create_habit(self, db_session: AsyncSession, *, habit_in: HabitSchemaCreate, user_id: str) -> Habit:
        """
        Создает новую привычку для указанного пользователя.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_in (HabitSchemaCreate): Провалидированные данные привычки.
            user_id (str): ID пользователя из токена.

        Returns:
            Habit: Созданная привычка.
        """
        return await self.create(db_session, obj_in=habit_in, user_id=user_id)

    async def get_habit_by_id_for_update(self, db_session: AsyncSession, *, habit_id: int) -> Habit | None:
        """
        Получает привычку по ID и блокирует строку до конца текущей транзакции (SELECT ... FOR UPDATE).

        Так два одновременных изменения отметок одной привычки выполняются последовательно.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.

        Returns:
            Habit | None: Экземпляр привычки или None.
        """
        statement = select(self.model).where(self.model.id == habit_id).with_for_update()
        result = await db_session.execute(statement)
        habit = result.scalar_one_or_none()

        status = "найдена" if habit else "не найдена"
        log.debug(f"Привычка (ID {habit_id}) для обновления {status}.")

        return habit

    async def get_habits_with_logs_by_user_id(
        self,
        db_session: AsyncSession,
        *,
        user_id: str,
        start_date: date,
        end_date: date,
        active_only: bool = False,
    ) -> Sequence[Habit]:
        """
        Получает привычки пользователя с записями за период [start_date, end_date] и серией.

        Записи и серия подгружаются жадно (selectinload), записи ограничены периодом.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            user_id (str): ID пользователя.
            start_date (date): Начало периода (включительно).
            end_date (date): Конец периода (включительно).
            active_only (bool): Если True, возвращает только активные привычки.

        Returns:
            Sequence[Habit]: Привычки по дате создания (сначала старые).
        """
        filters: list[ColumnElement[bool]] = [self.model.user_id == user_id]
        if active_only:
            filters.append(self.model.is_active.is_(True))

        statement = (
            select(self.model)
            .where(*filters)
            .options(
                selectinload(self.model.logs.and_(HabitLog.log_date.between(start_date, end_date))),
                selectinload(self.model.streak),
            )
            .order_by(self.model.created_at.asc(), self.model.id.asc())
            # Коллекция logs могла быть загружена ранее в этой сессии за другой период
            .execution_options(populate_existing=True)
        )

        result = await db_session.execute(statement)
        habits = result.scalars().all()

        log.debug(f"Найдено {len(habits)} привычек пользователя {user_id} с записями за {start_date}..{end_date}.")
        return habits

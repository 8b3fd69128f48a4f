"""Сервис для работы с отметками о выполнении привычек и их сериями."""

from datetime import date
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.exceptions import BadRequestException, NotFoundException
from src.api.core.logging import api_log as log
from src.api.models import Habit, HabitLog, HabitStreak, HabitType
from src.api.repositories import HabitLogRepository, HabitRepository, HabitStreakRepository
from src.api.schemas import BaseSchema, HabitProgressSchemaRead, HabitStreakSchemaRead, Identity
from src.api.utils.date_utils import get_today_date
from src.api.utils.progress import (
    HabitProgress,
    get_habit_progress,
    increment_progress,
    is_date_mutable,
    toggle_progress,
)
from src.api.utils.streaks import compute_streak

from .base_service import BaseService


class HabitLogService(BaseService[HabitLog, HabitLogRepository, BaseSchema, BaseSchema]):
    """
    Сервис для управления отметками о выполнении привычек (HabitLog).

    Каждое изменение отметки выполняется в одной транзакции:
    запись за день (создание или обновление) и пересчет серии привычки (HabitStreak).
    """

    def __init__(
        self,
        log_repository: HabitLogRepository,
        habit_repository: HabitRepository,
        streak_repository: HabitStreakRepository,
    ):
        super().__init__(repository=log_repository)
        self.habit_repository = habit_repository
        self.streak_repository = streak_repository

    async def _get_habit_for_user(
        self,
        db_session: AsyncSession,
        *,
        habit_id: int,
        identity: Identity,
        for_update: bool = False,
    ) -> Habit:
        """
        Вспомогательный метод для получения привычки пользователя.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_id (int): ID привычки.
            identity (Identity): Аутентифицированный пользователь.
            for_update (bool): Блокировать ли строку привычки до конца транзакции.

        Raises:
            NotFoundException: Если привычка не найдена.
            ForbiddenException: Если привычка не принадлежит пользователю.
        """
        if for_update:
            habit = await self.habit_repository.get_habit_by_id_for_update(db_session, habit_id=habit_id)
        else:
            habit = await self.habit_repository.get_by_id(db_session, obj_id=habit_id)

        if not habit:
            raise NotFoundException(message=f"Привычка с ID {habit_id} не найдена.", error_type="habit_not_found")

        self._check_ownership(habit, identity)
        return habit

    @staticmethod
    def _check_habit_active(habit: Habit) -> None:
        """
        Raises:
            BadRequestException: Если привычка в архиве.
        """
        if not habit.is_active:
            log.warning(f"Попытка изменить отметку архивной привычки ID: {habit.id}.")
            raise BadRequestException(
                message=f"Привычка '{habit.name}' не активна (в архиве).",
                error_type="habit_not_active",
            )

    @staticmethod
    def _check_habit_type(habit: Habit, expected: HabitType) -> None:
        """
        Raises:
            BadRequestException: Если операция не подходит для типа привычки.
        """
        if habit.habit_type != expected:
            operation = "переключение" if expected == HabitType.BOOLEAN else "изменение счетчика"
            raise BadRequestException(
                message=f"Операция '{operation}' недоступна для привычки типа '{habit.habit_type.value}'.",
                error_type="habit_type_mismatch",
            )

    @staticmethod
    def habit_anchor_date(habit: Habit) -> date:
        """Опорная дата интервальной привычки: дата создания."""
        return habit.created_at.date()

    @staticmethod
    def _progress_response(
        habit: Habit, log_date: date, progress: HabitProgress, *, applied: bool
    ) -> HabitProgressSchemaRead:
        return HabitProgressSchemaRead(
            habit_id=habit.id,
            log_date=log_date,
            count=progress.count,
            target=progress.target,
            percentage=progress.percentage,
            done=progress.done,
            applied=applied,
        )

    async def _recalculate_streak(
        self, db_session: AsyncSession, *, habit: Habit, identity: Identity, today: date
    ) -> HabitStreak:
        """Пересчитывает серию привычки по всем ее записям и сохраняет (в текущей транзакции)."""
        logs = await self.repository.get_logs_by_habit_id(db_session, habit_id=habit.id)

        snapshot = compute_streak(habit, logs, today=today, anchor=self.habit_anchor_date(habit))
        log.debug(f"Пересчитана серия привычки ID: {habit.id}: {snapshot}")

        return await self.streak_repository.upsert_streak(
            db_session, habit_id=habit.id, user_id=identity.user_id, snapshot=snapshot
        )

    async def rederive_habit_progress(
        self, db_session: AsyncSession, *, habit: Habit, identity: Identity
    ) -> HabitStreak:
        """
        Пересчитывает сохраненный прогресс всех записей привычки и ее серию.

        Вызывается после изменения типа, цели или периодичности привычки.
        Не фиксирует транзакцию: commit выполняет вызывающий сервис.
        """
        logs = await self.repository.get_logs_by_habit_id(db_session, habit_id=habit.id)

        for habit_log in logs:
            progress = get_habit_progress(habit, habit_log)
            await self.repository.update_log_progress(db_session, db_obj=habit_log, progress=progress)

        log.debug(f"Пересчитан прогресс {len(logs)} записей привычки ID: {habit.id}")
        return await self._recalculate_streak(
            db_session, habit=habit, identity=identity, today=get_today_date(identity.timezone)
        )

    async def _apply_progress(
        self,
        db_session: AsyncSession,
        *,
        habit: Habit,
        log_date: date,
        progress: HabitProgress,
        identity: Identity,
        today: date,
    ) -> HabitProgressSchemaRead:
        """
        Сохраняет прогресс за день и пересчитывает серию одной транзакцией.

        Управляет транзакцией: commit в случае успеха или rollback при ошибке.
        """
        try:
            await self.repository.upsert_log(db_session, habit_id=habit.id, log_date=log_date, progress=progress)
            await self._recalculate_streak(db_session, habit=habit, identity=identity, today=today)

            await db_session.commit()

        except Exception as exc:
            await db_session.rollback()
            log.opt(exception=exc).error(
                "Ошибка при сохранении отметки привычки ID: {} на {}: {}", habit.id, log_date, exc
            )
            raise exc

        log.info(
            f"Отметка привычки ID: {habit.id} на {log_date} сохранена: "
            f"{progress.count}/{progress.target} ({progress.percentage}%)."
        )
        return self._progress_response(habit, log_date, progress, applied=True)

    async def get_progress(
        self, db_session: AsyncSession, *, habit_id: int, log_date: date, identity: Identity
    ) -> HabitProgressSchemaRead:
        """Прогресс привычки за день (если записи нет - нулевой)."""
        habit = await self._get_habit_for_user(db_session, habit_id=habit_id, identity=identity)
        habit_log = await self.repository.get_log_by_habit_id_and_date(db_session, habit_id=habit.id, log_date=log_date)

        progress = get_habit_progress(habit, habit_log)
        return self._progress_response(habit, log_date, progress, applied=True)

    async def toggle_habit(
        self, db_session: AsyncSession, *, habit_id: int, log_date: date, identity: Identity
    ) -> HabitProgressSchemaRead:
        """
        Переключает отметку булевой привычки за день.

        Для даты в будущем ничего не записывается: возвращается текущий прогресс с `applied=False`.

        Raises:
            BadRequestException: Если привычка не булева или находится в архиве.
        """
        habit = await self._get_habit_for_user(db_session, habit_id=habit_id, identity=identity, for_update=True)
        self._check_habit_type(habit, HabitType.BOOLEAN)
        self._check_habit_active(habit)

        habit_log = await self.repository.get_log_by_habit_id_and_date(db_session, habit_id=habit.id, log_date=log_date)
        today = get_today_date(identity.timezone)

        if not is_date_mutable(log_date, today):
            log.info(f"Отметка привычки ID: {habit.id} на будущую дату {log_date} проигнорирована.")
            return self._progress_response(habit, log_date, get_habit_progress(habit, habit_log), applied=False)

        return await self._apply_progress(
            db_session,
            habit=habit,
            log_date=log_date,
            progress=toggle_progress(habit, habit_log),
            identity=identity,
            today=today,
        )

    async def increment_habit(
        self, db_session: AsyncSession, *, habit_id: int, log_date: date, delta: int, identity: Identity
    ) -> HabitProgressSchemaRead:
        """
        Изменяет счетчик привычки за день на `delta` (значение не опускается ниже 0).

        Изменение не применяется (`applied=False`), если дата в будущем или
        уменьшается уже нулевой счетчик.

        Raises:
            BadRequestException: Если привычка не счетчик или находится в архиве.
        """
        habit = await self._get_habit_for_user(db_session, habit_id=habit_id, identity=identity, for_update=True)
        self._check_habit_type(habit, HabitType.COUNTER)
        self._check_habit_active(habit)

        habit_log = await self.repository.get_log_by_habit_id_and_date(db_session, habit_id=habit.id, log_date=log_date)
        today = get_today_date(identity.timezone)
        new_progress = increment_progress(habit, habit_log, delta)

        if not is_date_mutable(log_date, today) or new_progress is None:
            log.info(f"Изменение счетчика привычки ID: {habit.id} на {log_date} (delta={delta}) не применено.")
            return self._progress_response(habit, log_date, get_habit_progress(habit, habit_log), applied=False)

        return await self._apply_progress(
            db_session,
            habit=habit,
            log_date=log_date,
            progress=new_progress,
            identity=identity,
            today=today,
        )

    async def get_logs_for_habit(
        self,
        db_session: AsyncSession,
        *,
        habit_id: int,
        identity: Identity,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Sequence[HabitLog]:
        """
        Записи привычки за период.

        Raises:
            BadRequestException: Если начало периода позже конца.
        """
        if start_date and end_date and start_date > end_date:
            raise BadRequestException(
                message="Дата начала периода не может быть позже даты окончания.",
                error_type="invalid_date_range",
                loc=["query", "start_date"],
            )

        habit = await self._get_habit_for_user(db_session, habit_id=habit_id, identity=identity)
        return await self.repository.get_logs_by_habit_id(
            db_session, habit_id=habit.id, start_date=start_date, end_date=end_date
        )

    async def get_streak(self, db_session: AsyncSession, *, habit_id: int, identity: Identity) -> HabitStreakSchemaRead:
        """Сохраненная серия привычки (нулевая, если отметок еще не было)."""
        habit = await self._get_habit_for_user(db_session, habit_id=habit_id, identity=identity)
        streak = await self.streak_repository.get_by_habit_id(db_session, habit_id=habit.id)

        if streak is None:
            return HabitStreakSchemaRead(habit_id=habit.id)
        return HabitStreakSchemaRead.model_validate(streak)

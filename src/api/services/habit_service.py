"""Сервис для работы с привычками."""

from datetime import date
from typing import Any, Sequence

from fastapi import status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.exceptions import BadRequestException, NotFoundException
from src.api.core.logging import api_log as log
from src.api.models import Habit
from src.api.repositories import CategoryRepository, HabitRepository
from src.api.schemas import HabitRulesSchema, HabitSchemaCreate, HabitSchemaUpdate, Identity
from src.api.utils.date_utils import month_bounds

from .base_service import BaseService
from .habit_log_service import HabitLogService

# Поля обновления, которые могут быть явно сброшены в null
NULLABLE_FIELDS = frozenset({"description", "category_id"})

# Поля, от которых зависит сохраненный прогресс записей и серия
RULE_FIELDS = tuple(HabitRulesSchema.model_fields.keys())


class HabitService(BaseService[Habit, HabitRepository, HabitSchemaCreate, HabitSchemaUpdate]):
    """
    Сервис для управления привычками.

    Отвечает за создание, чтение, обновление, архивацию и удаление привычек пользователя.
    """

    def __init__(
        self,
        habit_repository: HabitRepository,
        category_repository: CategoryRepository,
        habit_log_service: HabitLogService,
    ):
        """
        Args:
            habit_repository (HabitRepository): Репозиторий для работы с привычками.
            category_repository (CategoryRepository): Репозиторий категорий (для проверки category_id).
            habit_log_service (HabitLogService): Сервис записей (пересчет прогресса при смене правил).
        """
        super().__init__(repository=habit_repository)
        self.category_repository = category_repository
        self.habit_log_service = habit_log_service

    async def _check_category(self, db_session: AsyncSession, category_id: int | None, identity: Identity) -> None:
        """
        Проверяет, что категория существует и доступна пользователю.

        Raises:
            NotFoundException: Если категория не найдена среди системных и собственных категорий.
        """
        if category_id is None:
            return

        category = await self.category_repository.get_category_for_user(
            db_session, category_id=category_id, user_id=identity.user_id
        )
        if not category:
            raise NotFoundException(
                message=f"Категория с ID {category_id} не найдена.",
                error_type="habitcategory_not_found",
                loc=["body", "category_id"],
            )

    async def create_habit_for_user(
        self, db_session: AsyncSession, *, habit_in: HabitSchemaCreate, identity: Identity
    ) -> Habit:
        """
        Создает новую привычку для текущего пользователя.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            habit_in (HabitSchemaCreate): Провалидированные данные привычки.
            identity (Identity): Аутентифицированный пользователь.

        Returns:
            Habit: Созданная привычка.
        """
        await self._check_category(db_session, habit_in.category_id, identity)

        log.info(f"Создание привычки '{habit_in.name}' для пользователя {identity.user_id}")
        return await self.create(db_session, obj_in=habit_in, user_id=identity.user_id)

    async def get_habit_by_id_for_user(self, db_session: AsyncSession, *, habit_id: int, identity: Identity) -> Habit:
        """
        Получает привычку по ID, проверяя существует ли она и принадлежит ли текущему пользователю.

        Raises:
            NotFoundException: Если привычка не найдена.
            ForbiddenException: Если привычка не принадлежит пользователю.
        """
        return await self.get_by_id_for_user(db_session, obj_id=habit_id, identity=identity)

    async def get_habits_with_logs_for_user(
        self,
        db_session: AsyncSession,
        *,
        identity: Identity,
        month: date,
        active_only: bool = True,
    ) -> Sequence[Habit]:
        """
        Получает привычки пользователя вместе с записями за месяц и сериями.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            identity (Identity): Аутентифицированный пользователь.
            month (date): Любая дата внутри нужного месяца.
            active_only (bool): Если True, архивные привычки не возвращаются.
        """
        start_date, end_date = month_bounds(month)

        return await self.repository.get_habits_with_logs_by_user_id(
            db_session,
            user_id=identity.user_id,
            start_date=start_date,
            end_date=end_date,
            active_only=active_only,
        )

    def _merge_rules(self, habit: Habit, update_data: dict[str, Any]) -> dict[str, Any]:
        """
        Проверяет инварианты типа и периодичности на итоговом состоянии привычки.

        Returns:
            dict[str, Any]: Нормализованные значения полей периодичности.

        Raises:
            BadRequestException (422): Если итоговое состояние нарушает инварианты.
        """
        merged = {field: getattr(habit, field) for field in RULE_FIELDS}
        merged.update({field: value for field, value in update_data.items() if field in RULE_FIELDS})

        try:
            rules = HabitRulesSchema.model_validate(merged)
        except ValidationError as exc:
            log.info(f"Обновление привычки ID: {habit.id} отклонено: {exc.errors()}")
            raise BadRequestException(
                message="Некорректная комбинация типа и периодичности привычки.",
                error_type="invalid_habit_rules",
                loc=["body", "frequency_days"],
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            ) from exc

        return rules.model_dump()

    async def update_habit_for_user(
        self,
        db_session: AsyncSession,
        *,
        habit_id: int,
        habit_in: HabitSchemaUpdate,
        identity: Identity,
    ) -> Habit:
        """
        Частично обновляет привычку, проверяя, что она принадлежит текущему пользователю.

        Инварианты периодичности проверяются на результате слияния текущих значений с новыми.
        """
        habit = await self.get_habit_by_id_for_user(db_session, habit_id=habit_id, identity=identity)

        update_data = {
            field: value
            for field, value in habit_in.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }

        if "category_id" in update_data:
            await self._check_category(db_session, update_data["category_id"], identity)

        previous_rules = {field: getattr(habit, field) for field in RULE_FIELDS}
        rules = self._merge_rules(habit, update_data)
        update_data.update(rules)

        if rules == previous_rules:
            log.info(f"Обновление привычки ID: {habit_id} для пользователя {identity.user_id}")
            return await self.update(db_session, db_obj=habit, obj_in=update_data)

        log.info(f"Обновление правил привычки ID: {habit_id} для пользователя {identity.user_id}: {rules}")

        # Новые правила и пересчитанные записи с серией фиксируются одной транзакцией
        try:
            habit = await self.repository.update(db_session, db_obj=habit, obj_in=update_data)
            await self.habit_log_service.rederive_habit_progress(db_session, habit=habit, identity=identity)

            await db_session.commit()

        except Exception as exc:
            await db_session.rollback()
            log.opt(exception=exc).error("Ошибка при обновлении правил привычки ID: {}: {}", habit_id, exc)
            raise exc

        return habit

    async def set_habit_active_for_user(
        self, db_session: AsyncSession, *, habit_id: int, identity: Identity, is_active: bool
    ) -> Habit:
        """Архивирует (is_active=False) или восстанавливает привычку."""
        habit = await self.get_habit_by_id_for_user(db_session, habit_id=habit_id, identity=identity)

        if habit.is_active == is_active:
            return habit

        action = "Восстановление" if is_active else "Архивация"
        log.info(f"{action} привычки ID: {habit_id} пользователя {identity.user_id}")
        return await self.update(db_session, db_obj=habit, obj_in={"is_active": is_active})

    async def archive_habit_for_user(self, db_session: AsyncSession, *, habit_id: int, identity: Identity) -> Habit:
        return await self.set_habit_active_for_user(db_session, habit_id=habit_id, identity=identity, is_active=False)

    async def restore_habit_for_user(self, db_session: AsyncSession, *, habit_id: int, identity: Identity) -> Habit:
        return await self.set_habit_active_for_user(db_session, habit_id=habit_id, identity=identity, is_active=True)

    async def remove_habit_for_user(self, db_session: AsyncSession, *, habit_id: int, identity: Identity) -> None:
        """
        Удаляет привычку вместе с ее записями и серией, проверяя, что она принадлежит текущему пользователю.
        """
        habit = await self.get_habit_by_id_for_user(db_session, habit_id=habit_id, identity=identity)

        log.info(f"Удаление привычки ID: {habit_id} для пользователя {identity.user_id}")
        await self.delete(db_session, db_obj=habit)

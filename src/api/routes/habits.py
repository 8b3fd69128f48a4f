"""
Эндпоинты для управления привычками (Habits).
"""

from typing import Annotated, Sequence

from fastapi import APIRouter, Query, status

from src.api.core.dependencies import CurrentUser, DBSession, HabitSvc, MonthQuery
from src.api.models import Habit
from src.api.schemas import (
    HabitSchemaCreate,
    HabitSchemaRead,
    HabitSchemaReadWithLogs,
    HabitSchemaUpdate,
)

router = APIRouter(prefix="/habits", tags=["Habits"])


@router.post(
    "/",
    response_model=HabitSchemaRead,
    status_code=status.HTTP_201_CREATED,
    summary="Создание новой привычки",
    description="Создает новую привычку для пользователя.",
)
async def create_habit(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_service: HabitSvc,
    habit_in: HabitSchemaCreate,
) -> Habit:
    """
    Создает новую привычку для текущего пользователя.

    Args:
        db_session: Асинхронная сессия базы данных.
        current_user: Аутентифицированный пользователь.
        habit_service: Сервис для работы с привычками.
        habit_in: Данные привычки (название, тип, цель, периодичность и т.д.).

    Returns:
        Habit: Созданный объект привычки.
    """

    return await habit_service.create_habit_for_user(db_session, habit_in=habit_in, identity=current_user)


@router.get(
    "/",
    response_model=Sequence[HabitSchemaReadWithLogs],
    status_code=status.HTTP_200_OK,
    summary="Получение списка привычек пользователя с записями за месяц",
    description="Возвращает привычки (по умолчанию только активные) с записями о выполнении за месяц и сериями.",
)
async def get_habits(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_service: HabitSvc,
    month: MonthQuery,
    active_only: Annotated[bool, Query(description="Вернуть только активные привычки")] = True,
) -> Sequence[Habit]:
    """
    Получает привычки текущего пользователя с записями за месяц.

    Args:
        db_session: Асинхронная сессия базы данных.
        current_user: Аутентифицированный пользователь.
        habit_service: Сервис для работы с привычками.
        month: Первый день запрошенного месяца (параметр `month=YYYY-MM`).
        active_only: Фильтр: если True, возвращает только активные (не архивные) привычки.

    Returns:
        Sequence[Habit]: Привычки с подгруженными полями `logs` и `streak`.
    """

    return await habit_service.get_habits_with_logs_for_user(
        db_session, identity=current_user, month=month, active_only=active_only
    )


@router.get(
    "/{habit_id}",
    response_model=HabitSchemaRead,
    status_code=status.HTTP_200_OK,
    summary="Получение привычки по ID",
)
async def get_habit(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_service: HabitSvc,
    habit_id: int,
) -> Habit:
    """
    Возвращает привычку, если она принадлежит пользователю.

    Raises:
        NotFoundException: Если привычка не найдена.
        ForbiddenException: Если привычка принадлежит другому пользователю.
    """

    return await habit_service.get_habit_by_id_for_user(db_session, habit_id=habit_id, identity=current_user)


@router.patch(
    "/{habit_id}",
    response_model=HabitSchemaRead,
    status_code=status.HTTP_200_OK,
    summary="Обновление привычки по ID",
    description="Частично обновляет данные привычки (PATCH), если она принадлежит пользователю.",
)
async def update_habit(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_service: HabitSvc,
    habit_id: int,
    habit_in: HabitSchemaUpdate,
) -> Habit:
    """
    Частично обновляет данные существующей привычки.

    Args:
        db_session: Асинхронная сессия базы данных.
        current_user: Аутентифицированный пользователь.
        habit_service: Сервис для работы с привычками.
        habit_id: ID обновляемой привычки.
        habit_in: Объект с обновляемыми полями (все поля опциональны).

    Returns:
        Habit: Обновленный объект привычки.

    Raises:
        NotFoundException: Если привычка не найдена.
        ForbiddenException: Если привычка принадлежит другому пользователю.
        BadRequestException: Если итоговая периодичность некорректна (422).
    """

    return await habit_service.update_habit_for_user(
        db_session,
        habit_id=habit_id,
        habit_in=habit_in,
        identity=current_user,
    )


@router.post(
    "/{habit_id}/archive",
    response_model=HabitSchemaRead,
    status_code=status.HTTP_200_OK,
    summary="Архивация привычки",
)
async def archive_habit(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_service: HabitSvc,
    habit_id: int,
) -> Habit:
    """Переносит привычку в архив: она скрывается из активного списка, история сохраняется."""

    return await habit_service.archive_habit_for_user(db_session, habit_id=habit_id, identity=current_user)


@router.post(
    "/{habit_id}/restore",
    response_model=HabitSchemaRead,
    status_code=status.HTTP_200_OK,
    summary="Восстановление привычки из архива",
)
async def restore_habit(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_service: HabitSvc,
    habit_id: int,
) -> Habit:
    return await habit_service.restore_habit_for_user(db_session, habit_id=habit_id, identity=current_user)


@router.delete(
    "/{habit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удаление привычки по ID",
    description="Удаляет привычку, если она принадлежит пользователю.",
)
async def delete_habit(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_service: HabitSvc,
    habit_id: int,
) -> None:  # Возвращаем None, так как статус 204 No Content
    """
    Удаляет привычку вместе со всеми записями о выполнении и серией.

    Raises:
        NotFoundException: Если привычка не найдена.
        ForbiddenException: Если привычка принадлежит другому пользователю.
    """

    await habit_service.remove_habit_for_user(db_session, habit_id=habit_id, identity=current_user)

    return None  # Для статуса 204 тело ответа должно быть пустым

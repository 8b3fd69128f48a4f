"""
Эндпоинты для отметок о выполнении привычек (HabitLog) и серий.
"""

from datetime import date
from typing import Annotated, Sequence

from fastapi import APIRouter, Query, status

from src.api.core.dependencies import CurrentUser, DBSession, HabitLogSvc
from src.api.models import HabitLog
from src.api.schemas import (
    HabitLogIncrement,
    HabitLogSchemaRead,
    HabitProgressSchemaRead,
    HabitStreakSchemaRead,
)

router = APIRouter(prefix="/habits/{habit_id}", tags=["Habit Logs"])


@router.get(
    "/logs/",
    response_model=Sequence[HabitLogSchemaRead],
    status_code=status.HTTP_200_OK,
    summary="Получение записей о выполнении привычки",
)
async def get_habit_logs(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_log_service: HabitLogSvc,
    habit_id: int,
    start_date: Annotated[date | None, Query(description="Начало периода (YYYY-MM-DD)")] = None,
    end_date: Annotated[date | None, Query(description="Конец периода (YYYY-MM-DD)")] = None,
) -> Sequence[HabitLog]:
    """
    Возвращает записи привычки за период (по возрастанию даты).

    Args:
        db_session: Асинхронная сессия базы данных.
        current_user: Аутентифицированный пользователь.
        habit_log_service: Сервис отметок.
        habit_id: ID привычки.
        start_date: Начало периода включительно (опционально).
        end_date: Конец периода включительно (опционально).
    """

    return await habit_log_service.get_logs_for_habit(
        db_session, habit_id=habit_id, identity=current_user, start_date=start_date, end_date=end_date
    )


@router.get(
    "/logs/{log_date}/progress",
    response_model=HabitProgressSchemaRead,
    status_code=status.HTTP_200_OK,
    summary="Прогресс привычки за день",
)
async def get_habit_progress(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_log_service: HabitLogSvc,
    habit_id: int,
    log_date: date,
) -> HabitProgressSchemaRead:
    return await habit_log_service.get_progress(
        db_session, habit_id=habit_id, log_date=log_date, identity=current_user
    )


@router.post(
    "/logs/{log_date}/toggle",
    response_model=HabitProgressSchemaRead,
    status_code=status.HTTP_200_OK,
    summary="Переключение отметки булевой привычки",
    description="Отмечает булеву привычку выполненной за день или снимает отметку. Будущие даты не изменяются.",
)
async def toggle_habit(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_log_service: HabitLogSvc,
    habit_id: int,
    log_date: date,
) -> HabitProgressSchemaRead:
    """
    Переключает отметку булевой привычки за день.

    Returns:
        HabitProgressSchemaRead: Новый прогресс (или текущий с `applied=false` для будущей даты).

    Raises:
        BadRequestException: Если привычка не булева или в архиве.
    """

    return await habit_log_service.toggle_habit(
        db_session, habit_id=habit_id, log_date=log_date, identity=current_user
    )


@router.post(
    "/logs/{log_date}/increment",
    response_model=HabitProgressSchemaRead,
    status_code=status.HTTP_200_OK,
    summary="Изменение счетчика привычки",
    description="Увеличивает или уменьшает счетчик привычки за день на `delta`. Будущие даты не изменяются.",
)
async def increment_habit(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_log_service: HabitLogSvc,
    habit_id: int,
    log_date: date,
    increment_in: HabitLogIncrement,
) -> HabitProgressSchemaRead:
    """
    Изменяет счетчик привычки за день.

    Returns:
        HabitProgressSchemaRead: Новый прогресс; `applied=false`, если изменение не применено
        (будущая дата или уменьшение нулевого счетчика).

    Raises:
        BadRequestException: Если привычка не счетчик или в архиве.
    """

    return await habit_log_service.increment_habit(
        db_session, habit_id=habit_id, log_date=log_date, delta=increment_in.delta, identity=current_user
    )


@router.get(
    "/streak",
    response_model=HabitStreakSchemaRead,
    status_code=status.HTTP_200_OK,
    summary="Серия выполнения привычки",
)
async def get_habit_streak(
    db_session: DBSession,
    current_user: CurrentUser,
    habit_log_service: HabitLogSvc,
    habit_id: int,
) -> HabitStreakSchemaRead:
    return await habit_log_service.get_streak(db_session, habit_id=habit_id, identity=current_user)

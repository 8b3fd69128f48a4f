"""
Эндпоинты для памятных моментов.
"""

from typing import Annotated, Sequence

from fastapi import APIRouter, Query, status

from src.api.core.dependencies import CurrentUser, DBSession, MomentSvc
from src.api.models import MemorableMoment
from src.api.schemas import MomentSchemaCreate, MomentSchemaRead

router = APIRouter(prefix="/moments", tags=["Moments"])


@router.get(
    "/",
    response_model=Sequence[MomentSchemaRead],
    status_code=status.HTTP_200_OK,
    summary="Список памятных моментов",
    description="Возвращает моменты пользователя, сначала новые.",
)
async def get_moments(
    db_session: DBSession,
    current_user: CurrentUser,
    moment_service: MomentSvc,
    skip: Annotated[int, Query(ge=0, description="Количество записей для пропуска (пагинация)")] = 0,
    limit: Annotated[int, Query(ge=1, le=200, description="Максимальное количество записей (пагинация)")] = 100,
) -> Sequence[MemorableMoment]:
    return await moment_service.get_moments(db_session, identity=current_user, skip=skip, limit=limit)


@router.get(
    "/today",
    response_model=MomentSchemaRead | None,
    status_code=status.HTTP_200_OK,
    summary="Момент за сегодня",
    description="Последний момент за сегодня (по часовому поясу пользователя) или null.",
)
async def get_today_moment(
    db_session: DBSession,
    current_user: CurrentUser,
    moment_service: MomentSvc,
) -> MemorableMoment | None:
    return await moment_service.get_today_moment(db_session, identity=current_user)


@router.post(
    "/",
    response_model=MomentSchemaRead,
    status_code=status.HTTP_201_CREATED,
    summary="Добавление памятного момента",
)
async def add_moment(
    db_session: DBSession,
    current_user: CurrentUser,
    moment_service: MomentSvc,
    moment_in: MomentSchemaCreate,
) -> MemorableMoment:
    """
    Добавляет момент за сегодня.

    Raises:
        BadRequestException: Если текст пустой или слишком длинный.
    """

    return await moment_service.add_moment(db_session, moment_in=moment_in, identity=current_user)


@router.delete(
    "/{moment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удаление памятного момента",
)
async def delete_moment(
    db_session: DBSession,
    current_user: CurrentUser,
    moment_service: MomentSvc,
    moment_id: int,
) -> None:
    await moment_service.delete_moment(db_session, moment_id=moment_id, identity=current_user)

    return None

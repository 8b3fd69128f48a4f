"""
Эндпоинты для записей о сне.
"""

from datetime import date
from typing import Sequence

from fastapi import APIRouter, status

from src.api.core.dependencies import CurrentUser, DBSession, MonthQuery, SleepLogSvc
from src.api.models import SleepLog
from src.api.schemas import SleepLogSchemaRead, SleepLogSchemaUpsert

router = APIRouter(prefix="/sleep", tags=["Sleep"])


@router.get(
    "/",
    response_model=Sequence[SleepLogSchemaRead],
    status_code=status.HTTP_200_OK,
    summary="Записи о сне за месяц",
)
async def get_sleep_logs(
    db_session: DBSession,
    current_user: CurrentUser,
    sleep_service: SleepLogSvc,
    month: MonthQuery,
) -> Sequence[SleepLog]:
    return await sleep_service.get_sleep_logs_for_month(db_session, month=month, identity=current_user)


@router.put(
    "/{log_date}",
    response_model=SleepLogSchemaRead,
    status_code=status.HTTP_200_OK,
    summary="Запись количества часов сна за дату",
    description="Создает запись о сне за дату или обновляет существующую. Часы: 0..24, дата не в будущем.",
)
async def upsert_sleep_log(
    db_session: DBSession,
    current_user: CurrentUser,
    sleep_service: SleepLogSvc,
    log_date: date,
    sleep_in: SleepLogSchemaUpsert,
) -> SleepLog:
    """
    Сохраняет количество часов сна за дату.

    Raises:
        BadRequestException: Если дата в будущем.
    """

    return await sleep_service.upsert_sleep_log(
        db_session, log_date=log_date, sleep_in=sleep_in, identity=current_user
    )


@router.delete(
    "/{log_date}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удаление записи о сне за дату",
)
async def delete_sleep_log(
    db_session: DBSession,
    current_user: CurrentUser,
    sleep_service: SleepLogSvc,
    log_date: date,
) -> None:
    await sleep_service.delete_sleep_log(db_session, log_date=log_date, identity=current_user)

    return None

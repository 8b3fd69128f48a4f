"""
Эндпоинты статистики для дашборда.
"""

from fastapi import APIRouter, status

from src.api.core.dependencies import CurrentUser, DBSession, MonthQuery, StatsSvc
from src.api.schemas import MonthlyStatsSchemaRead
from src.api.utils.statistics import MonthlyStats

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get(
    "/monthly",
    response_model=MonthlyStatsSchemaRead,
    status_code=status.HTTP_200_OK,
    summary="Статистика за месяц",
    description=(
        "Выполнение по дням, разбивка по привычкам, распределение привычек по группам, "
        "сводные показатели и сводка по сну."
    ),
)
async def get_monthly_stats(
    db_session: DBSession,
    current_user: CurrentUser,
    stats_service: StatsSvc,
    month: MonthQuery,
) -> MonthlyStats:
    """
    Считает статистику активных привычек пользователя за месяц (`month=YYYY-MM`, по умолчанию текущий).
    """

    return await stats_service.get_monthly_stats(db_session, month=month, identity=current_user)

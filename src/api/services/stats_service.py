"""Сервис месячной статистики."""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.logging import api_log as log
from src.api.repositories import HabitRepository, SleepLogRepository
from src.api.schemas import Identity
from src.api.utils.date_utils import days_in_month, month_bounds
from src.api.utils.statistics import MonthlyStats, build_monthly_stats


class StatsService:
    """
    Собирает статистику дашборда за месяц: ряды по дням, разбивку по привычкам,
    распределение, сводные показатели и сводку по сну.

    Только чтение, транзакциями не управляет.
    """

    def __init__(self, habit_repository: HabitRepository, sleep_repository: SleepLogRepository):
        self.habit_repository = habit_repository
        self.sleep_repository = sleep_repository

    async def get_monthly_stats(self, db_session: AsyncSession, *, month: date, identity: Identity) -> MonthlyStats:
        start_date, end_date = month_bounds(month)

        habits = await self.habit_repository.get_habits_with_logs_by_user_id(
            db_session,
            user_id=identity.user_id,
            start_date=start_date,
            end_date=end_date,
            active_only=True,
        )
        sleep_logs = await self.sleep_repository.get_by_user_in_range(
            db_session, user_id=identity.user_id, start_date=start_date, end_date=end_date
        )

        log.debug(f"Статистика за {start_date:%Y-%m} для {identity.user_id}: {len(habits)} привычек.")
        return build_monthly_stats(
            start_date,
            habits,
            days_in_month(start_date),
            [sleep_log.hours for sleep_log in sleep_logs],
        )

"""Репозиторий для работы с моделью HabitStreak."""

from dataclasses import asdict

from sqlalchemy.ext.asyncio import AsyncSession

from src.api.models import HabitStreak
from src.api.schemas import BaseSchema
from src.api.utils.streaks import StreakSnapshot

from .base_repository import BaseRepository


class HabitStreakRepository(BaseRepository[HabitStreak, BaseSchema, BaseSchema]):
    """Репозиторий для серий привычек (одна строка на привычку)."""

    async def get_by_habit_id(self, db_session: AsyncSession, *, habit_id: int) -> HabitStreak | None:
        return await self.get_by_filter_first_or_none(db_session, self.model.habit_id == habit_id)

    async def upsert_streak(
        self,
        db_session: AsyncSession,
        *,
        habit_id: int,
        user_id: str,
        snapshot: StreakSnapshot,
    ) -> HabitStreak:
        """Записывает пересчитанные значения серий, создавая строку при необходимости."""
        values = asdict(snapshot)

        existing = await self.get_by_habit_id(db_session, habit_id=habit_id)
        if existing:
            return await self.update(db_session, db_obj=existing, obj_in=values)

        return await self.create(db_session, obj_in=values, habit_id=habit_id, user_id=user_id)

"""Репозиторий для работы с моделью MemorableMoment."""

from datetime import date
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.api.models import MemorableMoment
from src.api.schemas import MomentSchemaCreate

from .base_repository import BaseRepository


class MomentRepository(BaseRepository[MemorableMoment, MomentSchemaCreate, MomentSchemaCreate]):
    async def get_moments_by_user_id(
        self, db_session: AsyncSession, *, user_id: str, skip: int = 0, limit: int = 100
    ) -> Sequence[MemorableMoment]:
        """Моменты пользователя: сначала новые."""
        return await self.get_multi_by_filter(
            db_session,
            self.model.user_id == user_id,
            skip=skip,
            limit=limit,
            order_by=[self.model.moment_date.desc(), self.model.created_at.desc(), self.model.id.desc()],
        )

    async def get_moments_for_date(
        self, db_session: AsyncSession, *, user_id: str, moment_date: date
    ) -> Sequence[MemorableMoment]:
        return await self.get_multi_by_filter(
            db_session,
            self.model.user_id == user_id,
            self.model.moment_date == moment_date,
            order_by=[self.model.created_at.desc(), self.model.id.desc()],
        )

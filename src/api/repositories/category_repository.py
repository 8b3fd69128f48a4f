"""Репозиторий для работы с моделью HabitCategory."""

from typing import Sequence

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.models import HabitCategory
from src.api.schemas import CategorySchemaCreate

from .base_repository import BaseRepository


class CategoryRepository(BaseRepository[HabitCategory, CategorySchemaCreate, CategorySchemaCreate]):
    """Репозиторий категорий: системные (общие) и пользовательские."""

    def _visible_to(self, user_id: str):
        return or_(self.model.is_system.is_(True), self.model.user_id == user_id)

    async def get_categories_for_user(self, db_session: AsyncSession, *, user_id: str) -> Sequence[HabitCategory]:
        """Системные категории и категории пользователя: сначала системные, затем по названию."""
        return await self.get_multi_by_filter(
            db_session,
            self._visible_to(user_id),
            order_by=[self.model.is_system.desc(), self.model.name.asc()],
        )

    async def get_category_for_user(
        self, db_session: AsyncSession, *, category_id: int, user_id: str
    ) -> HabitCategory | None:
        return await self.get_by_filter_first_or_none(
            db_session, self.model.id == category_id, self._visible_to(user_id)
        )

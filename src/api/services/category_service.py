"""Сервис для работы с категориями привычек."""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.api.models import HabitCategory
from src.api.repositories import CategoryRepository
from src.api.schemas import CategorySchemaCreate, Identity

from .base_service import BaseService


class CategoryService(BaseService[HabitCategory, CategoryRepository, CategorySchemaCreate, CategorySchemaCreate]):
    def __init__(self, category_repository: CategoryRepository):
        super().__init__(repository=category_repository)

    async def get_categories(self, db_session: AsyncSession, *, identity: Identity) -> Sequence[HabitCategory]:
        """Системные категории и категории пользователя."""
        return await self.repository.get_categories_for_user(db_session, user_id=identity.user_id)

    async def create_category(
        self, db_session: AsyncSession, *, category_in: CategorySchemaCreate, identity: Identity
    ) -> HabitCategory:
        return await self.create(db_session, obj_in=category_in, user_id=identity.user_id, is_system=False)

"""
Эндпоинты для категорий привычек.
"""

from typing import Sequence

from fastapi import APIRouter, status

from src.api.core.dependencies import CategorySvc, CurrentUser, DBSession
from src.api.models import HabitCategory
from src.api.schemas import CategorySchemaCreate, CategorySchemaRead

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get(
    "/",
    response_model=Sequence[CategorySchemaRead],
    status_code=status.HTTP_200_OK,
    summary="Список категорий",
    description="Системные категории и категории пользователя.",
)
async def get_categories(
    db_session: DBSession,
    current_user: CurrentUser,
    category_service: CategorySvc,
) -> Sequence[HabitCategory]:
    return await category_service.get_categories(db_session, identity=current_user)


@router.post(
    "/",
    response_model=CategorySchemaRead,
    status_code=status.HTTP_201_CREATED,
    summary="Создание категории",
)
async def create_category(
    db_session: DBSession,
    current_user: CurrentUser,
    category_service: CategorySvc,
    category_in: CategorySchemaCreate,
) -> HabitCategory:
    return await category_service.create_category(db_session, category_in=category_in, identity=current_user)

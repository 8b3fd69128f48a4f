"""Сервис для работы с памятными моментами."""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.config import settings
from src.api.core.exceptions import BadRequestException
from src.api.core.logging import api_log as log
from src.api.models import MemorableMoment
from src.api.repositories import MomentRepository
from src.api.schemas import Identity, MomentSchemaCreate
from src.api.utils.date_utils import get_today_date

from .base_service import BaseService


class MomentService(BaseService[MemorableMoment, MomentRepository, MomentSchemaCreate, MomentSchemaCreate]):
    """
    Сервис памятных моментов.

    Момент всегда относится к "сегодня" по часовому поясу пользователя.
    """

    def __init__(self, moment_repository: MomentRepository):
        super().__init__(repository=moment_repository)

    async def add_moment(
        self, db_session: AsyncSession, *, moment_in: MomentSchemaCreate, identity: Identity
    ) -> MemorableMoment:
        """
        Добавляет момент за сегодня.

        Raises:
            BadRequestException: Если текст пустой или длиннее допустимого.
        """
        text = moment_in.text.strip()

        if not text:
            raise BadRequestException(
                message="Текст момента не может быть пустым.", error_type="empty_moment", loc=["body", "text"]
            )

        if len(text) > settings.MOMENT_MAX_LENGTH:
            raise BadRequestException(
                message=f"Текст момента длиннее {settings.MOMENT_MAX_LENGTH} символов.",
                error_type="moment_too_long",
                loc=["body", "text"],
            )

        today = get_today_date(identity.timezone)
        log.debug(f"Добавление момента пользователя {identity.user_id} на {today}.")

        return await self.create(
            db_session, obj_in=MomentSchemaCreate(text=text), user_id=identity.user_id, moment_date=today
        )

    async def get_moments(
        self, db_session: AsyncSession, *, identity: Identity, skip: int = 0, limit: int = 100
    ) -> Sequence[MemorableMoment]:
        return await self.repository.get_moments_by_user_id(
            db_session, user_id=identity.user_id, skip=skip, limit=limit
        )

    async def get_today_moment(self, db_session: AsyncSession, *, identity: Identity) -> MemorableMoment | None:
        """Последний момент за сегодня или None."""
        moments = await self.repository.get_moments_for_date(
            db_session, user_id=identity.user_id, moment_date=get_today_date(identity.timezone)
        )
        return moments[0] if moments else None

    async def delete_moment(self, db_session: AsyncSession, *, moment_id: int, identity: Identity) -> None:
        moment = await self.get_by_id_for_user(db_session, obj_id=moment_id, identity=identity)
        await self.delete(db_session, db_obj=moment)

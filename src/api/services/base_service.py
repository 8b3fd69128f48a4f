"""
Базовый класс для сервисов.

Реализует основную бизнес-логику CRUD операций, управление транзакциями
и проверку принадлежности данных пользователю.
"""

from typing import Any, Generic, TypeVar, cast

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.exceptions import ForbiddenException, NotFoundException
from src.api.core.logging import api_log as log
from src.api.models import Base as SQLAlchemyBaseModel
from src.api.repositories import BaseRepository
from src.api.schemas import Identity

# Определяем обобщенные (Generic) типы для моделей SQLAlchemy, репозиториев и схем Pydantic
ModelType = TypeVar("ModelType", bound=SQLAlchemyBaseModel)  # SQLAlchemy модель
RepositoryType = TypeVar("RepositoryType", bound=BaseRepository)  # Репозиторий
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)  # Pydantic схема для создания
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)  # Pydantic схема для обновления


class BaseService(Generic[ModelType, RepositoryType, CreateSchemaType, UpdateSchemaType]):
    """
    Базовый сервис с общими операциями и управлением транзакциями.

    Каждый публичный метод, изменяющий данные, представляет собой "единицу работы (Unit of Work)":
    commit в случае успеха, rollback и повторный выброс исключения при ошибке.

    Attributes:
        repository (RepositoryType): Экземпляр репозитория для работы с данными.
    """

    def __init__(self, repository: RepositoryType):
        self.repository = repository

    @property
    def model_name(self) -> str:
        return self.repository.model.__name__

    def _check_ownership(self, db_obj: Any, identity: Identity) -> None:
        """
        Проверяет, что объект принадлежит текущему пользователю.

        Raises:
            ForbiddenException: Если `user_id` объекта не совпадает с пользователем из токена.
        """
        if db_obj.user_id != identity.user_id:
            log.warning(
                f"Пользователь {identity.user_id} пытался получить доступ к чужому объекту "
                f"{self.model_name} ID: {db_obj.id}"
            )
            raise ForbiddenException(
                message=f"У вас нет прав для доступа к этому объекту ({self.model_name}).",
                error_type=f"{self.model_name.lower()}_access_forbidden",
            )

    async def get_by_id(self, db_session: AsyncSession, *, obj_id: int) -> ModelType:
        """
        Получает объект по ID или выбрасывает исключение, если объект не найден.

        Raises:
            NotFoundException: Если объект с указанным ID не найден.
        """
        db_obj = await self.repository.get_by_id(db_session, obj_id=obj_id)

        if not db_obj:
            raise NotFoundException(
                message=f"{self.model_name} с ID {obj_id} не найден.",
                error_type=f"{self.model_name.lower()}_not_found",
            )

        return cast(ModelType, db_obj)  # Явное приведение типа для mypy

    async def get_by_id_for_user(self, db_session: AsyncSession, *, obj_id: int, identity: Identity) -> ModelType:
        """Получает объект по ID, проверяя его принадлежность текущему пользователю (404 / 403)."""
        db_obj = await self.get_by_id(db_session, obj_id=obj_id)
        self._check_ownership(db_obj, identity)
        return db_obj

    async def create(self, db_session: AsyncSession, *, obj_in: CreateSchemaType, **extra: Any) -> ModelType:
        """
        Создает новый объект и фиксирует транзакцию.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            obj_in (CreateSchemaType): Схема с данными для создания.
            **extra: Поля, задаваемые сервером (например, user_id).

        Returns:
            ModelType: Созданный объект.
        """
        try:
            db_obj = await self.repository.create(db_session, obj_in=obj_in, **extra)
            await db_session.commit()

            log.info(f"{self.model_name} (ID: {db_obj.id}) успешно создан.")
            return cast(ModelType, db_obj)

        except Exception as exc:
            # При любой ошибке откатываем транзакцию, чтобы сохранить целостность данных
            await db_session.rollback()
            log.opt(exception=exc).error("Ошибка при создании {}: {}", self.model_name, exc)
            raise exc

    async def update(
        self,
        db_session: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: UpdateSchemaType | dict[str, Any],
    ) -> ModelType:
        """
        Обновляет уже найденный объект и фиксирует транзакцию.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            db_obj (ModelType): Объект для обновления.
            obj_in (UpdateSchemaType | dict[str, Any]): Данные для обновления.

        Returns:
            ModelType: Обновленный объект.
        """
        obj_id = db_obj.id

        try:
            updated_obj = await self.repository.update(db_session, db_obj=db_obj, obj_in=obj_in)
            await db_session.commit()

            log.info(f"{self.model_name} (ID: {obj_id}) успешно обновлен.")
            return cast(ModelType, updated_obj)

        except Exception as exc:
            await db_session.rollback()
            log.opt(exception=exc).error("Ошибка при обновлении {} (ID: {}): {}", self.model_name, obj_id, exc)
            raise exc

    async def delete(self, db_session: AsyncSession, *, db_obj: ModelType) -> None:
        """Удаляет уже найденный объект и фиксирует транзакцию."""
        obj_id = db_obj.id

        try:
            await self.repository.remove(db_session, db_obj=db_obj)
            await db_session.commit()

            log.info(f"{self.model_name} (ID: {obj_id}) успешно удален.")

        except Exception as exc:
            await db_session.rollback()
            log.opt(exception=exc).error("Ошибка при удалении {} (ID: {}): {}", self.model_name, obj_id, exc)
            raise exc

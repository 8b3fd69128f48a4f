"""Базовый репозиторий с общими CRUD-операциями."""

from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.logging import api_log as log
from src.api.models import Base as SQLAlchemyBaseModel

# Определяем обобщенные (Generic) типы для моделей SQLAlchemy и схем Pydantic
ModelType = TypeVar("ModelType", bound=SQLAlchemyBaseModel)  # SQLAlchemy модель
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)  # Pydantic схема для создания
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)  # Pydantic схема для обновления


class BaseRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Базовый класс репозитория для асинхронных CRUD-операций.

    Репозиторий только добавляет изменения в сессию и выполняет flush.
    Фиксация транзакции (commit / rollback) - ответственность сервиса.

    Attributes:
        model: Класс модели SQLAlchemy, с которым работает репозиторий.
    """

    def __init__(self, model: type[ModelType]):
        self.model = model

    async def get_by_id(self, db_session: AsyncSession, *, obj_id: int) -> ModelType | None:
        """
        Получает одну запись по ее ID.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            obj_id (int): Идентификатор записи.

        Returns:
            ModelType | None: Экземпляр модели или None, если запись не найдена.
        """
        model_name = self.model.__name__

        log.debug(f"Получение записи {model_name} по ID: {obj_id}")
        instance = await db_session.get(self.model, obj_id)

        status = "найдена" if instance else "не найдена"
        log.debug(f"Запись {model_name} с ID {obj_id} {status}.")

        return instance

    async def get_by_filter_first_or_none(
        self, db_session: AsyncSession, *filters: ColumnElement[bool]
    ) -> ModelType | None:
        """
        Получает первую запись, соответствующую критериям фильтрации (объединяются через AND), или None.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            *filters (ColumnElement[bool]): Критерии фильтрации SQLAlchemy.

        Returns:
            ModelType | None: Экземпляр модели или None.
        """
        statement = select(self.model).where(*filters).limit(1)
        result = await db_session.execute(statement)
        return result.scalar_one_or_none()

    async def get_multi_by_filter(
        self,
        db_session: AsyncSession,
        *filters: ColumnElement[bool],
        skip: int = 0,
        limit: int | None = None,
        order_by: list[ColumnElement[Any]] | None = None,
    ) -> Sequence[ModelType]:
        """
        Получает список записей по критериям фильтрации с опциональной пагинацией и сортировкой.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            *filters (ColumnElement[bool]): Критерии фильтрации SQLAlchemy.
            skip (int): Количество записей, которое нужно пропустить.
            limit (int | None): Максимальное количество записей (None - без ограничения).
            order_by (list[ColumnElement[Any]] | None): Список выражений сортировки.

        Returns:
            Sequence[ModelType]: Список экземпляров модели.
        """
        statement = select(self.model).where(*filters)

        if order_by:
            statement = statement.order_by(*order_by)

        if skip:
            statement = statement.offset(skip)

        if limit is not None:
            statement = statement.limit(limit)

        result = await db_session.execute(statement)
        instances = result.scalars().all()

        log.debug(f"Найдено {len(instances)} записей {self.model.__name__}.")
        return instances

    async def create(self, db_session: AsyncSession, *, obj_in: CreateSchemaType | dict[str, Any], **extra: Any) -> ModelType:
        """
        Создает и добавляет новый объект в сессию.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            obj_in (CreateSchemaType | dict[str, Any]): Данные для создания модели.
            **extra: Поля, которые задаются сервером (например, user_id из токена).

        Returns:
            ModelType: Созданный экземпляр модели.
        """
        model_name = self.model.__name__

        obj_in_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()

        log.debug(f"Подготовка к созданию записи {model_name} с данными: {obj_in_data}")
        db_obj = self.model(**obj_in_data, **extra)
        db_session.add(db_obj)

        # Получаем ID и другие сгенерированные базой данных значения
        await db_session.flush()
        await db_session.refresh(db_obj)

        log.debug(f"{model_name} (ID: {db_obj.id}) добавлен в сессию.")
        return db_obj

    async def update(
        self,
        db_session: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: UpdateSchemaType | dict[str, Any],
    ) -> ModelType:
        """
        Обновляет существующую запись.

        Args:
            db_session (AsyncSession): Асинхронная сессия базы данных.
            db_obj (ModelType): Экземпляр модели SQLAlchemy для обновления.
            obj_in (UpdateSchemaType | dict[str, Any]): Схема Pydantic или словарь с данными для обновления.

        Returns:
            ModelType: Обновленный экземпляр модели.
        """
        model_name = self.model.__name__

        # exclude_unset=True для частичного обновления
        update_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if hasattr(db_obj.__class__, field):
                setattr(db_obj, field, value)
            else:
                log.warning(f"Попытка обновить несуществующее поле '{field}' для {model_name} ID: {db_obj.id}")

        db_session.add(db_obj)
        await db_session.flush()
        await db_session.refresh(db_obj)

        log.debug(f"{model_name} (ID: {db_obj.id}) обновлен в сессии.")
        return db_obj

    async def remove(self, db_session: AsyncSession, *, db_obj: ModelType) -> None:
        """Помечает объект для удаления в сессии."""
        log.debug(f"Пометка на удаление записи {self.model.__name__} (ID: {getattr(db_obj, 'id', 'N/A')})")
        await db_session.delete(db_obj)
        await db_session.flush()

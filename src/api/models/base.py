"""Базовое определение модели для SQLAlchemy."""

from datetime import datetime

from sqlalchemy import DateTime, MetaData, func
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

# Соглашение об именовании для внешних ключей и индексов (для Alembic и SQLAlchemy)
# https://alembic.sqlalchemy.org/en/latest/naming.html
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata_obj = MetaData(naming_convention=convention)


class TimestampMixin:
    """
    Миксин для добавления полей created_at и updated_at к моделям.

    Attributes:
        created_at: Время создания записи (автоматически устанавливается БД).
        updated_at: Время последнего обновления записи (автоматически обновляется при изменении).
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        comment="Время создания записи",
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        comment="Время последнего обновления записи",
        nullable=False,
    )


class Base(DeclarativeBase, TimestampMixin):
    """
    Базовый класс для декларативных моделей SQLAlchemy.

    Предоставляет:
    - Стандартный __repr__.
    - Общий первичный ключ 'id'.
    - Поля created_at и updated_at (через TimestampMixin).
    - Имя таблицы по умолчанию, если оно не задано явно.
    - Настроенный metadata.
    """

    metadata = metadata_obj  # Применение соглашения об именовании

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        # Habit -> habits; модели с нестандартным именем таблицы задают его явно
        return f"{cls.__name__.lower()}s"

    def __repr__(self) -> str:
        """
        Возвращает строковое представление объекта модели.

        Пример: <Habit(id=1)>
        """
        return f"<{self.__class__.__name__}(id={self.id!r})>"

"""Настройка подключения к базе данных с использованием SQLAlchemy."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .logging import api_log as log


class Database:
    """
    Менеджер подключений к базе данных.

    Создается явно при сборке приложения (`create_app`) и хранится в `app.state.db`.
    Жизненный цикл: `connect()` при старте приложения, `disconnect()` при остановке.

    Отвечает за:
    - Инициализацию подключения
    - Управление пулом соединений
    - Создание сессий
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        """
        Инициализирует менеджер с пустыми подключениями.

        Args:
            url (str): URL базы данных для SQLAlchemy.
            echo (bool): Логировать ли SQL запросы.
        """
        self.url = url
        self.echo = echo
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(self, **kwargs: Any) -> None:
        """
        Устанавливает подключение к базе данных.

        Args:
            **kwargs: Дополнительные параметры для create_async_engine.

        Raises:
            RuntimeError: При неудачной проверке подключения.
        """
        self.engine = create_async_engine(
            self.url,
            echo=self.echo,
            pool_pre_ping=True,  # Проверять соединение перед использованием
            pool_recycle=3600,  # Переподключение каждый час
            **kwargs,
        )

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,  # Управляем flush явно
        )

        await self._verify_connection()
        log.success("Подключение к базе данных установлено.")

    async def disconnect(self) -> None:
        """Корректное закрытие подключения к базе данных."""
        if self.engine:
            log.info("Закрытие подключения к базе данных...")
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            log.info("Подключение к базе данных успешно закрыто.")

    async def _verify_connection(self) -> None:
        """
        Проверяет работоспособность подключения к базе данных.

        Raises:
            RuntimeError: Если проверка подключения не удалась.
        """
        if not self.session_factory:
            raise RuntimeError("Фабрика сессий не инициализирована.")
        try:
            async with self.session_factory() as session:
                await session.execute(text("SELECT 1"))
            log.debug("Проверка подключения к БД прошла успешно.")
        except Exception as exc:
            log.opt(exception=exc).critical("Ошибка подключения к базе данных: {}", exc)
            raise RuntimeError("Не удалось проверить подключение к БД.") from exc

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Асинхронный контекстный менеджер для работы с сессиями БД.

        Yields:
            AsyncSession: Экземпляр сессии БД.

        Raises:
            RuntimeError: При вызове до инициализации подключения (`connect`).
        """
        if not self.session_factory:
            raise RuntimeError("База данных не инициализирована. Вызовите `await connect()` перед использованием сессий.")

        session: AsyncSession = self.session_factory()

        try:
            yield session
        except SQLAlchemyError as exc:
            log.opt(exception=exc).error("Ошибка во время сессии БД, выполняется откат: {}", exc)
            await session.rollback()
            raise
        except Exception:
            # Ошибки запроса (валидация, HTTP исключения) тоже откатывают незафиксированные изменения
            await session.rollback()
            raise
        finally:
            await session.close()


# Dependency для FastAPI
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Зависимость FastAPI для получения асинхронной сессии базы данных.

    Берет менеджер подключений из `app.state.db` текущего приложения.

    Yields:
        AsyncSession: Сессия базы данных, управляемая через `Database.session()`.
    """
    database: Database = request.app.state.db

    async with database.session() as session:
        yield session

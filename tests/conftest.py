import os
from typing import AsyncGenerator

# Настройки читаются при импорте модулей приложения, поэтому окружение задаем до импорта src.*
os.environ.setdefault("DEVELOPMENT", "true")
os.environ.setdefault("DB_NAME", "habitize_test_db")
os.environ.setdefault("DB_PASSWORD", "test_password")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-with-at-least-32-bytes!")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from src.api.core.config import settings  # noqa: E402
from src.api.core.database import Database  # noqa: E402
from src.api.core.security import create_access_token  # noqa: E402
from src.api.models import Base  # noqa: E402

# In-memory SQLite: тестам не нужен отдельный сервер БД
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Включает проверку внешних ключей (и ON DELETE CASCADE) в SQLite."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# --- ФИКСТУРА БЕЗОПАСНОСТИ ---


@pytest.fixture(scope="session", autouse=True)
def verify_test_environment():
    """
    Проверяет, что тесты запускаются с корректными настройками окружения.

    Эта фикстура выполняется автоматически перед началом тестовой сессии.
    """
    assert settings.DEVELOPMENT is True, (
        "❌ ОШИБКА КОНФИГУРАЦИИ: Тесты должны запускаться в режиме разработки/тестирования (DEVELOPMENT=True)."
    )

    assert "test" in settings.DB_NAME, (
        f"❌ ОПАСНОСТЬ: Тесты пытаются использовать базу '{settings.DB_NAME}'. "
        "Тестовая база должна содержать 'test' в названии."
    )


# --- ГЛОБАЛЬНЫЕ ФИКСТУРЫ ДЛЯ ВСЕГО ПРОЕКТА ---


@pytest_asyncio.fixture(scope="function")
async def database() -> AsyncGenerator[Database, None]:
    """
    Подключенный менеджер БД с пустой схемой для каждого теста.

    Одно соединение (StaticPool), чтобы все сессии видели одну in-memory базу.
    """
    test_database = Database(TEST_DATABASE_URL)
    await test_database.connect(poolclass=StaticPool)

    async with test_database.engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    yield test_database

    await test_database.disconnect()


@pytest_asyncio.fixture(scope="function")
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Сессия для прямых проверок состояния БД в тестах."""
    async with database.session() as session:
        yield session


def make_auth_headers(user_id: str, timezone: str = "UTC") -> dict[str, str]:
    token = create_access_token(
        {"sub": user_id, "email": f"{user_id}@example.com", "user_metadata": {"timezone": timezone}}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def user_auth_headers() -> dict[str, str]:
    """Заголовки авторизации основного тестового пользователя."""
    return make_auth_headers("test-user-1")


@pytest.fixture(scope="function")
def other_user_auth_headers() -> dict[str, str]:
    """Заголовки авторизации второго пользователя (для проверок доступа к чужим данным)."""
    return make_auth_headers("test-user-2")


@pytest.fixture(scope="function")
def auth_headers_for():
    """Фабрика заголовков авторизации для произвольного пользователя и часового пояса."""
    return make_auth_headers

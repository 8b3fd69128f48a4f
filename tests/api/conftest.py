from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.api.core.database import Database
from src.api.main import create_app

# --- ФИКСТУРЫ, СПЕЦИФИЧНЫЕ ДЛЯ ТЕСТИРОВАНИЯ API ---


@pytest_asyncio.fixture(scope="function")
async def test_client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """
    Создает и предоставляет тестовый клиент FastAPI для каждого API-теста.

    Приложение собирается с тестовым менеджером БД (фикстура `database` в корневом conftest.py),
    поэтому `get_db_session` выдает сессии тестовой базы без переопределения зависимостей.
    """
    app = create_app(database=database)

    # Создаем транспорт для ASGI приложения (lifespan не запускается: БД уже подключена фикстурой)
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

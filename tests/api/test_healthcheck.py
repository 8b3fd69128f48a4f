from httpx import ASGITransport, AsyncClient
from starlette import status

from src.api.core.database import Database
from src.api.main import create_app


async def test_health_check_returns_ok(test_client: AsyncClient):
    """Проверяет, что эндпоинт /healthcheck возвращает 200 OK и сообщает о доступности базы данных."""

    # Act
    response = await test_client.get("/healthcheck")

    # Assert
    assert response.status_code == status.HTTP_200_OK

    response_json = response.json()
    assert response_json["api_status"] == "ok"
    assert response_json["dependencies"]["database"] == "ok"


async def test_health_check_without_database_returns_503():
    """Без подключения к БД health check сообщает об ошибке и возвращает 503."""

    # Arrange: менеджер БД создан, но не подключен
    app = create_app(database=Database("sqlite+aiosqlite://"))

    # Act
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/healthcheck")

    # Assert
    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response.json()["dependencies"]["database"] == "error"


async def test_api_requires_token(test_client: AsyncClient):
    """Эндпоинты API без токена возвращают 401 с заголовком WWW-Authenticate."""
    response = await test_client.get("/api/v1/habits/")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["detail"]["error_type"] == "unauthorized"


async def test_api_rejects_invalid_token(test_client: AsyncClient):
    response = await test_client.get("/api/v1/habits/", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"]["error_type"] == "invalid_token"

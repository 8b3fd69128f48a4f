import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from src.api.models import HabitCategory

pytestmark = pytest.mark.asyncio


async def test_categories_include_system_and_own(
    test_client: AsyncClient,
    user_auth_headers: dict[str, str],
    other_user_auth_headers: dict[str, str],
    db_session: AsyncSession,
):
    db_session.add(HabitCategory(name="Health", is_system=True))
    await db_session.commit()

    created = await test_client.post(
        "/api/v1/categories/", json={"name": "Reading", "color": "#F59E0B", "icon": "book"}, headers=user_auth_headers
    )
    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["is_system"] is False

    await test_client.post("/api/v1/categories/", json={"name": "Foreign"}, headers=other_user_auth_headers)

    response = await test_client.get("/api/v1/categories/", headers=user_auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert [category["name"] for category in response.json()] == ["Health", "Reading"]


async def test_foreign_category_cannot_be_assigned(
    test_client: AsyncClient, user_auth_headers: dict[str, str], other_user_auth_headers: dict[str, str]
):
    foreign = await test_client.post("/api/v1/categories/", json={"name": "Foreign"}, headers=other_user_auth_headers)

    response = await test_client.post(
        "/api/v1/habits/", json={"name": "Read", "category_id": foreign.json()["id"]}, headers=user_auth_headers
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND

import pytest
from httpx import AsyncClient
from starlette import status

pytestmark = pytest.mark.asyncio


async def test_add_and_list_moments(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    first = await test_client.post("/api/v1/moments/", json={"text": "  Sunrise run  "}, headers=user_auth_headers)
    second = await test_client.post("/api/v1/moments/", json={"text": "Dinner with friends"}, headers=user_auth_headers)

    assert first.status_code == status.HTTP_201_CREATED
    assert first.json()["text"] == "Sunrise run"

    response = await test_client.get("/api/v1/moments/", headers=user_auth_headers)
    assert response.status_code == status.HTTP_200_OK
    # Сначала новые
    assert [moment["id"] for moment in response.json()] == [second.json()["id"], first.json()["id"]]


async def test_today_moment(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    empty = await test_client.get("/api/v1/moments/today", headers=user_auth_headers)
    assert empty.status_code == status.HTTP_200_OK
    assert empty.json() is None

    created = await test_client.post("/api/v1/moments/", json={"text": "Good day"}, headers=user_auth_headers)

    response = await test_client.get("/api/v1/moments/today", headers=user_auth_headers)
    assert response.json()["id"] == created.json()["id"]
    assert response.json()["moment_date"] == created.json()["moment_date"]


@pytest.mark.parametrize("text", ["", "   ", "x" * 2001])
async def test_invalid_moment_text_is_rejected(test_client: AsyncClient, user_auth_headers: dict[str, str], text: str):
    response = await test_client.post("/api/v1/moments/", json={"text": text}, headers=user_auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST


async def test_delete_moment(
    test_client: AsyncClient, user_auth_headers: dict[str, str], other_user_auth_headers: dict[str, str]
):
    created = await test_client.post("/api/v1/moments/", json={"text": "Mine"}, headers=user_auth_headers)
    url = f"/api/v1/moments/{created.json()['id']}"

    forbidden = await test_client.delete(url, headers=other_user_auth_headers)
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN

    deleted = await test_client.delete(url, headers=user_auth_headers)
    assert deleted.status_code == status.HTTP_204_NO_CONTENT

    missing = await test_client.delete(url, headers=user_auth_headers)
    assert missing.status_code == status.HTTP_404_NOT_FOUND

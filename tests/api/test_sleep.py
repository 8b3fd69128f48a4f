from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from src.api.models import SleepLog

pytestmark = pytest.mark.asyncio


async def test_upsert_sleep_log_updates_existing_date(
    test_client: AsyncClient, user_auth_headers: dict[str, str], db_session: AsyncSession
):
    day = (datetime.now(timezone.utc).date() - timedelta(days=1)).isoformat()

    first = await test_client.put(f"/api/v1/sleep/{day}", json={"hours": 7.5}, headers=user_auth_headers)
    second = await test_client.put(f"/api/v1/sleep/{day}", json={"hours": 8}, headers=user_auth_headers)

    assert first.status_code == status.HTTP_200_OK
    assert second.status_code == status.HTTP_200_OK
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["hours"] == 8

    assert await db_session.scalar(select(func.count()).select_from(SleepLog)) == 1


@pytest.mark.parametrize("hours", [-1, 24.5, 100])
async def test_sleep_hours_out_of_range_are_rejected(
    test_client: AsyncClient, user_auth_headers: dict[str, str], hours: float
):
    day = datetime.now(timezone.utc).date().isoformat()

    response = await test_client.put(f"/api/v1/sleep/{day}", json={"hours": hours}, headers=user_auth_headers)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


async def test_sleep_on_future_date_is_rejected(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    day = (datetime.now(timezone.utc).date() + timedelta(days=2)).isoformat()

    response = await test_client.put(f"/api/v1/sleep/{day}", json={"hours": 8}, headers=user_auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["error_type"] == "future_date"


async def test_get_sleep_logs_for_month(
    test_client: AsyncClient, user_auth_headers: dict[str, str], other_user_auth_headers: dict[str, str]
):
    await test_client.put("/api/v1/sleep/2024-03-31", json={"hours": 6}, headers=user_auth_headers)
    await test_client.put("/api/v1/sleep/2024-04-02", json={"hours": 7}, headers=user_auth_headers)
    await test_client.put("/api/v1/sleep/2024-04-01", json={"hours": 9}, headers=user_auth_headers)
    await test_client.put("/api/v1/sleep/2024-04-03", json={"hours": 5}, headers=other_user_auth_headers)

    response = await test_client.get("/api/v1/sleep/", params={"month": "2024-04"}, headers=user_auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert [(item["log_date"], item["hours"]) for item in response.json()] == [("2024-04-01", 9), ("2024-04-02", 7)]


async def test_delete_sleep_log(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    await test_client.put("/api/v1/sleep/2024-04-01", json={"hours": 9}, headers=user_auth_headers)

    response = await test_client.delete("/api/v1/sleep/2024-04-01", headers=user_auth_headers)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    response = await test_client.delete("/api/v1/sleep/2024-04-01", headers=user_auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND

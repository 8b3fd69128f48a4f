from datetime import date, datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from src.api.models import HabitLog

pytestmark = pytest.mark.asyncio


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


async def create_habit(client: AsyncClient, headers: dict[str, str], **overrides) -> int:
    response = await client.post("/api/v1/habits/", json={"name": "Habit", **overrides}, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["id"]


async def toggle(client: AsyncClient, headers: dict[str, str], habit_id: int, day: date):
    return await client.post(f"/api/v1/habits/{habit_id}/logs/{day.isoformat()}/toggle", headers=headers)


async def increment(client: AsyncClient, headers: dict[str, str], habit_id: int, day: date, delta: int = 1):
    return await client.post(
        f"/api/v1/habits/{habit_id}/logs/{day.isoformat()}/increment", json={"delta": delta}, headers=headers
    )


async def test_progress_without_log_is_zero(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    """Булева привычка без записи за день: 0 / 1, 0%, не выполнена."""
    habit_id = await create_habit(test_client, user_auth_headers)

    response = await test_client.get(
        f"/api/v1/habits/{habit_id}/logs/{utc_today().isoformat()}/progress", headers=user_auth_headers
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert (data["count"], data["target"], data["percentage"], data["done"]) == (0, 1, 0, False)


async def test_counter_increment_from_empty(
    test_client: AsyncClient, user_auth_headers: dict[str, str], db_session: AsyncSession
):
    """Счетчик с целью 5 без записи, +1 => запись {1, 20%, не выполнена}."""
    habit_id = await create_habit(test_client, user_auth_headers, habit_type="counter", target_count=5)

    response = await increment(test_client, user_auth_headers, habit_id, utc_today())

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["applied"] is True
    assert (data["count"], data["target"], data["percentage"], data["done"]) == (1, 5, 20, False)

    habit_log = await db_session.scalar(select(HabitLog).where(HabitLog.habit_id == habit_id))
    assert habit_log is not None
    assert (habit_log.current_count, habit_log.completion_percentage, habit_log.done) == (1, 20, False)


async def test_counter_reaches_target(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    """Счетчик 4 из 5, +1 => {5, 100%, выполнена}."""
    habit_id = await create_habit(test_client, user_auth_headers, habit_type="counter", target_count=5)
    await increment(test_client, user_auth_headers, habit_id, utc_today(), delta=4)

    response = await increment(test_client, user_auth_headers, habit_id, utc_today())

    data = response.json()
    assert (data["count"], data["percentage"], data["done"]) == (5, 100, True)


async def test_counter_percentage_is_capped(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    habit_id = await create_habit(test_client, user_auth_headers, habit_type="counter", target_count=3)

    response = await increment(test_client, user_auth_headers, habit_id, utc_today(), delta=7)

    data = response.json()
    assert (data["count"], data["percentage"], data["done"]) == (7, 100, True)


async def test_counter_decrement_at_zero_is_noop(
    test_client: AsyncClient, user_auth_headers: dict[str, str], db_session: AsyncSession
):
    habit_id = await create_habit(test_client, user_auth_headers, habit_type="counter", target_count=5)

    response = await increment(test_client, user_auth_headers, habit_id, utc_today(), delta=-1)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["applied"] is False
    assert data["count"] == 0
    assert await db_session.scalar(select(func.count()).select_from(HabitLog)) == 0


async def test_counter_decrement_is_clamped_at_zero(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    habit_id = await create_habit(test_client, user_auth_headers, habit_type="counter", target_count=5)
    await increment(test_client, user_auth_headers, habit_id, utc_today(), delta=2)

    response = await increment(test_client, user_auth_headers, habit_id, utc_today(), delta=-5)

    data = response.json()
    assert data["applied"] is True
    assert (data["count"], data["percentage"], data["done"]) == (0, 0, False)


async def test_increment_with_zero_delta_is_rejected(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    habit_id = await create_habit(test_client, user_auth_headers, habit_type="counter", target_count=5)

    response = await increment(test_client, user_auth_headers, habit_id, utc_today(), delta=0)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


async def test_toggle_boolean_habit_twice(
    test_client: AsyncClient, user_auth_headers: dict[str, str], db_session: AsyncSession
):
    """Повторное переключение обновляет ту же запись, а не создает новую."""
    habit_id = await create_habit(test_client, user_auth_headers)
    today = utc_today()

    first = (await toggle(test_client, user_auth_headers, habit_id, today)).json()
    assert (first["count"], first["percentage"], first["done"]) == (1, 100, True)

    second = (await toggle(test_client, user_auth_headers, habit_id, today)).json()
    assert (second["count"], second["percentage"], second["done"]) == (0, 0, False)

    logs = (await db_session.execute(select(HabitLog).where(HabitLog.habit_id == habit_id))).scalars().all()
    assert len(logs) == 1
    assert logs[0].done is False
    assert logs[0].current_count == 0


async def test_future_date_is_not_changed(
    test_client: AsyncClient, user_auth_headers: dict[str, str], db_session: AsyncSession
):
    """Отметки на будущие даты не сохраняются."""
    boolean_id = await create_habit(test_client, user_auth_headers)
    counter_id = await create_habit(test_client, user_auth_headers, habit_type="counter", target_count=2)
    future = utc_today() + timedelta(days=2)

    toggle_response = await toggle(test_client, user_auth_headers, boolean_id, future)
    increment_response = await increment(test_client, user_auth_headers, counter_id, future)

    assert toggle_response.status_code == status.HTTP_200_OK
    assert toggle_response.json()["applied"] is False
    assert toggle_response.json()["done"] is False
    assert increment_response.json()["applied"] is False
    assert increment_response.json()["count"] == 0
    assert await db_session.scalar(select(func.count()).select_from(HabitLog)) == 0


async def test_operation_must_match_habit_type(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    boolean_id = await create_habit(test_client, user_auth_headers)
    counter_id = await create_habit(test_client, user_auth_headers, habit_type="counter", target_count=2)

    toggle_response = await toggle(test_client, user_auth_headers, counter_id, utc_today())
    increment_response = await increment(test_client, user_auth_headers, boolean_id, utc_today())

    assert toggle_response.status_code == status.HTTP_400_BAD_REQUEST
    assert toggle_response.json()["detail"]["error_type"] == "habit_type_mismatch"
    assert increment_response.status_code == status.HTTP_400_BAD_REQUEST


async def test_archived_habit_cannot_be_marked(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    habit_id = await create_habit(test_client, user_auth_headers)
    await test_client.post(f"/api/v1/habits/{habit_id}/archive", headers=user_auth_headers)

    response = await toggle(test_client, user_auth_headers, habit_id, utc_today())

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["error_type"] == "habit_not_active"


async def test_other_user_cannot_mark_habit(
    test_client: AsyncClient, user_auth_headers: dict[str, str], other_user_auth_headers: dict[str, str]
):
    habit_id = await create_habit(test_client, other_user_auth_headers)

    response = await toggle(test_client, user_auth_headers, habit_id, utc_today())

    assert response.status_code == status.HTTP_403_FORBIDDEN


async def test_unknown_habit_returns_404(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    response = await toggle(test_client, user_auth_headers, 12345, utc_today())

    assert response.status_code == status.HTTP_404_NOT_FOUND


async def test_get_logs_for_period(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    habit_id = await create_habit(test_client, user_auth_headers)
    today = utc_today()
    days = [today - timedelta(days=offset) for offset in (0, 1, 5)]
    for day in days:
        await toggle(test_client, user_auth_headers, habit_id, day)

    response = await test_client.get(
        f"/api/v1/habits/{habit_id}/logs/",
        params={"start_date": (today - timedelta(days=2)).isoformat(), "end_date": today.isoformat()},
        headers=user_auth_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    assert [log["log_date"] for log in response.json()] == [days[1].isoformat(), days[0].isoformat()]


async def test_get_logs_with_inverted_period_returns_400(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    habit_id = await create_habit(test_client, user_auth_headers)
    today = utc_today()

    response = await test_client.get(
        f"/api/v1/habits/{habit_id}/logs/",
        params={"start_date": today.isoformat(), "end_date": (today - timedelta(days=1)).isoformat()},
        headers=user_auth_headers,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


async def test_streak_is_recalculated_on_every_mark(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    habit_id = await create_habit(test_client, user_auth_headers)
    today = utc_today()
    streak_url = f"/api/v1/habits/{habit_id}/streak"

    empty = (await test_client.get(streak_url, headers=user_auth_headers)).json()
    assert (empty["current_streak"], empty["longest_streak"], empty["total_completions"]) == (0, 0, 0)

    for offset in (2, 1, 0):
        await toggle(test_client, user_auth_headers, habit_id, today - timedelta(days=offset))

    streak = (await test_client.get(streak_url, headers=user_auth_headers)).json()
    assert streak["current_streak"] == 3
    assert streak["longest_streak"] == 3
    assert streak["total_completions"] == 3
    assert streak["last_completed_date"] == today.isoformat()
    assert streak["streak_start_date"] == (today - timedelta(days=2)).isoformat()

    # Снимаем отметку за вчера: серия прерывается, максимальная пересчитывается
    await toggle(test_client, user_auth_headers, habit_id, today - timedelta(days=1))

    streak = (await test_client.get(streak_url, headers=user_auth_headers)).json()
    assert streak["current_streak"] == 1
    assert streak["longest_streak"] == 1
    assert streak["total_completions"] == 2


async def test_habits_list_includes_streak(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    habit_id = await create_habit(test_client, user_auth_headers)
    await toggle(test_client, user_auth_headers, habit_id, utc_today())

    response = await test_client.get(
        "/api/v1/habits/", params={"month": utc_today().strftime("%Y-%m")}, headers=user_auth_headers
    )

    habit = response.json()[0]
    assert habit["streak"]["current_streak"] == 1
    assert habit["logs"][0]["done"] is True
    assert habit["logs"][0]["completion_percentage"] == 100
    assert habit["stats"] == {"completed": 1, "total": 1, "percentage": 100}


async def test_changing_target_rederives_stored_logs_and_streak(
    test_client: AsyncClient, user_auth_headers: dict[str, str], db_session: AsyncSession
):
    """Счетчик 4/5 после смены цели на 3: запись и серия пересчитываются по новым правилам."""
    habit_id = await create_habit(test_client, user_auth_headers, habit_type="counter", target_count=5)
    today = utc_today()
    await increment(test_client, user_auth_headers, habit_id, today, delta=4)

    response = await test_client.patch(
        f"/api/v1/habits/{habit_id}", json={"target_count": 3}, headers=user_auth_headers
    )
    assert response.status_code == status.HTTP_200_OK

    progress_url = f"/api/v1/habits/{habit_id}/logs/{today.isoformat()}/progress"
    progress = (await test_client.get(progress_url, headers=user_auth_headers)).json()
    assert (progress["count"], progress["target"], progress["percentage"], progress["done"]) == (4, 3, 100, True)

    habit_log = await db_session.scalar(select(HabitLog).where(HabitLog.habit_id == habit_id))
    assert (habit_log.current_count, habit_log.completion_percentage, habit_log.done) == (4, 100, True)

    streak = (await test_client.get(f"/api/v1/habits/{habit_id}/streak", headers=user_auth_headers)).json()
    assert streak["current_streak"] == 1
    assert streak["total_completions"] == 1


async def test_changing_habit_type_rederives_stored_logs(
    test_client: AsyncClient, user_auth_headers: dict[str, str], db_session: AsyncSession
):
    """Булева привычка, ставшая счетчиком с целью 2: выполненный день превращается в 1/2."""
    habit_id = await create_habit(test_client, user_auth_headers)
    today = utc_today()
    await toggle(test_client, user_auth_headers, habit_id, today)

    response = await test_client.patch(
        f"/api/v1/habits/{habit_id}", json={"habit_type": "counter", "target_count": 2}, headers=user_auth_headers
    )
    assert response.status_code == status.HTTP_200_OK

    habit_log = await db_session.scalar(select(HabitLog).where(HabitLog.habit_id == habit_id))
    assert (habit_log.current_count, habit_log.completion_percentage, habit_log.done) == (1, 50, False)

    streak = (await test_client.get(f"/api/v1/habits/{habit_id}/streak", headers=user_auth_headers)).json()
    assert streak["current_streak"] == 0
    assert streak["total_completions"] == 0


async def test_habits_list_stats_cover_logs_of_month(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    """Выполнено 1 из 2 записей за месяц: 50%. Записи других месяцев не учитываются."""
    habit_id = await create_habit(test_client, user_auth_headers, habit_type="counter", target_count=2)
    await increment(test_client, user_auth_headers, habit_id, date(2024, 3, 10), delta=2)
    await increment(test_client, user_auth_headers, habit_id, date(2024, 3, 11))
    await increment(test_client, user_auth_headers, habit_id, date(2024, 4, 1), delta=2)

    response = await test_client.get("/api/v1/habits/", params={"month": "2024-03"}, headers=user_auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()[0]["stats"] == {"completed": 1, "total": 2, "percentage": 50}

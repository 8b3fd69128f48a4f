"""Зависимости FastAPI: сессия БД, репозитории, сервисы и текущий пользователь."""

from datetime import date
from typing import Annotated

from fastapi import Depends, Query, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.models import Habit, HabitCategory, HabitLog, HabitStreak, MemorableMoment, SleepLog
from src.api.repositories import (
    CategoryRepository,
    HabitLogRepository,
    HabitRepository,
    HabitStreakRepository,
    MomentRepository,
    SleepLogRepository,
)
from src.api.schemas import Identity
from src.api.services import (
    CategoryService,
    HabitLogService,
    HabitService,
    MomentService,
    SleepLogService,
    StatsService,
)
from src.api.utils.date_utils import get_today_date, parse_month

from .database import get_db_session
from .exceptions import BadRequestException, UnauthorizedException
from .logging import api_log as log
from .security import identity_from_token

# --- Типизация для инъекции зависимостей ---

# Сессия базы данных
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# --- Фабрики Репозиториев ---


def get_habit_repository() -> HabitRepository:
    return HabitRepository(Habit)


def get_habit_log_repository() -> HabitLogRepository:
    return HabitLogRepository(HabitLog)


def get_habit_streak_repository() -> HabitStreakRepository:
    return HabitStreakRepository(HabitStreak)


def get_category_repository() -> CategoryRepository:
    return CategoryRepository(HabitCategory)


def get_sleep_log_repository() -> SleepLogRepository:
    return SleepLogRepository(SleepLog)


def get_moment_repository() -> MomentRepository:
    return MomentRepository(MemorableMoment)


# Типизация для репозиториев
HabitRepo = Annotated[HabitRepository, Depends(get_habit_repository)]
HabitLogRepo = Annotated[HabitLogRepository, Depends(get_habit_log_repository)]
HabitStreakRepo = Annotated[HabitStreakRepository, Depends(get_habit_streak_repository)]
CategoryRepo = Annotated[CategoryRepository, Depends(get_category_repository)]
SleepLogRepo = Annotated[SleepLogRepository, Depends(get_sleep_log_repository)]
MomentRepo = Annotated[MomentRepository, Depends(get_moment_repository)]


# --- Фабрики Сервисов ---


# HabitLogService зависит от репозиториев записей, привычек и серий
def get_habit_log_service(
    repository: HabitLogRepo, habit_repository: HabitRepo, streak_repository: HabitStreakRepo
) -> HabitLogService:
    return HabitLogService(
        log_repository=repository, habit_repository=habit_repository, streak_repository=streak_repository
    )


HabitLogSvc = Annotated[HabitLogService, Depends(get_habit_log_service)]


# HabitService пересчитывает записи через HabitLogService при смене правил привычки
def get_habit_service(
    repository: HabitRepo, category_repository: CategoryRepo, habit_log_service: HabitLogSvc
) -> HabitService:
    return HabitService(
        habit_repository=repository, category_repository=category_repository, habit_log_service=habit_log_service
    )


def get_sleep_log_service(repository: SleepLogRepo) -> SleepLogService:
    return SleepLogService(sleep_repository=repository)


def get_moment_service(repository: MomentRepo) -> MomentService:
    return MomentService(moment_repository=repository)


def get_category_service(repository: CategoryRepo) -> CategoryService:
    return CategoryService(category_repository=repository)


def get_stats_service(habit_repository: HabitRepo, sleep_repository: SleepLogRepo) -> StatsService:
    return StatsService(habit_repository=habit_repository, sleep_repository=sleep_repository)


# Типизация для сервисов
HabitSvc = Annotated[HabitService, Depends(get_habit_service)]
SleepLogSvc = Annotated[SleepLogService, Depends(get_sleep_log_service)]
MomentSvc = Annotated[MomentService, Depends(get_moment_service)]
CategorySvc = Annotated[CategoryService, Depends(get_category_service)]
StatsSvc = Annotated[StatsService, Depends(get_stats_service)]


# --- Зависимость для получения текущего пользователя ---

# Схема для JWT Bearer токена
bearer_schema = HTTPBearer(auto_error=False)


async def get_current_identity(
    token_credentials: HTTPAuthorizationCredentials | None = Security(bearer_schema),
) -> Identity:
    """
    Получает текущего пользователя из JWT токена провайдера идентификации.

    Пользователи не хранятся в БД: идентификатор (`sub`) используется как владелец данных.

    Args:
        token_credentials (HTTPAuthorizationCredentials | None): Учетные данные из заголовка Authorization.

    Returns:
        Identity: Текущий пользователь (ID, email, часовой пояс).

    Raises:
        UnauthorizedException: Если токен отсутствует или невалиден.
    """
    if token_credentials is None or not token_credentials.credentials:
        log.debug("Отсутствует токен авторизации.")
        raise UnauthorizedException(message="Токен авторизации не предоставлен.")

    # UnauthorizedException будет выброшен из identity_from_token в случае проблем
    identity = identity_from_token(token_credentials.credentials)

    log.debug(f"Аутентифицирован пользователь: {identity.user_id} (timezone: {identity.timezone})")
    return identity


# --- Типизация для инъекции текущего пользователя ---
CurrentUser = Annotated[Identity, Depends(get_current_identity)]


# --- Общие параметры запросов ---


def get_month(
    current_user: CurrentUser,
    month: Annotated[
        str | None,
        Query(pattern=r"^\d{4}-\d{2}$", description="Месяц в формате YYYY-MM (по умолчанию - текущий)"),
    ] = None,
) -> date:
    """
    Первый день запрошенного месяца; без параметра - текущий месяц пользователя.

    Raises:
        BadRequestException: Если месяц вне диапазона 01..12.
    """
    if month is None:
        return get_today_date(current_user.timezone).replace(day=1)

    try:
        return parse_month(month)
    except ValueError as exc:
        raise BadRequestException(
            message=f"Некорректный месяц: '{month}'.", error_type="invalid_month", loc=["query", "month"]
        ) from exc


MonthQuery = Annotated[date, Depends(get_month)]

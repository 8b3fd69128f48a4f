"""Основной файл приложения FastAPI для сервиса трекинга привычек.

Отвечает за:
- Создание и конфигурацию экземпляра FastAPI.
- Управление жизненным циклом приложения (подключение к БД).
- Регистрацию роутеров и обработчиков исключений.
- Предоставление эндпоинта для проверки работоспособности (health check).
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request, Response, status
from sqlalchemy import text

from src.api.core.config import settings
from src.api.core.database import Database
from src.api.core.exceptions import setup_exception_handlers
from src.api.core.logging import api_log as log
from src.api.routes import api_router
from src.core_shared.sentry_sdk_setup import setup_sentry


# Определяем lifespan для управления подключением к БД
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:  # pragma: no cover
    """
    Контекстный менеджер для управления жизненным циклом приложения.

    Подключает `app.state.db` при старте приложения и закрывает подключение при остановке.

    Args:
        app (FastAPI): Экземпляр приложения FastAPI.
    """
    log.info("Инициализация приложения...")
    database: Database = app.state.db
    try:
        await database.connect()
        yield
    except Exception as exc:
        # Приложение не должно запуститься в нерабочем состоянии
        log.opt(exception=exc).critical("Критическая ошибка при старте приложения: {}", exc)
        raise exc
    finally:
        log.info("Остановка приложения...")
        await database.disconnect()
        log.info("Приложение остановлено.")


async def health_check(request: Request, response: Response) -> dict[str, Any]:
    """
    Эндпоинт для проверки работоспособности сервиса.

    Args:
        request (Request): Текущий запрос (для доступа к `app.state.db`).
        response (Response): Объект ответа FastAPI для управления статус-кодом.

    Returns:
        dict: Словарь со статусом API и его зависимостей.
    """
    database: Database = request.app.state.db
    is_db_ok = False

    try:
        async with database.session() as db_session:
            await db_session.execute(text("SELECT 1"))
        is_db_ok = True
    except Exception as exc:
        log.debug(f"Ошибка проверки БД в health check: {exc}")

    response_body = {
        "api_status": "ok",
        "dependencies": {"database": "ok" if is_db_ok else "error"},
    }

    # 503 понимают системы мониторинга и оркестрации (Docker, k8s)
    if not is_db_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        log.warning("Health check провален: нет подключения к базе данных.")

    return response_body


def create_app(database: Database | None = None) -> FastAPI:
    """
    Создает и конфигурирует экземпляр приложения FastAPI.

    Args:
        database (Database | None): Менеджер подключений к БД. По умолчанию создается из настроек.

    Returns:
        FastAPI: Сконфигурированный экземпляр приложения.
    """
    log.info(f"Создание экземпляра FastAPI для '{settings.PROJECT_NAME}@{settings.API_VERSION}'")
    log.info(f"Режим разработки: {settings.DEVELOPMENT}, Режим продакшена: {settings.PRODUCTION}")

    # Вызываем инициализацию Sentry (без DSN ничего не делает)
    setup_sentry(settings, log)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.API_VERSION,
        debug=settings.DEVELOPMENT,
        lifespan=lifespan,
        description="API трекера привычек, сна и памятных моментов",
    )

    app.state.db = database or Database(settings.DATABASE_URL, echo=settings.DEVELOPMENT)

    # Настраиваем кастомные обработчики исключений
    setup_exception_handlers(app)
    log.info("Обработчики исключений настроены.")

    # Подключаем API роутер с префиксом /api
    app.include_router(api_router, prefix="/api")

    app.add_api_route(
        "/healthcheck",
        health_check,
        methods=["GET"],
        tags=["Health Check"],
        summary="Проверка работоспособности сервиса и его зависимостей",
        description=(
            "Проверяет, что API запущен и имеет доступ к базе данных. "
            "В случае недоступности базы данных возвращает HTTP статус 503."
        ),
    )

    log.info(f"Приложение '{settings.PROJECT_NAME} {settings.API_VERSION}' сконфигурировано и готово к запуску.")
    return app


# Создаем основной экземпляр приложения
app = create_app()

"""Настройка Sentry SDK."""

from logging import ERROR, INFO  # Стандартные уровни логирования для Sentry
from typing import TYPE_CHECKING, Protocol

from sentry_sdk import init as sentry_init
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.loguru import LoguruIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

if TYPE_CHECKING:
    from loguru import Logger


class SentrySettingsProtocol(Protocol):
    """Протокол для объекта настроек, используемых Sentry."""

    SENTRY_DSN: str | None
    PRODUCTION: bool
    PROJECT_NAME: str
    API_VERSION: str


def get_sample_rates(settings: SentrySettingsProtocol) -> tuple[str, float, float]:
    """
    Определяет окружение и частоты семплирования трейсов и профилирования.

    10% для production, 100% для development.

    Returns:
        tuple[str, float, float]: (environment, traces_sample_rate, profiles_sample_rate).
    """
    environment = "production" if settings.PRODUCTION else "development"
    rate = 0.1 if environment == "production" else 1.0
    return environment, rate, rate


def setup_sentry(settings: SentrySettingsProtocol, log: "Logger") -> bool:
    """
    Инициализирует Sentry SDK, если задан DSN.

    Args:
        settings (SentrySettingsProtocol): Объект настроек.
        log (Logger): Логгер сервиса, который инициализирует Sentry.

    Returns:
        bool: True, если Sentry SDK был инициализирован.
    """
    sentry_dsn = settings.SENTRY_DSN

    if not sentry_dsn:
        log.info("SENTRY_DSN не установлен, Sentry SDK не будет инициализирован.")
        return False

    environment, traces_sample_rate, profiles_sample_rate = get_sample_rates(settings)

    log.info(
        f"Инициализация Sentry SDK. DSN: {'***' + sentry_dsn[-6:]}, "
        f"Environment: {environment}, "
        f"Traces Rate: {traces_sample_rate}, "
        f"Profiles Rate: {profiles_sample_rate}"
    )

    try:
        sentry_init(
            dsn=sentry_dsn,
            integrations=[
                StarletteIntegration(transaction_style="endpoint"),
                FastApiIntegration(transaction_style="endpoint"),
                SqlalchemyIntegration(),
                # INFO уходит в breadcrumbs, ERROR и выше - в события
                LoguruIntegration(level=INFO, event_level=ERROR),
            ],
            environment=environment,
            traces_sample_rate=traces_sample_rate,
            profiles_sample_rate=profiles_sample_rate,
            release=f"{settings.PROJECT_NAME}@{settings.API_VERSION}",
        )
    except Exception as exc:
        log.exception(f"Ошибка инициализации Sentry SDK: {exc}")
        return False

    log.info("Sentry SDK успешно инициализирован.")
    return True

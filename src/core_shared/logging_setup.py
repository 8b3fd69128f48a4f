"""Централизованная настройка логирования для всех сервисов проекта."""

import logging
import os
import sys
from typing import TYPE_CHECKING

from loguru import logger as global_loguru_logger
from pydantic import BaseModel, Field

# Импортируем Logger только для проверки типов
if TYPE_CHECKING:
    from loguru import Logger


class LogConfig(BaseModel):
    """Конфигурация логирования."""

    level: str = Field(default="INFO", description="Уровень логирования")
    format: str = Field(
        default=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[service_name]}</cyan> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
        ),
        description="Формат лог сообщения",
    )
    rotation: str = Field(default="10 MB", description="Ротация лог-файлов по размеру")
    retention: str = Field(default="7 days", description="Время хранения лог-файлов")
    serialize: bool = Field(default=False, description="Сериализовать логи в JSON")
    enable_file_logging: bool = Field(default=True, description="Включить логирование в файл")
    log_file_path: str = Field(
        default="logs/{service_name}_{time:YYYY-MM-DD}.log",
        description="Путь к файлу логов",
    )


class InterceptHandler(logging.Handler):
    """Перехватывает записи стандартного модуля logging и перенаправляет их в Loguru."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def emit(self, record: logging.LogRecord) -> None:
        # Получаем соответствующий уровень логгера Loguru
        try:
            level: str | int = global_loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Ищем, откуда был вызван лог, чтобы правильно отобразить место вызова
        frame, depth = logging.currentframe(), 2

        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        global_loguru_logger.bind(service_name=self.service_name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def intercept_standard_logging(service_name: str, noisy_loggers: tuple[str, ...] = ("sqlalchemy.engine",)) -> None:
    """
    Направляет логи стандартного модуля logging (uvicorn, alembic, sqlalchemy) в Loguru.

    Args:
        service_name: Имя сервиса, которое попадет в поле `extra[service_name]`.
        noisy_loggers: Логгеры, уровень которых поднимается до WARNING.
    """
    logging.basicConfig(handlers=[InterceptHandler(service_name)], level=logging.INFO, force=True)

    # Отключаем лишний шум
    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def setup_logger(
    service_name: str,
    log_config: LogConfig | None = None,
    log_level_override: str | None = None,
) -> "Logger":
    """
    Настраивает Loguru логгер для указанного сервиса и возвращает его экземпляр.

    Удаляет все предыдущие обработчики перед добавлением новых,
    чтобы избежать дублирования при повторных вызовах (например, в тестах).

    Args:
        service_name: Имя сервиса (например, "API", "Alembic").
        log_config: Объект конфигурации LogConfig. Если None, используются значения по умолчанию.
        log_level_override: Переопределяет уровень логирования из конфигурации.

    Returns:
        Сконфигурированный экземпляр логгера Loguru.
    """
    current_config = LogConfig() if log_config is None else log_config.model_copy()

    # Применяем переопределения, если они есть
    current_config.level = (log_level_override or current_config.level).upper()

    # Удаляем все предыдущие обработчики, чтобы избежать дублирования
    global_loguru_logger.remove()

    # `bind` добавляет service_name в `extra`, что позволяет использовать {extra[service_name]} в формате
    service_specific_logger = global_loguru_logger.bind(service_name=service_name)

    # Обработчик для вывода в консоль (stderr)
    service_specific_logger.add(
        sys.stderr,
        level=current_config.level,
        format=current_config.format,
        colorize=not current_config.serialize,
        serialize=current_config.serialize,
    )

    if current_config.enable_file_logging:
        _add_file_sink(service_specific_logger, current_config, service_name)

    service_specific_logger.info(f"Loguru сконфигурирован. Уровень: {current_config.level}")
    return service_specific_logger


def _add_file_sink(service_logger: "Logger", config: LogConfig, service_name: str) -> None:
    """Добавляет обработчик записи в файл, создавая директорию логов при необходимости."""
    log_file_path = config.log_file_path.replace("{service_name}", service_name.lower())

    # Отсекаем динамическую часть имени файла ({time...}), чтобы получить директорию
    log_dir = os.path.dirname(log_file_path.split("{time")[0])

    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
        except OSError as exc:
            service_logger.warning(
                f"Не удалось создать директорию для логов '{log_dir}': {exc}. "
                f"Логирование в файл для сервиса '{service_name}' будет отключено."
            )
            return

    service_logger.add(
        log_file_path,
        level=config.level,
        format=config.format,
        rotation=config.rotation,
        retention=config.retention,
        serialize=config.serialize,
        encoding="utf-8",
    )


__all__ = ["setup_logger", "intercept_standard_logging", "InterceptHandler", "LogConfig"]

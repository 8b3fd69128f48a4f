"""Пользовательские исключения API и их обработчики."""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from .logging import api_log as log


class BaseAPIException(Exception):
    """
    Базовое исключение API.

    Attributes:
        status_code: HTTP статус ответа.
        message: Человекочитаемое сообщение об ошибке.
        error_type: Машиночитаемый тип ошибки.
        loc: Место возникновения ошибки (например, ["body", "frequency_days"]).
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Внутренняя ошибка сервера."
    default_error_type: str = "internal_error"

    def __init__(
        self,
        message: str | None = None,
        error_type: str | None = None,
        loc: list[str] | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.error_type = error_type or self.default_error_type
        self.loc = loc
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_detail(self) -> dict[str, Any]:
        """Формирует тело поля `detail` ответа."""
        detail: dict[str, Any] = {"message": self.message, "error_type": self.error_type}
        if self.loc:
            detail["loc"] = self.loc
        return detail


class BadRequestException(BaseAPIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Некорректный запрос."
    default_error_type = "bad_request"


class UnauthorizedException(BaseAPIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Требуется аутентификация."
    default_error_type = "unauthorized"


class ForbiddenException(BaseAPIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Доступ запрещен."
    default_error_type = "forbidden"


class NotFoundException(BaseAPIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Ресурс не найден."
    default_error_type = "not_found"


class ConflictException(BaseAPIException):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Конфликт данных."
    default_error_type = "conflict"


async def api_exception_handler(request: Request, exc: BaseAPIException) -> JSONResponse:
    """Обработчик пользовательских исключений API."""
    log.info(f"{request.method} {request.url.path} -> {exc.status_code} ({exc.error_type}): {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None

    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()}, headers=headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Обработчик ошибок валидации запроса (Pydantic)."""
    log.info(f"{request.method} {request.url.path} -> 422: ошибка валидации запроса.")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Обработчик нарушений ограничений целостности БД (уникальность, внешние ключи)."""
    log.warning(f"{request.method} {request.url.path} -> 409: нарушение целостности данных: {exc.orig}")

    conflict = ConflictException(message="Нарушение ограничений целостности данных.", error_type="integrity_error")
    return JSONResponse(status_code=conflict.status_code, content={"detail": conflict.to_detail()})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Обработчик всех непредвиденных исключений."""
    log.opt(exception=exc).error(
        "{} {} -> 500: необработанное исключение: {}", request.method, request.url.path, exc
    )

    internal = BaseAPIException()
    return JSONResponse(status_code=internal.status_code, content={"detail": internal.to_detail()})


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Регистрирует обработчики исключений в приложении.

    Args:
        app (FastAPI): Экземпляр приложения FastAPI.
    """
    app.add_exception_handler(BaseAPIException, api_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, integrity_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

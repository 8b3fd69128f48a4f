"""
Утилиты для работы с JWT токенами провайдера идентификации.

Сервис не выполняет вход пользователей: токены выпускает внешний провайдер
(подпись HS256 общим секретом, идентификатор пользователя в claim `sub`).
Здесь они только проверяются. `create_access_token` используется в режиме
разработки и в тестах.
Используется библиотека PyJWT.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError, PyJWTError
from pydantic import ValidationError

from src.api.core.config import settings
from src.api.core.exceptions import UnauthorizedException
from src.api.core.logging import api_log as log
from src.api.schemas.auth_schema import Identity, TokenPayload


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Создает JWT токен доступа.

    Args:
        data (dict): Данные для кодирования в payload токена (например, {'sub': user_id}).
        expires_delta (timedelta | None): Время жизни токена. Если None, используется значение из настроек.

    Returns:
        str: Сгенерированный JWT токен.
    """
    to_encode = data.copy()

    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    # 'exp' должно быть Unix timestamp (int)
    to_encode.update({"exp": int(expire.timestamp())})

    if settings.JWT_AUDIENCE and "aud" not in to_encode:
        to_encode["aud"] = settings.JWT_AUDIENCE

    try:
        encoded_jwt = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    except Exception as exc:
        log.opt(exception=exc).error("Ошибка при кодировании JWT: {}", exc)
        raise RuntimeError("Не удалось создать токен доступа.") from exc

    return encoded_jwt


def verify_and_decode_token(token: str) -> TokenPayload:
    """
    Проверяет и декодирует JWT токен, возвращая его payload.

    Args:
        token (str): JWT токен для проверки.

    Returns:
        TokenPayload: Pydantic модель с данными из payload токена.

    Raises:
        UnauthorizedException: Если токен невалиден, истек или payload некорректен.
    """
    try:
        # PyJWT автоматически проверяет подпись, срок действия (exp) и аудиторию (aud), если она задана
        payload_dict = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options={"verify_aud": settings.JWT_AUDIENCE is not None},
        )

        token_payload = TokenPayload(**payload_dict)

    except ExpiredSignatureError:
        log.warning("Срок действия JWT токена истек.")
        raise UnauthorizedException(message="Срок действия токена истек.", error_type="token_expired") from None

    except InvalidTokenError as exc:
        # PyJWT выбрасывает InvalidTokenError для неверных подписей, форматов, аудитории и т.д.
        log.warning(f"Невалидный токен: {exc}")
        raise UnauthorizedException(message="Невалидный токен.", error_type="invalid_token") from exc

    except PyJWTError as exc:
        log.warning(f"Ошибка обработки JWT: {exc}")
        raise UnauthorizedException(message="Ошибка авторизации.", error_type="jwt_error") from exc

    except ValidationError as exc:
        # Например, отсутствует `sub`
        log.warning(f"Ошибка валидации payload токена: {exc.errors()}")
        raise UnauthorizedException(
            message="Некорректные данные в токене.", error_type="invalid_token_payload"
        ) from exc

    return token_payload


def identity_from_token(token: str) -> Identity:
    """
    Возвращает текущую личность (Identity) по токену доступа.

    Часовой пояс берется из `user_metadata.timezone`, иначе из настроек.
    """
    payload = verify_and_decode_token(token)

    timezone_name = payload.user_metadata.get("timezone") if payload.user_metadata else None

    return Identity(
        user_id=payload.sub,
        email=payload.email,
        timezone=timezone_name or settings.DEFAULT_TIMEZONE,
    )

"""Схемы Pydantic для аутентификации."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TokenPayload(BaseModel):
    """
    Схема для данных (payload), закодированных в JWT провайдера идентификации.
    Содержит идентификатор пользователя (`sub`) и время истечения (`exp`).
    """

    model_config = ConfigDict(extra="ignore")

    sub: str = Field(..., min_length=1, max_length=64, description="Идентификатор пользователя (subject)")
    exp: int | None = Field(None, description="Время истечения токена (Unix timestamp)")
    email: str | None = Field(None, description="Email пользователя (если есть)")
    user_metadata: dict[str, Any] | None = Field(None, description="Пользовательские метаданные провайдера")


class Identity(BaseModel):
    """Текущий аутентифицированный пользователь, каким его видит API."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., description="Непрозрачный идентификатор пользователя")
    email: str | None = Field(None, description="Email пользователя")
    timezone: str = Field("UTC", description="Часовой пояс пользователя (IANA)")

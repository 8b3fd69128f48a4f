"""Конфигурация API."""

from urllib.parse import quote_plus

from pydantic import Field, computed_field

from src.core_shared.config import AppSettings


class Settings(AppSettings):
    """Основные настройки API."""

    # --- Статические настройки ---

    # Хост API
    API_HOST: str = "0.0.0.0"  # noqa: S104 - 0.0.0.0 необходимо для Docker контейнера
    # Порт API
    API_PORT: int = 8000
    # Алгоритм подписи JWT (HS256 совпадает с токенами провайдера идентификации)
    JWT_ALGORITHM: str = "HS256"
    # Срок годности JWT токена в минутах (для токенов, выпускаемых в режиме разработки)
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # --- Настройки, читаемые из .env ---

    # Настройки БД
    DB_NAME: str = Field(default="habitize_db", description="Название базы данных")
    DB_USER: str = Field(default="habitize_user", description="Имя пользователя базы данных")
    DB_PASSWORD: str = Field(..., description="Пароль пользователя базы данных")
    DB_HOST: str = Field(
        default="db",
        description="Имя хоста базы данных (название сервиса в Docker)",
    )
    DB_PORT: int = Field(default=5432, description="Порт хоста базы данных")

    # Настройки безопасности
    JWT_SECRET_KEY: str = Field(..., description="Секрет подписи JWT провайдера идентификации")
    JWT_AUDIENCE: str | None = Field(
        default=None,
        description="Ожидаемый claim `aud` (например, 'authenticated'). Если None, не проверяется.",
    )

    # Бизнес-константы проекта
    DEFAULT_TIMEZONE: str = Field(
        default="UTC",
        description="Часовой пояс для вычисления 'сегодня', если токен его не содержит",
    )
    MOMENT_MAX_LENGTH: int = Field(default=2000, gt=0, description="Максимальная длина текста момента")

    # --- Вычисляемые поля ---

    # Формируем URL основной базы данных
    @computed_field(repr=False)  # type: ignore[prop-decorator]
    @property
    def DATABASE_URL(self) -> str:
        """Собирает URL для SQLAlchemy."""

        # Экранируем пользователя и пароль, чтобы спецсимволы не ломали URL
        encoded_user = quote_plus(self.DB_USER)
        encoded_password = quote_plus(self.DB_PASSWORD)

        return f"postgresql+psycopg://{encoded_user}:{encoded_password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"


# Создаем глобальный экземпляр настроек
settings = Settings()  # type: ignore[call-arg]

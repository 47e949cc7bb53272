"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# todo_backend/core/config.py -> project_root/config/.env
BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE = BASE_DIR / "config" / ".env"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Любую настройку можно переопределить через переменную окружения.
    Пример: ORDER_STRATEGY=timestamp uvicorn todo_backend.main:app
    """

    # =========================================================================
    # Database
    # =========================================================================
    # DATABASE_URL - строка подключения к SQLite файлу
    # Для тестов: sqlite+aiosqlite:///:memory:
    DATABASE_URL: str = "sqlite+aiosqlite:///./mydb.sqlite"

    # DATABASE_ECHO - выводить SQL запросы в логи (для отладки)
    DATABASE_ECHO: bool = False

    # SEED_DEFAULT_DATA - заполнить пустую БД стартовыми задачами при запуске
    SEED_DEFAULT_DATA: bool = False

    # =========================================================================
    # Application
    # =========================================================================
    APP_NAME: str = "Todo Backend"

    # PUBLIC_BASE_URL - базовый адрес для поля "url" в ответах.
    # Если не задан, берётся из входящего запроса (request.base_url)
    PUBLIC_BASE_URL: str | None = None

    # ORDER_STRATEGY - откуда берётся поле "order" при создании задачи:
    # "client" - из тела запроса (может быть null)
    # "timestamp" - сервер проставляет текущее время в миллисекундах
    ORDER_STRATEGY: Literal["client", "timestamp"] = "client"

    # =========================================================================
    # HTTP
    # =========================================================================
    CORS_ORIGINS: list[str] = ["*"]
    RATE_LIMIT: str = "100/minute"

    # =========================================================================
    # Logging
    # =========================================================================
    # LOG_LEVEL - уровень логирования: DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_LEVEL: str = "INFO"

    # LOG_FORMAT - "json" (production) или "simple" (разработка)
    LOG_FORMAT: str = "json"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE), env_file_encoding="utf-8", case_sensitive=True
    )


settings = Settings()

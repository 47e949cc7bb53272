"""
Главный файл FastAPI приложения.

Запуск:
    uvicorn todo_backend.main:app --port 8080

API документация:
    http://localhost:8080/docs       - Swagger UI
    http://localhost:8080/redoc      - ReDoc
"""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from . import __version__
from .api import tags_router, todos_router
from .api.dependencies import get_database
from .api.errors import register_error_handlers
from .api.middleware import RequestLoggingMiddleware
from .core.config import settings
from .core.database import Database, database
from .core.logging import get_logger, setup_logging
from .services import seed_default_data

# LOG_LEVEL: DEBUG/INFO/WARNING/ERROR, LOG_FORMAT: json / simple
setup_logging(
    log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT, sql_echo=settings.DATABASE_ECHO
)

logger = get_logger(__name__)

APP_START_TIME: float = 0.0  # Will be set on startup

# ============================================================================
# RATE LIMITER SETUP
# ============================================================================

# Группируем запросы по IP адресу клиента
limiter = Limiter(key_func=get_remote_address)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Превышение лимита запросов в едином формате ErrorResponse."""
    return JSONResponse(
        status_code=429,
        content={
            "error": {
                "code": "RATE_LIMIT_EXCEEDED",
                "message": f"Too many requests. Limit: {exc.detail}",
                "details": None,
            }
        },
    )


# ============================================================================
# LIFESPAN EVENT HANDLER
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: создать таблицы (ошибка здесь останавливает запуск), при
    SEED_DEFAULT_DATA заполнить пустую БД.
    Shutdown: закрыть соединение с БД.
    """
    global APP_START_TIME
    APP_START_TIME = time.time()

    await database.init_schema()

    if settings.SEED_DEFAULT_DATA:
        async with database.session() as session:
            await seed_default_data(session)

    logger.info(
        "Application started",
        extra={
            "app_name": settings.APP_NAME,
            "version": __version__,
            "order_strategy": settings.ORDER_STRATEGY,
            "database_url": settings.DATABASE_URL,
        },
    )

    yield

    await database.dispose()
    logger.info("Application stopped", extra={"uptime_seconds": int(time.time() - APP_START_TIME)})


# ============================================================================
# CREATE APPLICATION
# ============================================================================

app = FastAPI(
    lifespan=lifespan,
    title=settings.APP_NAME,
    description="""
    REST backend для списка задач с тегами.

    ## Модель данных

    ```
    Todos <-> todo_tags <-> Tags (M:M)
    ```

    * Теги в заголовке задачи (`Buy milk #shopping`) создаются и привязываются автоматически
    * Имя тега уникально
    * Удаление задачи или тега удаляет их связи
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(todos_router)
app.include_router(tags_router)

register_error_handlers(app)


# ============================================================================
# ROOT ENDPOINT
# ============================================================================


@app.get("/", tags=["root"], summary="Root endpoint")
@limiter.limit(settings.RATE_LIMIT)
async def root(request: Request):
    """Информация о API и полезные ссылки."""
    return {
        "name": settings.APP_NAME,
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "todos": "/todos/",
            "tags": "/tags/",
        },
        "order_strategy": settings.ORDER_STRATEGY,
    }


# ============================================================================
# HEALTH CHECK
# ============================================================================


@app.get("/health", tags=["health"], summary="Health check")
@limiter.limit(settings.RATE_LIMIT)
async def health_check(request: Request, db: Database = Depends(get_database)):
    """
    Проверка доступности API и БД.

    200 - {"status": "ok", "checks": {"database": "connected", ...}}
    503 - {"status": "error", "checks": {"database": "disconnected", ...}}
    """
    connected = await db.ping()
    uptime_seconds = int(time.time() - APP_START_TIME) if APP_START_TIME > 0 else 0

    return JSONResponse(
        status_code=200 if connected else 503,
        content={
            "status": "ok" if connected else "error",
            "checks": {
                "database": "connected" if connected else "disconnected",
                "version": __version__,
                "uptime_seconds": uptime_seconds,
            },
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )

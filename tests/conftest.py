"""
Pytest fixtures для тестов.

Предоставляет:
- test_database: изолированная SQLite in-memory БД (Database) для каждого теста
- test_db: сессия этой БД для тестов репозиториев и сервисов
- test_client: HTTP клиент для тестирования API endpoints
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from todo_backend.api.dependencies import get_database
from todo_backend.core.database import Database
from todo_backend.main import app

# Test database URL (SQLite in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_database():
    """
    Свой Database на каждый тест.

    StaticPool (внутри Database) держит одно соединение, поэтому
    in-memory БД живёт, пока живёт engine. Таблицы создаются заново.
    """
    database = Database(TEST_DATABASE_URL)
    await database.init_schema()

    yield database

    await database.drop_schema()
    await database.dispose()


@pytest_asyncio.fixture
async def test_db(test_database):
    """
    Async session для тестов репозиториев и сервисов.

    Изменения откатываются после теста.
    """
    async with test_database.session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def test_client(test_database):
    """
    HTTP клиент для API тестов.

    Подменяем get_database: все запросы идут в тестовую БД,
    каждый запрос - отдельная единица работы (commit/rollback).
    """
    app.dependency_overrides[get_database] = lambda: test_database

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def anyio_backend():
    """Используем asyncio для всех async тестов."""
    return "asyncio"


@pytest_asyncio.fixture
async def error_client(test_database):
    """
    HTTP клиент, который отдаёт 500 ответом, а не пробрасывает исключение в тест.

    Нужен для проверки INTERNAL_ERROR: Starlette после обработчика
    повторно поднимает исключение, raise_app_exceptions=False его глушит.
    """
    app.dependency_overrides[get_database] = lambda: test_database

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()

"""
Dependencies для FastAPI endpoints.

Цепочка зависимостей на один запрос:

    get_database -> get_db -> get_todo_service / get_tag_service
    get_mapper (base_url из настроек или из запроса)

В тестах достаточно подменить get_database:
    app.dependency_overrides[get_database] = lambda: test_database
"""

from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.database import Database, database
from ..services import TagService, TodoService
from .mappers import ResponseMapper


def get_database() -> Database:
    """Process-wide database handle."""
    return database


async def get_db(db: Database = Depends(get_database)) -> AsyncGenerator[AsyncSession, None]:
    """
    Одна единица работы на запрос.

    Автоматически:
    1. Ждёт своей очереди (единственный писатель)
    2. Делает commit() при успехе
    3. Делает rollback() при любой ошибке - частичных изменений не остаётся

    Подключается с scope="function": выход из зависимости (commit) выполняется
    до отправки ответа, поэтому неудачный commit превращается в 500, а не в 2xx.
    """
    async with db.session() as session:
        yield session


async def get_todo_service(
    db: AsyncSession = Depends(get_db, scope="function"),
) -> TodoService:
    """Dependency для TodoService."""
    return TodoService(db)


async def get_tag_service(
    db: AsyncSession = Depends(get_db, scope="function"),
) -> TagService:
    """Dependency для TagService."""
    return TagService(db)


def get_mapper(request: Request) -> ResponseMapper:
    """
    Mapper для ответов.

    url ресурсов строится от PUBLIC_BASE_URL, а если он не задан -
    от адреса, по которому пришёл запрос.
    """
    return ResponseMapper(settings.PUBLIC_BASE_URL or str(request.base_url))

"""
Тесты для seed_default_data - стартовые данные пустой БД.
"""

import pytest

from todo_backend.repositories import TagRepository, TodoRepository, TodoTagRepository
from todo_backend.services import TodoService, seed_default_data
from todo_backend.services.seed import DEFAULT_TODOS


@pytest.mark.asyncio
async def test_seed_empty_database(test_db):
    """Test: пустая БД получает 5 задач, 3 тега и по одной связи на задачу."""
    assert await seed_default_data(test_db) is True

    todos = await TodoRepository(test_db).get_all_full()
    assert [t.title for t in todos] == [item["title"] for item in DEFAULT_TODOS]
    assert [t.order for t in todos] == [1, 2, 3, 4, 5]
    assert all(t.completed is False for t in todos)
    assert [t.tags[0].name for t in todos] == [
        "miscellaneous",
        "social",
        "work",
        "social",
        "miscellaneous",
    ]
    assert await TagRepository(test_db).count() == 3
    assert await TodoTagRepository(test_db).count() == 5


@pytest.mark.asyncio
async def test_seed_skips_non_empty_database(test_db):
    """Test: если задачи уже есть, ничего не добавляется."""
    await TodoService(test_db).create_todo("Existing")

    assert await seed_default_data(test_db) is False
    assert await TodoRepository(test_db).count() == 1
    assert await TagRepository(test_db).count() == 0

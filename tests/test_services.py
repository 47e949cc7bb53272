"""
Тесты для Service Layer (Бизнес-логика).

Проверяем:
- Валидацию входных данных (ValidationError_)
- NotFoundError для несуществующих id
- Координацию: задача -> теги -> связи
- Отсутствие дубликатов тегов и висячих связей
"""

import pytest

from todo_backend.core.exceptions import AlreadyExistsError, NotFoundError, ValidationError_
from todo_backend.repositories import TagRepository, TodoTagRepository
from todo_backend.services import AssociationService, TagService, TodoService

# ============================================================================
# TODO SERVICE TESTS
# ============================================================================


@pytest.mark.asyncio
async def test_create_todo_extracts_tags(test_db):
    """Test: "Buy milk #shopping #urgent" -> заголовок без тегов + два тега."""
    service = TodoService(test_db)

    todo = await service.create_todo("Buy milk #shopping #urgent")
    await test_db.commit()

    assert todo.title == "Buy milk"
    assert todo.completed is False
    assert todo.order is None
    assert [t.name for t in todo.tags] == ["shopping", "urgent"]


@pytest.mark.asyncio
async def test_create_todo_reuses_existing_tag(test_db):
    """Test: два todo с одним новым тегом -> ровно один тег, обе задачи связаны."""
    service = TodoService(test_db)

    first = await service.create_todo("First #errands")
    second = await service.create_todo("Second #errands")
    await test_db.commit()

    tag_repo = TagRepository(test_db)
    assert await tag_repo.count() == 1
    assert first.tags[0].id == second.tags[0].id


@pytest.mark.asyncio
async def test_create_todo_duplicate_tag_in_title(test_db):
    """Test: повтор тега в заголовке даёт одну связь."""
    service = TodoService(test_db)

    todo = await service.create_todo("Task #a #a")

    assert [t.name for t in todo.tags] == ["a"]
    assert await TodoTagRepository(test_db).count() == 1


@pytest.mark.asyncio
async def test_create_todo_with_order(test_db):
    """Test: client стратегия - order берётся из запроса."""
    service = TodoService(test_db, order_strategy="client")

    todo = await service.create_todo("Task", completed=True, order=5)

    assert todo.order == 5
    assert todo.completed is True


@pytest.mark.asyncio
async def test_create_todo_timestamp_order(test_db):
    """Test: timestamp стратегия - order выставляет сервер (мс), клиентский игнорируется."""
    service = TodoService(test_db, order_strategy="timestamp")

    todo = await service.create_todo("Task", order=5)

    assert todo.order > 1_600_000_000_000


@pytest.mark.asyncio
@pytest.mark.parametrize("title", ["", None, 42, "#only #tags"])
async def test_create_todo_invalid_title(test_db, title):
    """Test: пустой/не строковый заголовок или заголовок из одних тегов."""
    service = TodoService(test_db)

    with pytest.raises(ValidationError_, match="title"):
        await service.create_todo(title)


@pytest.mark.asyncio
@pytest.mark.parametrize("order", ["1", 1.5, True, 2**63, -(2**63) - 1])
async def test_create_todo_invalid_order(test_db, order):
    """Test: order должен быть целым числом."""
    service = TodoService(test_db)

    with pytest.raises(ValidationError_, match="order"):
        await service.create_todo("Task", order=order)


@pytest.mark.asyncio
async def test_get_todo_not_found(test_db):
    """Test: несуществующая задача."""
    service = TodoService(test_db)

    with pytest.raises(NotFoundError, match="Todo with id=999 not found"):
        await service.get_todo(999)


@pytest.mark.asyncio
async def test_update_todo_partial(test_db):
    """Test: {completed: true} не трогает title и order."""
    service = TodoService(test_db)
    todo = await service.create_todo("Task", order=3)
    await test_db.commit()

    updated = await service.update_todo(todo.id, completed=True)

    assert updated.completed is True
    assert updated.title == "Task"
    assert updated.order == 3


@pytest.mark.asyncio
async def test_update_todo_clear_order(test_db):
    """Test: order можно явно обнулить."""
    service = TodoService(test_db)
    todo = await service.create_todo("Task", order=3)

    updated = await service.update_todo(todo.id, order=None)

    assert updated.order is None


@pytest.mark.asyncio
async def test_update_todo_title_adds_tags(test_db):
    """Test: новый заголовок с тегами добавляет теги к существующим."""
    service = TodoService(test_db)
    todo = await service.create_todo("Task #old")

    updated = await service.update_todo(todo.id, title="Renamed #new")

    assert updated.title == "Renamed"
    assert [t.name for t in updated.tags] == ["old", "new"]


@pytest.mark.asyncio
async def test_update_todo_validation(test_db):
    """Test: неверные значения и неизвестные поля."""
    service = TodoService(test_db)
    todo = await service.create_todo("Task")

    with pytest.raises(ValidationError_, match="completed"):
        await service.update_todo(todo.id, completed=None)

    with pytest.raises(ValidationError_, match="Unknown fields"):
        await service.update_todo(todo.id, priority="high")


@pytest.mark.asyncio
async def test_update_todo_not_found(test_db):
    """Test: обновление несуществующей задачи."""
    service = TodoService(test_db)

    with pytest.raises(NotFoundError):
        await service.update_todo(999, completed=True)


@pytest.mark.asyncio
async def test_delete_todo_removes_links(test_db):
    """Test: удаление задачи не оставляет висячих связей, тег остаётся."""
    service = TodoService(test_db)
    todo = await service.create_todo("Task #work")

    await service.delete_todo(todo.id)

    assert await TodoTagRepository(test_db).count() == 0
    assert await TagRepository(test_db).get_by_name("work") is not None
    with pytest.raises(NotFoundError):
        await service.get_todo(todo.id)


@pytest.mark.asyncio
async def test_delete_todo_not_found(test_db):
    """Test: удаление несуществующей задачи."""
    service = TodoService(test_db)

    with pytest.raises(NotFoundError):
        await service.delete_todo(999)


@pytest.mark.asyncio
async def test_clear_todos(test_db):
    """Test: очистка задач удаляет связи, но не теги."""
    service = TodoService(test_db)
    await service.create_todo("One #a")
    await service.create_todo("Two #b")

    assert await service.clear_todos() == 2
    assert await service.list_todos() == []
    assert await TodoTagRepository(test_db).count() == 0
    assert await TagRepository(test_db).count() == 2


@pytest.mark.asyncio
async def test_add_tag_idempotent(test_db):
    """Test: повторная привязка того же тега - не ошибка и не дубликат."""
    todo_service = TodoService(test_db)
    tag_service = TagService(test_db)
    todo = await todo_service.create_todo("Task")
    tag = await tag_service.create_tag("work")

    await todo_service.add_tag(todo.id, tag.id)
    result = await todo_service.add_tag(todo.id, tag.id)

    assert [t.name for t in result.tags] == ["work"]
    assert await TodoTagRepository(test_db).count() == 1


@pytest.mark.asyncio
async def test_add_tag_missing_entities(test_db):
    """Test: привязка к несуществующей задаче или несуществующего тега."""
    todo_service = TodoService(test_db)
    todo = await todo_service.create_todo("Task")
    tag = await TagService(test_db).create_tag("work")

    with pytest.raises(NotFoundError, match="Todo"):
        await todo_service.add_tag(999, tag.id)

    with pytest.raises(NotFoundError, match="Tag"):
        await todo_service.add_tag(todo.id, 999)


@pytest.mark.asyncio
async def test_list_and_remove_tags(test_db):
    """Test: список тегов задачи, отвязка одного и всех."""
    service = TodoService(test_db)
    todo = await service.create_todo("Task #a #b #c")

    assert [t.name for t in await service.list_tags(todo.id)] == ["a", "b", "c"]

    tag_a = await TagRepository(test_db).get_by_name("a")
    await service.remove_tag(todo.id, tag_a.id)
    assert [t.name for t in await service.list_tags(todo.id)] == ["b", "c"]

    assert await service.remove_all_tags(todo.id) == 2
    assert await service.list_tags(todo.id) == []


@pytest.mark.asyncio
async def test_remove_tag_not_linked(test_db):
    """Test: отвязка тега, который не привязан - NotFoundError."""
    service = TodoService(test_db)
    todo = await service.create_todo("Task")
    tag = await TagService(test_db).create_tag("work")

    with pytest.raises(NotFoundError):
        await service.remove_tag(todo.id, tag.id)


@pytest.mark.asyncio
async def test_list_tags_todo_not_found(test_db):
    service = TodoService(test_db)

    with pytest.raises(NotFoundError):
        await service.list_tags(999)

    with pytest.raises(NotFoundError):
        await service.remove_all_tags(999)


# ============================================================================
# TAG SERVICE TESTS
# ============================================================================


@pytest.mark.asyncio
async def test_create_tag(test_db):
    """Test: создание тега, пробелы по краям обрезаются."""
    service = TagService(test_db)

    tag = await service.create_tag("  work ")

    assert tag.id is not None
    assert tag.name == "work"
    assert tag.todos == []


@pytest.mark.asyncio
async def test_create_tag_duplicate(test_db):
    """Test: дубликат имени - AlreadyExistsError, а не молчаливое переиспользование."""
    service = TagService(test_db)
    await service.create_tag("work")
    await test_db.commit()

    with pytest.raises(AlreadyExistsError, match="already exists"):
        await service.create_tag("work")


@pytest.mark.asyncio
@pytest.mark.parametrize("title", ["", "   ", None, 7])
async def test_create_tag_invalid_title(test_db, title):
    service = TagService(test_db)

    with pytest.raises(ValidationError_):
        await service.create_tag(title)


@pytest.mark.asyncio
async def test_rename_tag_visible_in_todos(test_db):
    """Test: переименование тега видно в задаче."""
    todo_service = TodoService(test_db)
    tag_service = TagService(test_db)
    todo = await todo_service.create_todo("Task #wrk")
    tag = await TagRepository(test_db).get_by_name("wrk")

    renamed = await tag_service.rename_tag(tag.id, "work")

    assert renamed.name == "work"
    assert [t.name for t in (await todo_service.get_todo(todo.id)).tags] == ["work"]


@pytest.mark.asyncio
async def test_rename_tag_not_found(test_db):
    service = TagService(test_db)

    with pytest.raises(NotFoundError):
        await service.rename_tag(999, "work")


@pytest.mark.asyncio
async def test_rename_tag_to_existing_name(test_db):
    service = TagService(test_db)
    await service.create_tag("work")
    home = await service.create_tag("home")
    await test_db.commit()

    with pytest.raises(AlreadyExistsError):
        await service.rename_tag(home.id, "work")


@pytest.mark.asyncio
async def test_delete_tag_removes_it_from_todos(test_db):
    """Test: после удаления тега у задач его больше нет."""
    todo_service = TodoService(test_db)
    tag_service = TagService(test_db)
    first = await todo_service.create_todo("First #work #home")
    second = await todo_service.create_todo("Second #work")
    work = await TagRepository(test_db).get_by_name("work")

    await tag_service.delete_tag(work.id)

    assert [t.name for t in (await todo_service.get_todo(first.id)).tags] == ["home"]
    assert (await todo_service.get_todo(second.id)).tags == []


@pytest.mark.asyncio
async def test_delete_tag_not_found(test_db):
    service = TagService(test_db)

    with pytest.raises(NotFoundError):
        await service.delete_tag(999)


@pytest.mark.asyncio
async def test_clear_tags(test_db):
    """Test: очистка тегов оставляет задачи без тегов."""
    todo_service = TodoService(test_db)
    tag_service = TagService(test_db)
    todo = await todo_service.create_todo("Task #a #b")

    assert await tag_service.clear_tags() == 2
    assert await tag_service.list_tags() == []
    assert (await todo_service.get_todo(todo.id)).tags == []


@pytest.mark.asyncio
async def test_list_todos_for_tag(test_db):
    """Test: задачи с тегом."""
    todo_service = TodoService(test_db)
    tag_service = TagService(test_db)
    await todo_service.create_todo("First #work")
    await todo_service.create_todo("Second")
    await todo_service.create_todo("Third #work")
    work = await TagRepository(test_db).get_by_name("work")

    todos = await tag_service.list_todos(work.id)

    assert [t.title for t in todos] == ["First", "Third"]

    with pytest.raises(NotFoundError):
        await tag_service.list_todos(999)


# ============================================================================
# ASSOCIATION SERVICE TESTS
# ============================================================================


@pytest.mark.asyncio
async def test_resolve_or_create_tag(test_db):
    """Test: тег создаётся один раз, потом переиспользуется."""
    service = AssociationService(test_db)

    created = await service.resolve_or_create_tag("work")
    resolved = await service.resolve_or_create_tag("work")

    assert created.id == resolved.id
    assert await TagRepository(test_db).count() == 1

    with pytest.raises(ValidationError_):
        await service.resolve_or_create_tag("  ")


@pytest.mark.asyncio
async def test_link_returns_whether_created(test_db):
    todo = await TodoService(test_db).create_todo("Task")
    service = AssociationService(test_db)
    tag = await service.resolve_or_create_tag("work")

    assert await service.link(todo.id, tag.id) is True
    assert await service.link(todo.id, tag.id) is False

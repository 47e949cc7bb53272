"""
API endpoints для работы с задачами.

Коллекции - с завершающим слэшем (/todos/), элементы - без (/todos/1).
Теги можно указывать прямо в заголовке: "Buy milk #shopping".
"""

from fastapi import APIRouter, Depends, status

from ..services import TodoService
from .dependencies import get_mapper, get_todo_service
from .mappers import ResponseMapper
from .schemas import (
    ErrorResponse,
    ResourceId,
    ResourceRef,
    TodoCreate,
    TodoResponse,
    TodoTagLink,
    TodoUpdate,
)

router = APIRouter(prefix="/todos", tags=["todos"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Задача не найдена"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Ошибка валидации"}}


# ============================================================================
# COLLECTION
# ============================================================================


@router.get("/", response_model=list[TodoResponse], summary="Получить все задачи")
async def list_todos(
    service: TodoService = Depends(get_todo_service),
    mapper: ResponseMapper = Depends(get_mapper),
) -> list[TodoResponse]:
    """
    Все задачи с тегами.

    ```
    GET /todos/
    ```
    """
    todos = await service.list_todos()
    return [mapper.todo(t) for t in todos]


@router.post(
    "/",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать задачу",
    responses=BAD_REQUEST,
)
async def create_todo(
    data: TodoCreate,
    service: TodoService = Depends(get_todo_service),
    mapper: ResponseMapper = Depends(get_mapper),
) -> TodoResponse:
    """
    Создать задачу.

    Пример запроса:
    ```json
    {"title": "Buy milk #shopping #urgent"}
    ```

    Будет создана задача "Buy milk" с тегами shopping и urgent
    (теги создаются, если их ещё нет).
    """
    todo = await service.create_todo(data.title, completed=data.completed, order=data.order)
    return mapper.todo(todo)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT, summary="Удалить все задачи")
async def clear_todos(service: TodoService = Depends(get_todo_service)) -> None:
    """Удалить все задачи (теги остаются, связи удаляются)."""
    await service.clear_todos()


# ============================================================================
# ITEM
# ============================================================================


@router.get(
    "/{todo_id}", response_model=TodoResponse, summary="Получить задачу", responses=NOT_FOUND
)
async def get_todo(
    todo_id: ResourceId,
    service: TodoService = Depends(get_todo_service),
    mapper: ResponseMapper = Depends(get_mapper),
) -> TodoResponse:
    """Получить задачу с тегами по ID."""
    todo = await service.get_todo(todo_id)
    return mapper.todo(todo)


@router.patch(
    "/{todo_id}",
    response_model=TodoResponse,
    summary="Изменить задачу",
    responses={**BAD_REQUEST, **NOT_FOUND},
)
async def update_todo(
    todo_id: ResourceId,
    data: TodoUpdate,
    service: TodoService = Depends(get_todo_service),
    mapper: ResponseMapper = Depends(get_mapper),
) -> TodoResponse:
    """
    Частичное обновление.

    Пример запроса:
    ```json
    {"completed": true}
    ```

    Поля, которых нет в теле, не меняются.
    """
    todo = await service.update_todo(todo_id, **data.model_dump(exclude_unset=True))
    return mapper.todo(todo)


@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Удалить задачу",
    responses=NOT_FOUND,
)
async def delete_todo(
    todo_id: ResourceId, service: TodoService = Depends(get_todo_service)
) -> None:
    """Удалить задачу и её связи с тегами."""
    await service.delete_todo(todo_id)


# ============================================================================
# TAGS OF A TODO
# ============================================================================


@router.post(
    "/{todo_id}/tags/",
    response_model=TodoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Привязать тег к задаче",
    responses={**BAD_REQUEST, **NOT_FOUND},
)
async def add_tag(
    todo_id: ResourceId,
    data: TodoTagLink,
    service: TodoService = Depends(get_todo_service),
    mapper: ResponseMapper = Depends(get_mapper),
) -> TodoResponse:
    """
    Привязать существующий тег.

    Пример запроса:
    ```json
    {"id": "3"}
    ```

    Повторная привязка того же тега не создаёт дубликат и не является ошибкой.
    """
    todo = await service.add_tag(todo_id, data.id)
    return mapper.todo(todo)


@router.get(
    "/{todo_id}/tags/",
    response_model=list[ResourceRef],
    summary="Теги задачи",
    responses=NOT_FOUND,
)
async def list_tags(
    todo_id: ResourceId,
    service: TodoService = Depends(get_todo_service),
    mapper: ResponseMapper = Depends(get_mapper),
) -> list[ResourceRef]:
    """Список тегов задачи."""
    tags = await service.list_tags(todo_id)
    return [mapper.tag_ref(t) for t in tags]


@router.delete(
    "/{todo_id}/tags/",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Отвязать все теги",
    responses=NOT_FOUND,
)
async def remove_all_tags(
    todo_id: ResourceId, service: TodoService = Depends(get_todo_service)
) -> None:
    """Отвязать от задачи все теги (сами теги остаются)."""
    await service.remove_all_tags(todo_id)


@router.delete(
    "/{todo_id}/tags/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Отвязать тег",
    responses=NOT_FOUND,
)
async def remove_tag(
    todo_id: ResourceId, tag_id: ResourceId, service: TodoService = Depends(get_todo_service)
) -> None:
    """Отвязать один тег; 404 если тег не был привязан."""
    await service.remove_tag(todo_id, tag_id)

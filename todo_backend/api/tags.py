"""API endpoints для работы с тегами."""

from fastapi import APIRouter, Depends, status

from ..services import TagService
from .dependencies import get_mapper, get_tag_service
from .mappers import ResponseMapper
from .schemas import (
    ErrorResponse,
    ResourceId,
    TagCreate,
    TagResponse,
    TagUpdate,
    TodoResponse,
)

router = APIRouter(prefix="/tags", tags=["tags"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Тег не найден"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Ошибка валидации или имя занято"}}


@router.get("/", response_model=list[TagResponse], summary="Получить все теги")
async def list_tags(
    service: TagService = Depends(get_tag_service),
    mapper: ResponseMapper = Depends(get_mapper),
) -> list[TagResponse]:
    """Все теги со ссылками на их задачи."""
    tags = await service.list_tags()
    return [mapper.tag(t) for t in tags]


@router.post(
    "/",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать тег",
    responses=BAD_REQUEST,
)
async def create_tag(
    data: TagCreate,
    service: TagService = Depends(get_tag_service),
    mapper: ResponseMapper = Depends(get_mapper),
) -> TagResponse:
    """
    Создать тег.

    Пример запроса:
    ```json
    {"title": "work"}
    ```

    Если тег "work" уже есть - 400 ALREADY_EXISTS.
    """
    tag = await service.create_tag(data.title)
    return mapper.tag(tag)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT, summary="Удалить все теги")
async def clear_tags(service: TagService = Depends(get_tag_service)) -> None:
    """Удалить все теги; у задач пропадают все теги."""
    await service.clear_tags()


@router.get("/{tag_id}", response_model=TagResponse, summary="Получить тег", responses=NOT_FOUND)
async def get_tag(
    tag_id: ResourceId,
    service: TagService = Depends(get_tag_service),
    mapper: ResponseMapper = Depends(get_mapper),
) -> TagResponse:
    """Получить тег по ID вместе с задачами."""
    tag = await service.get_tag(tag_id)
    return mapper.tag(tag)


@router.patch(
    "/{tag_id}",
    response_model=TagResponse,
    summary="Переименовать тег",
    responses={**BAD_REQUEST, **NOT_FOUND},
)
async def rename_tag(
    tag_id: ResourceId,
    data: TagUpdate,
    service: TagService = Depends(get_tag_service),
    mapper: ResponseMapper = Depends(get_mapper),
) -> TagResponse:
    """
    Переименовать тег.

    Новое имя сразу видно во всех задачах с этим тегом.
    """
    tag = await service.rename_tag(tag_id, data.title)
    return mapper.tag(tag)


@router.delete(
    "/{tag_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Удалить тег", responses=NOT_FOUND
)
async def delete_tag(
    tag_id: ResourceId, service: TagService = Depends(get_tag_service)
) -> None:
    """Удалить тег и все его связи с задачами."""
    await service.delete_tag(tag_id)


@router.get(
    "/{tag_id}/todos/",
    response_model=list[TodoResponse],
    summary="Задачи с тегом",
    responses=NOT_FOUND,
)
async def list_todos(
    tag_id: ResourceId,
    service: TagService = Depends(get_tag_service),
    mapper: ResponseMapper = Depends(get_mapper),
) -> list[TodoResponse]:
    """Все задачи, помеченные тегом."""
    todos = await service.list_todos(tag_id)
    return [mapper.todo(t) for t in todos]

"""
Pydantic схемы для API.

Входящие схемы валидируют тело запроса (ошибка -> 400 VALIDATION_ERROR).
Исходящие схемы описывают внешний вид ресурсов: id - строка, completed - bool,
order - число или null, url вычисляется при ответе (см. mappers.py).
"""

from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, Field

# SQLite INTEGER - знаковое 64-битное число; всё, что шире, отклоняем ещё до БД (400)
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1

# ID ресурса в пути: /todos/{todo_id}, /tags/{tag_id}
ResourceId = Annotated[int, Path(ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)]

# ============================================================================
# TODO SCHEMAS
# ============================================================================


class TodoCreate(BaseModel):
    """
    Схема для создания задачи (POST /todos/).

    Теги можно указать прямо в заголовке:
    {
        "title": "Buy milk #shopping #urgent",
        "completed": false,
        "order": 3
    }
    """

    title: str = Field(..., min_length=1, description="Заголовок, может содержать #теги")
    completed: bool = Field(default=False, description="Выполнена ли задача")
    order: int | None = Field(
        default=None, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX, description="Порядок для клиента"
    )


class TodoUpdate(BaseModel):
    """
    Схема для частичного обновления задачи (PATCH /todos/{id}).

    Передаются только изменяемые поля:
    {"completed": true}
    """

    title: str | None = Field(None, min_length=1)
    completed: bool | None = None
    order: int | None = Field(None, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)


class TodoTagLink(BaseModel):
    """
    Тело POST /todos/{id}/tags/ - ID существующего тега.

    Пример: {"id": "3"} или {"id": 3}
    """

    id: int = Field(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX, description="ID тега")


class ResourceRef(BaseModel):
    """Краткая ссылка на связанный ресурс (тег внутри задачи или задача внутри тега)."""

    id: str
    title: str
    url: str


class TodoResponse(BaseModel):
    """
    Задача в ответе API.

    Пример:
    {
        "id": "1",
        "title": "Buy milk",
        "completed": false,
        "order": null,
        "url": "http://localhost:8080/todos/1",
        "tags": [{"id": "1", "title": "shopping", "url": "http://localhost:8080/tags/1"}]
    }
    """

    id: str
    title: str
    completed: bool
    order: int | None
    url: str
    tags: list[ResourceRef] = []


# ============================================================================
# TAG SCHEMAS
# ============================================================================


class TagCreate(BaseModel):
    """
    Схема для создания тега (POST /tags/).

    Пример: {"title": "work"}
    """

    title: str = Field(..., min_length=1, description="Название тега (уникальное)")


class TagUpdate(BaseModel):
    """Схема для переименования тега (PATCH /tags/{id})."""

    title: str = Field(..., min_length=1)


class TagResponse(BaseModel):
    """
    Тег в ответе API.

    Пример:
    {
        "id": "2",
        "title": "work",
        "url": "http://localhost:8080/tags/2",
        "todos": [{"id": "3", "title": "Finish report", "url": "http://localhost:8080/todos/3"}]
    }
    """

    id: str
    title: str
    url: str
    todos: list[ResourceRef] = []


# ============================================================================
# COMMON SCHEMAS
# ============================================================================


class ErrorDetail(BaseModel):
    """
    Детали ошибки для конкретного поля.

    Пример:
    {"field": "title", "message": "Field required"}
    """

    field: str = Field(..., description="Название поля с ошибкой")
    message: str = Field(..., description="Описание ошибки")


class ErrorBody(BaseModel):
    """
    Тело ошибки.

    Коды:
    - VALIDATION_ERROR: неверные входные данные (400)
    - ALREADY_EXISTS: имя тега занято (400)
    - NOT_FOUND: ресурс не найден (404)
    - INTERNAL_ERROR: ошибка хранилища или сервера (500)
    """

    code: str = Field(..., description="Код ошибки")
    message: str = Field(..., description="Человекочитаемое сообщение")
    details: list[ErrorDetail] | None = Field(default=None, description="Ошибки по полям")


class ErrorResponse(BaseModel):
    """
    Единый формат ответа для всех ошибок API.

    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Todo with id=999 not found",
            "details": null
        }
    }
    """

    error: ErrorBody

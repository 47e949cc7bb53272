"""Mapping of stored rows to the external JSON representation."""

from ..models import Tag, Todo
from .schemas import ResourceRef, TagResponse, TodoResponse


class ResponseMapper:
    """
    Превращает ORM объекты в схемы ответа, поле за полем.

    - id -> строка ("1", а не 1)
    - completed -> bool (в SQLite хранится 0/1)
    - order -> число или None (поле не пропадает из ответа)
    - url -> {base_url}/{todos|tags}/{id}, в БД не хранится
    - Tag.name -> "title"
    """

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def url(self, kind: str, id: int) -> str:
        return f"{self.base_url}/{kind}/{id}"

    def todo_ref(self, todo: Todo) -> ResourceRef:
        return ResourceRef(id=str(todo.id), title=todo.title, url=self.url("todos", todo.id))

    def tag_ref(self, tag: Tag) -> ResourceRef:
        return ResourceRef(id=str(tag.id), title=tag.name, url=self.url("tags", tag.id))

    def todo(self, todo: Todo) -> TodoResponse:
        """Задача с тегами; ``todo.tags`` должны быть загружены заранее."""
        return TodoResponse(
            id=str(todo.id),
            title=todo.title,
            completed=bool(todo.completed),
            order=todo.order,
            url=self.url("todos", todo.id),
            tags=[self.tag_ref(tag) for tag in todo.tags],
        )

    def tag(self, tag: Tag) -> TagResponse:
        """Тег с задачами; ``tag.todos`` должны быть загружены заранее."""
        return TagResponse(
            id=str(tag.id),
            title=tag.name,
            url=self.url("tags", tag.id),
            todos=[self.todo_ref(todo) for todo in tag.todos],
        )

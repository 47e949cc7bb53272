"""Todo service with business logic."""

import time
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.exceptions import NotFoundError, ValidationError_
from ..core.logging import get_logger
from ..models import Tag, Todo
from ..repositories import TagRepository, TodoRepository, TodoTagRepository
from .association import AssociationService
from .tag_extraction import extract_tags

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("title", "completed", "order")

# order хранится в SQLite INTEGER (64 бита со знаком)
ORDER_MIN = -(2**63)
ORDER_MAX = 2**63 - 1


class TodoService:
    """
    Сервис для работы с задачами.

    Задача связана с тегами (Many-to-Many), поэтому сервис координирует
    несколько репозиториев:
    - TodoRepository - сами задачи
    - TagRepository / TodoTagRepository - теги и связи (через AssociationService)
    """

    def __init__(self, db: AsyncSession, order_strategy: str | None = None):
        """
        Args:
            db: Сессия текущей единицы работы
            order_strategy: "client" или "timestamp" (по умолчанию из настроек)
        """
        self.db = db
        self.order_strategy = order_strategy or settings.ORDER_STRATEGY
        self.todo_repo = TodoRepository(db)
        self.tag_repo = TagRepository(db)
        self.link_repo = TodoTagRepository(db)
        self.associations = AssociationService(db)

    async def list_todos(self) -> list[Todo]:
        """Все задачи с тегами в порядке создания."""
        return await self.todo_repo.get_all_full()

    async def get_todo(self, todo_id: int) -> Todo:
        """
        Получить задачу с тегами.

        Raises:
            NotFoundError: задача не найдена
        """
        todo = await self.todo_repo.get_by_id_full(todo_id)
        if todo is None:
            raise NotFoundError("Todo", todo_id)
        return todo

    async def create_todo(
        self, title: Any, completed: Any = False, order: Any = None
    ) -> Todo:
        """
        Создать задачу; теги берутся из заголовка.

        Пример:
            await service.create_todo("Buy milk #shopping #urgent")
            # title = "Buy milk", теги: shopping, urgent

        Бизнес-правила:
        1. Заголовок - непустая строка (и после удаления тегов тоже)
        2. order - целое число или None
        3. При ORDER_STRATEGY="timestamp" order проставляет сервер
        4. Неизвестные теги создаются, известные переиспользуются
        """
        # 1. ВАЛИДАЦИЯ
        cleaned_title, tag_names = self._parse_title(title)
        self._validate_completed(completed)
        self._validate_order(order)

        # 2. ПОЛИТИКА ПОРЯДКА
        if self.order_strategy == "timestamp":
            order = int(time.time() * 1000)

        # 3. СОЗДАНИЕ
        todo = await self.todo_repo.create(
            Todo(title=cleaned_title, completed=bool(completed), order=order)
        )

        # 4. КООРДИНАЦИЯ: теги и связи в той же транзакции
        await self.associations.link_names(todo.id, tag_names)

        logger.info("Todo created", extra={"todo_id": todo.id, "tags": tag_names})
        return await self.get_todo(todo.id)

    async def update_todo(self, todo_id: int, **changes: Any) -> Todo:
        """
        Частичное обновление: меняются только переданные поля.

        Пример:
            await service.update_todo(1, completed=True)  # title и order прежние

        Если передан title, теги из него добавляются к уже существующим.

        Raises:
            NotFoundError: задача не найдена
            ValidationError_: неизвестное поле или неверный тип значения
        """
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError_(f"Unknown fields: {', '.join(sorted(unknown))}")

        tag_names: list[str] = []
        values: dict[str, Any] = {}

        if "title" in changes:
            values["title"], tag_names = self._parse_title(changes["title"])
        if "completed" in changes:
            self._validate_completed(changes["completed"])
            values["completed"] = bool(changes["completed"])
        if "order" in changes:
            self._validate_order(changes["order"])
            values["order"] = changes["order"]

        todo = await self.todo_repo.update(todo_id, **values)
        if todo is None:
            raise NotFoundError("Todo", todo_id)

        await self.associations.link_names(todo_id, tag_names)

        logger.info("Todo updated", extra={"todo_id": todo_id, "fields": sorted(values)})
        return await self.get_todo(todo_id)

    async def delete_todo(self, todo_id: int) -> None:
        """
        Удалить задачу вместе с её связями.

        Raises:
            NotFoundError: задача не найдена (в БД ничего не меняется)
        """
        await self.link_repo.remove_all_for_todo(todo_id)
        if not await self.todo_repo.delete(todo_id):
            raise NotFoundError("Todo", todo_id)

        logger.info("Todo deleted", extra={"todo_id": todo_id})

    async def clear_todos(self) -> int:
        """
        Удалить все задачи и все связи. Теги остаются.

        Returns:
            Количество удалённых задач
        """
        await self.link_repo.remove_all()
        deleted = await self.todo_repo.delete_all()
        logger.info("Todos cleared", extra={"deleted": deleted})
        return deleted

    # Теги задачи

    async def add_tag(self, todo_id: int, tag_id: int) -> Todo:
        """
        Привязать существующий тег к задаче (повторный вызов - не ошибка).

        Raises:
            NotFoundError: задача или тег не найдены
        """
        await self.associations.link(todo_id, tag_id)
        return await self.get_todo(todo_id)

    async def list_tags(self, todo_id: int) -> list[Tag]:
        """
        Теги задачи.

        Raises:
            NotFoundError: задача не найдена
        """
        if not await self.todo_repo.exists(todo_id):
            raise NotFoundError("Todo", todo_id)
        return await self.tag_repo.get_by_todo(todo_id)

    async def remove_tag(self, todo_id: int, tag_id: int) -> None:
        """Отвязать тег; NotFoundError если связи нет."""
        await self.associations.unlink(todo_id, tag_id)

    async def remove_all_tags(self, todo_id: int) -> int:
        """Отвязать все теги задачи."""
        return await self.associations.unlink_all(todo_id)

    # Вспомогательные методы (private)

    def _parse_title(self, title: Any) -> tuple[str, list[str]]:
        if not isinstance(title, str) or not title:
            raise ValidationError_(
                '"title" must be a string with at least one character', field="title"
            )

        cleaned, tag_names = extract_tags(title)
        if not cleaned:
            raise ValidationError_('"title" must contain text besides tags', field="title")
        return cleaned, tag_names

    def _validate_completed(self, completed: Any) -> None:
        if not isinstance(completed, bool):
            raise ValidationError_('"completed" must be a boolean', field="completed")

    def _validate_order(self, order: Any) -> None:
        # bool - подкласс int, но порядком не является
        if order is not None and (isinstance(order, bool) or not isinstance(order, int)):
            raise ValidationError_('"order" must be an integer', field="order")
        if order is not None and not ORDER_MIN <= order <= ORDER_MAX:
            raise ValidationError_('"order" is out of range', field="order")

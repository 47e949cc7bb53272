"""Association manager: links between todos and tags."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError, ValidationError_
from ..core.logging import get_logger
from ..models import Tag
from ..repositories import TagRepository, TodoRepository, TodoTagRepository

logger = get_logger(__name__)


class AssociationService:
    """
    Общая логика связей задача <-> тег, которую используют TodoService и TagService.

    Правила:
    1. Связь ссылается только на существующие задачу и тег
    2. Одна связь на пару (повторная вставка - не ошибка)
    3. Тег по имени ищется, а если его нет - создаётся (без дубликатов)

    Все методы работают внутри текущей единицы работы (Database.session()),
    поэтому цепочка "найти/создать тег -> связать" либо применяется целиком,
    либо откатывается целиком.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.todo_repo = TodoRepository(db)
        self.tag_repo = TagRepository(db)
        self.link_repo = TodoTagRepository(db)

    async def resolve_or_create_tag(self, name: str) -> Tag:
        """
        Найти тег по имени или создать новый.

        Raises:
            ValidationError_: пустое имя
        """
        if not name or not name.strip():
            raise ValidationError_("Tag title cannot be empty", field="title")

        tag = await self.tag_repo.get_or_create(name.strip())
        logger.debug("Tag resolved", extra={"tag_id": tag.id, "tag_name": tag.name})
        return tag

    async def link(self, todo_id: int, tag_id: int) -> bool:
        """
        Связать задачу с тегом (идемпотентно).

        Returns:
            True если связь создана, False если она уже была

        Raises:
            NotFoundError: задача или тег не существуют
        """
        if not await self.todo_repo.exists(todo_id):
            raise NotFoundError("Todo", todo_id)
        if not await self.tag_repo.exists(tag_id):
            raise NotFoundError("Tag", tag_id)

        created = await self.link_repo.add(todo_id, tag_id)
        if created:
            logger.info("Tag linked", extra={"todo_id": todo_id, "tag_id": tag_id})
        return created

    async def link_names(self, todo_id: int, names: list[str]) -> list[Tag]:
        """
        Связать задачу с тегами по именам, создав недостающие теги.

        Повторяющиеся имена обрабатываются один раз.
        """
        tags: list[Tag] = []
        for name in dict.fromkeys(names):
            tag = await self.resolve_or_create_tag(name)
            await self.link(todo_id, tag.id)
            tags.append(tag)
        return tags

    async def unlink(self, todo_id: int, tag_id: int) -> None:
        """
        Удалить связь задачи с тегом.

        Raises:
            NotFoundError: задачи нет или тег к ней не привязан
        """
        if not await self.todo_repo.exists(todo_id):
            raise NotFoundError("Todo", todo_id)

        if not await self.link_repo.remove(todo_id, tag_id):
            raise NotFoundError(f"Tag linked to todo {todo_id}", tag_id)

        logger.info("Tag unlinked", extra={"todo_id": todo_id, "tag_id": tag_id})

    async def unlink_all(self, todo_id: int) -> int:
        """
        Удалить все связи задачи.

        Returns:
            Количество удалённых связей

        Raises:
            NotFoundError: задачи нет
        """
        if not await self.todo_repo.exists(todo_id):
            raise NotFoundError("Todo", todo_id)

        removed = await self.link_repo.remove_all_for_todo(todo_id)
        logger.info("All tags unlinked", extra={"todo_id": todo_id, "removed": removed})
        return removed

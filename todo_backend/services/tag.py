"""Tag service with business logic."""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import AlreadyExistsError, NotFoundError, ValidationError_
from ..core.logging import get_logger
from ..models import Tag, Todo
from ..repositories import TagRepository, TodoRepository, TodoTagRepository

logger = get_logger(__name__)


class TagService:
    """
    Сервис для работы с тегами.

    Уникальность имени тега обеспечивает сама БД (UNIQUE на tags.name).
    Здесь дубликат не склеивается молча, а превращается в AlreadyExistsError;
    переиспользование существующего тега делает AssociationService
    при создании задачи.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tag_repo = TagRepository(db)
        self.todo_repo = TodoRepository(db)
        self.link_repo = TodoTagRepository(db)

    async def list_tags(self) -> list[Tag]:
        """Все теги со связанными задачами."""
        return await self.tag_repo.get_all_full()

    async def get_tag(self, tag_id: int) -> Tag:
        """
        Получить тег со связанными задачами.

        Raises:
            NotFoundError: тег не найден
        """
        tag = await self.tag_repo.get_by_id_full(tag_id)
        if tag is None:
            raise NotFoundError("Tag", tag_id)
        return tag

    async def create_tag(self, title: Any) -> Tag:
        """
        Создать тег.

        Raises:
            ValidationError_: пустое название
            AlreadyExistsError: тег с таким названием уже есть
        """
        name = self._validate_title(title)

        try:
            tag = await self.tag_repo.create(Tag(name=name))
        except IntegrityError as e:
            raise AlreadyExistsError("Tag", "title", name) from e

        logger.info("Tag created", extra={"tag_id": tag.id, "tag_name": name})
        return await self.get_tag(tag.id)

    async def rename_tag(self, tag_id: int, title: Any) -> Tag:
        """
        Переименовать тег. Новое имя сразу видно во всех задачах с этим тегом.

        Raises:
            ValidationError_: пустое название
            NotFoundError: тег не найден
            AlreadyExistsError: имя занято другим тегом
        """
        name = self._validate_title(title)

        try:
            tag = await self.tag_repo.update(tag_id, name=name)
        except IntegrityError as e:
            raise AlreadyExistsError("Tag", "title", name) from e

        if tag is None:
            raise NotFoundError("Tag", tag_id)

        logger.info("Tag renamed", extra={"tag_id": tag_id, "tag_name": name})
        return await self.get_tag(tag_id)

    async def delete_tag(self, tag_id: int) -> None:
        """
        Удалить тег; он пропадает из списков тегов всех задач.

        Raises:
            NotFoundError: тег не найден
        """
        await self.link_repo.remove_all_for_tag(tag_id)
        if not await self.tag_repo.delete(tag_id):
            raise NotFoundError("Tag", tag_id)

        logger.info("Tag deleted", extra={"tag_id": tag_id})

    async def clear_tags(self) -> int:
        """
        Удалить все теги и все связи. Задачи остаются.

        Returns:
            Количество удалённых тегов
        """
        await self.link_repo.remove_all()
        deleted = await self.tag_repo.delete_all()
        logger.info("Tags cleared", extra={"deleted": deleted})
        return deleted

    async def list_todos(self, tag_id: int) -> list[Todo]:
        """
        Задачи, помеченные тегом.

        Raises:
            NotFoundError: тег не найден
        """
        if not await self.tag_repo.exists(tag_id):
            raise NotFoundError("Tag", tag_id)
        return await self.todo_repo.get_by_tag(tag_id)

    # Вспомогательные методы (private)

    def _validate_title(self, title: Any) -> str:
        if not isinstance(title, str) or not title.strip():
            raise ValidationError_(
                '"title" must be a string with at least one character', field="title"
            )
        return title.strip()

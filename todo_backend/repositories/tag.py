"""Tag repository with specific queries."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models import Tag, Todo
from .base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    """Репозиторий для работы с тегами."""

    def __init__(self, db: AsyncSession):
        super().__init__(Tag, db)

    async def get_by_name(self, name: str) -> Tag | None:
        """
        Получить тег по имени.

        SQL эквивалент:
            SELECT * FROM tags WHERE name = {name};
        """
        result = await self.db.execute(select(Tag).where(Tag.name == name))
        return result.scalar_one_or_none()

    async def get_or_create(self, name: str) -> Tag:
        """
        Получить тег по имени или создать, если не существует.

        Паттерн "get or create": дубликаты тегов не создаются.
        Вызывающий код должен держать единицу работы (Database.session()),
        иначе два запроса могут одновременно не найти тег и оба его вставить.
        """
        tag = await self.get_by_name(name)
        if tag is None:
            tag = await self.create(Tag(name=name))
        return tag

    async def get_by_id_full(self, id: int) -> Tag | None:
        """Получить тег вместе со связанными задачами."""
        result = await self.db.execute(
            select(Tag)
            .options(selectinload(Tag.todos))
            .where(Tag.id == id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_all_full(self) -> list[Tag]:
        """Все теги (в порядке создания) со связанными задачами."""
        result = await self.db.execute(
            select(Tag)
            .options(selectinload(Tag.todos))
            .order_by(Tag.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_by_todo(self, todo_id: int) -> list[Tag]:
        """
        Получить все теги задачи.

        SQL эквивалент:
            SELECT tags.*
            FROM tags
            JOIN todo_tags ON tags.id = todo_tags.tag_id
            WHERE todo_tags.todo_id = {todo_id};
        """
        result = await self.db.execute(
            select(Tag).join(Tag.todos).where(Todo.id == todo_id).order_by(Tag.id)
        )
        return list(result.scalars().all())

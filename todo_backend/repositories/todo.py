"""Todo repository with specific queries."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models import Tag, Todo
from .base import BaseRepository


class TodoRepository(BaseRepository[Todo]):
    """
    Репозиторий для работы с задачами.

    Теги задачи всегда загружаются жадно (selectinload): в async режиме
    ленивая загрузка связей недоступна.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Todo, db)

    async def get_by_id_full(self, id: int) -> Todo | None:
        """
        Получить задачу вместе с тегами.

        populate_existing=True перечитывает коллекцию tags, даже если задача
        уже есть в сессии: связи добавляются напрямую в todo_tags,
        мимо ORM коллекции.

        SQL эквивалент:
            SELECT * FROM todos WHERE id = {id};
            SELECT tags.* FROM tags JOIN todo_tags ON ... WHERE todo_tags.todo_id IN ({id});
        """
        result = await self.db.execute(
            select(Todo)
            .options(selectinload(Todo.tags))
            .where(Todo.id == id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_all_full(self) -> list[Todo]:
        """Все задачи (в порядке создания) с тегами."""
        result = await self.db.execute(
            select(Todo)
            .options(selectinload(Todo.tags))
            .order_by(Todo.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_by_tag(self, tag_id: int) -> list[Todo]:
        """
        Получить все задачи с определённым тегом.

        SQL эквивалент:
            SELECT todos.*
            FROM todos
            JOIN todo_tags ON todos.id = todo_tags.todo_id
            WHERE todo_tags.tag_id = {tag_id};
        """
        result = await self.db.execute(
            select(Todo)
            .join(Todo.tags)
            .where(Tag.id == tag_id)
            .options(selectinload(Todo.tags))
            .order_by(Todo.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

"""Repository for the todo_tags junction table."""

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import todo_tags


class TodoTagRepository:
    """
    Репозиторий связей задача <-> тег.

    У таблицы todo_tags нет ORM модели, поэтому работаем через Core
    (insert/delete по таблице) и не наследуемся от BaseRepository.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, todo_id: int, tag_id: int) -> bool:
        """
        SQL эквивалент:
            SELECT EXISTS(SELECT 1 FROM todo_tags WHERE todo_id = ... AND tag_id = ...);
        """
        result = await self.db.execute(
            select(
                select(todo_tags.c.todo_id)
                .where(todo_tags.c.todo_id == todo_id, todo_tags.c.tag_id == tag_id)
                .exists()
            )
        )
        return bool(result.scalar())

    async def add(self, todo_id: int, tag_id: int) -> bool:
        """
        Связать задачу с тегом, если связи ещё нет.

        Returns:
            True если строка вставлена, False если связь уже была
        """
        if await self.exists(todo_id, tag_id):
            return False

        await self.db.execute(insert(todo_tags).values(todo_id=todo_id, tag_id=tag_id))
        return True

    async def remove(self, todo_id: int, tag_id: int) -> bool:
        """Удалить одну связь. Returns: True если строка удалена."""
        result = await self.db.execute(
            delete(todo_tags).where(
                todo_tags.c.todo_id == todo_id, todo_tags.c.tag_id == tag_id
            )
        )
        return result.rowcount > 0

    async def remove_all_for_todo(self, todo_id: int) -> int:
        """Удалить все связи задачи. Returns: количество удалённых строк."""
        result = await self.db.execute(delete(todo_tags).where(todo_tags.c.todo_id == todo_id))
        return result.rowcount

    async def remove_all_for_tag(self, tag_id: int) -> int:
        """Удалить все связи тега."""
        result = await self.db.execute(delete(todo_tags).where(todo_tags.c.tag_id == tag_id))
        return result.rowcount

    async def remove_all(self) -> int:
        """Очистить таблицу связей целиком."""
        result = await self.db.execute(delete(todo_tags))
        return result.rowcount

    async def count(self) -> int:
        """Количество строк в todo_tags."""
        result = await self.db.execute(select(func.count()).select_from(todo_tags))
        return result.scalar_one()

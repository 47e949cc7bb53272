"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.base import Base

# TypeVar для Generic класса - позволяет работать с любой моделью
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Базовый репозиторий с CRUD операциями.

    Репозиторий только ходит в БД: никаких бизнес-правил и никаких commit().
    Транзакцией управляет Database.session() (одна единица работы на запрос).

    Пример использования:
        todo_repo = BaseRepository[Todo](Todo, db_session)
        todo = await todo_repo.get_by_id(1)
    """

    def __init__(self, model: type[ModelType], db: AsyncSession):
        """
        Args:
            model: Класс модели SQLAlchemy (Todo, Tag)
            db: Асинхронная сессия базы данных
        """
        self.model = model
        self.db = db

    async def create(self, obj: ModelType) -> ModelType:
        """
        Сохранить новый объект и получить его ID от БД.

        Пример:
            todo = await repo.create(Todo(title="Buy milk"))
            print(todo.id)  # 1 (AUTOINCREMENT)
        """
        self.db.add(obj)
        await self.db.flush()  # INSERT уходит в БД, commit будет позже
        await self.db.refresh(obj)  # подтягиваем id и server defaults
        return obj

    async def get_by_id(self, id: int) -> ModelType | None:
        """
        Получить объект по ID или None.

        SQL эквивалент:
            SELECT * FROM table WHERE id = {id};
        """
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def update(self, id: int, **kwargs: Any) -> ModelType | None:
        """
        Обновить только переданные поля.

        Returns:
            Обновлённый объект или None, если записи нет

        Пример:
            todo = await repo.update(1, completed=True)  # title и order не меняются
        """
        obj = await self.get_by_id(id)
        if obj is None:
            return None

        for key, value in kwargs.items():
            if hasattr(obj, key):
                setattr(obj, key, value)

        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, id: int) -> bool:
        """
        Удалить запись по ID.

        Returns:
            True если строка удалена, False если её не было

        SQL эквивалент:
            DELETE FROM table WHERE id = {id};
        """
        result = await self.db.execute(delete(self.model).where(self.model.id == id))
        return result.rowcount > 0

    async def delete_all(self) -> int:
        """
        Удалить все записи таблицы.

        Returns:
            Количество удалённых строк
        """
        result = await self.db.execute(delete(self.model))
        return result.rowcount

    async def exists(self, id: int) -> bool:
        """
        Проверить существование записи.

        SQL эквивалент:
            SELECT EXISTS(SELECT 1 FROM table WHERE id = {id});
        """
        result = await self.db.execute(select(select(self.model.id).where(self.model.id == id).exists()))
        return bool(result.scalar())

    async def count(self) -> int:
        """Количество записей в таблице."""
        result = await self.db.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()

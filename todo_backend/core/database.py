"""Database handle: engine, unit-of-work sessions and schema creation."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from .config import settings
from .logging import get_logger

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite проверяет внешние ключи (и ON DELETE CASCADE) только с этим PRAGMA."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Единственный на процесс дескриптор хранилища.

    Жизненный цикл:
        database = Database(settings.DATABASE_URL)
        await database.init_schema()     # при старте приложения
        async with database.session() as db:
            ...                          # одна единица работы
        await database.dispose()         # при остановке

    Для SQLite используется StaticPool - одно общее соединение на весь процесс.
    Все единицы работы выполняются строго по очереди (asyncio.Lock),
    поэтому цепочки "найти тег -> создать тег -> связать" не перемешиваются
    между конкурентными запросами.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url

        if url.startswith("sqlite"):
            self.engine = create_async_engine(
                url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        else:
            self.engine = create_async_engine(url, echo=echo, poolclass=NullPool)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        self._write_lock = asyncio.Lock()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Unit of work: commit on success, rollback on any exception.

        The lock is held until the transaction is finished.
        """
        async with self._write_lock:
            async with self.session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

    async def init_schema(self) -> None:
        """Create todos, tags and todo_tags if they do not exist (idempotent)."""
        from ..models import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready", extra={"tables": sorted(Base.metadata.tables)})

    async def drop_schema(self) -> None:
        """Drop all tables (use with caution!)."""
        from ..models import Base

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        """Check that the store answers a trivial query."""
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
        except Exception:
            logger.warning("Database ping failed", exc_info=True)
            return False
        return True

    async def dispose(self) -> None:
        """Close the shared connection."""
        await self.engine.dispose()


database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

"""Default data for an empty database."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.logging import get_logger
from ..models import Todo
from ..repositories import TodoRepository
from .association import AssociationService

logger = get_logger(__name__)

DEFAULT_TAGS = ["work", "social", "miscellaneous"]

DEFAULT_TODOS = [
    {"title": "Buy groceries", "order": 1, "tags": ["miscellaneous"]},
    {"title": "Call Alice", "order": 2, "tags": ["social"]},
    {"title": "Finish report", "order": 3, "tags": ["work"]},
    {"title": "Plan weekend trip", "order": 4, "tags": ["social"]},
    {"title": "Read a book", "order": 5, "tags": ["miscellaneous"]},
]


async def seed_default_data(db: AsyncSession) -> bool:
    """
    Заполнить пустую БД стартовыми тегами и задачами.

    Returns:
        True если данные добавлены, False если задачи уже были (ничего не делаем)
    """
    todo_repo = TodoRepository(db)
    if await todo_repo.count() > 0:
        logger.info("Database already contains data, seeding skipped")
        return False

    associations = AssociationService(db)
    for name in DEFAULT_TAGS:
        await associations.resolve_or_create_tag(name)

    for item in DEFAULT_TODOS:
        todo = await todo_repo.create(Todo(title=item["title"], completed=False, order=item["order"]))
        await associations.link_names(todo.id, item["tags"])

    logger.info(
        "Database seeded with default data",
        extra={"todos": len(DEFAULT_TODOS), "tag_names": DEFAULT_TAGS},
    )
    return True

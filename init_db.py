"""
Скрипт для инициализации базы данных.

Создаёт таблицы todos, tags, todo_tags (если их нет) и заполняет
пустую БД стартовыми задачами.

Запуск:
    python init_db.py            # таблицы + стартовые данные
    python init_db.py --no-seed  # только таблицы
"""

import argparse
import asyncio

from todo_backend.core.config import settings
from todo_backend.core.database import database
from todo_backend.core.logging import setup_logging
from todo_backend.services import seed_default_data


async def main(seed: bool) -> None:
    """Создать таблицы и (опционально) стартовые данные."""
    print(f"Создание таблиц в {settings.DATABASE_URL}...")
    await database.init_schema()

    if seed:
        async with database.session() as session:
            seeded = await seed_default_data(session)
        print("✓ Стартовые данные добавлены" if seeded else "БД уже содержит данные, пропускаем")

    await database.dispose()
    print("✓ Готово!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the todo database")
    parser.add_argument("--no-seed", action="store_true", help="only create the tables")
    args = parser.parse_args()

    setup_logging(log_level=settings.LOG_LEVEL, log_format="simple")
    asyncio.run(main(seed=not args.no_seed))

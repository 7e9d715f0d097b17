"""
Reset the database to a small demo dataset: two users, four categories, four tasks.

Run with: python -m tasknest.seed
Callers then authenticate as "john" or "jane" through the identity header.
"""
from __future__ import annotations

import asyncio
import logging

from tasknest.config import load_settings
from tasknest.domain.common.time import to_iso
from tasknest.domain.tasks.models import Category, ListBody, Task, TaskBody, TextBody
from tasknest.infra.clock.system_clock import SystemClock
from tasknest.infra.db.connection import Database
from tasknest.infra.db.repo import CategorySqliteRepo, TaskSqliteRepo, UserSqliteRepo
from tasknest.infra.db.schema_version import apply_migrations
from tasknest.infra.ids.uuid_gen import UuidGenerator

logger = logging.getLogger(__name__)

USERS = [("john", "John Doe"), ("jane", "Jane Doe")]

CATEGORIES = [
    ("Work", "john"),
    ("Personal", "john"),
    ("Hobby", "jane"),
    ("Fitness", "jane"),
]

# (title, body, shared, category name)
TASKS: list[tuple[str, TaskBody, bool, str]] = [
    ("Complete project report", TextBody("Finish the report by EOD"), False, "Work"),
    ("Buy groceries", ListBody(("Milk", "Bread", "Eggs")), True, "Personal"),
    ("Read a book", TextBody("Read 20 pages of a book"), True, "Hobby"),
    ("Morning run", ListBody(("5 km run", "Stretching")), False, "Fitness"),
]


async def seed(db: Database, clock: SystemClock, ids: UuidGenerator) -> None:
    now = clock.now()
    await apply_migrations(db, now_iso=to_iso(now))

    # children first, foreign keys are on
    await db.executescript("DELETE FROM tasks; DELETE FROM categories; DELETE FROM users;")

    users = UserSqliteRepo(db)
    for user_id, name in USERS:
        await users.ensure_user(user_id, to_iso(now), name=name)

    categories = CategorySqliteRepo(db)
    by_name: dict[str, Category] = {}
    for name, owner_id in CATEGORIES:
        category = Category(id=ids.new_id(), name=name, owner_id=owner_id)
        await categories.insert(category, to_iso(now))
        by_name[name] = category

    tasks = TaskSqliteRepo(db)
    for title, body, shared, category_name in TASKS:
        category = by_name[category_name]
        await tasks.insert(
            Task(
                id=ids.new_id(),
                title=title,
                body=body,
                shared=shared,
                category_id=category.id,
                owner_id=category.owner_id,
                created_at=now,
                updated_at=now,
            )
        )

    logger.info("Dummy data inserted: %d users, %d categories, %d tasks", len(USERS), len(CATEGORIES), len(TASKS))


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    settings = load_settings()
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    asyncio.run(seed(Database(str(settings.db_path)), SystemClock(settings.timezone), UuidGenerator()))


if __name__ == "__main__":
    main()

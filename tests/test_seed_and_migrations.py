"""
Schema migrations and the demo dataset.
"""
from __future__ import annotations

import asyncio

import pytest

from tasknest.config import Settings
from tasknest.domain.common.errors import ConflictError, ForbiddenError
from tasknest.infra.clock.system_clock import SystemClock
from tasknest.infra.db.connection import Database
from tasknest.infra.db.repo import UserSqliteRepo
from tasknest.infra.db.schema_version import apply_migrations
from tasknest.infra.ids.uuid_gen import UuidGenerator
from tasknest.seed import seed
from tasknest.ui.http.deps import build_services


def test_migrations_apply_once(tmp_path):
    async def run():
        db = Database(str(tmp_path / "m.db"))
        first = await apply_migrations(db, now_iso="2024-01-01T00:00:00+00:00")
        second = await apply_migrations(db, now_iso="2024-01-02T00:00:00+00:00")
        assert first == [1]
        assert second == []

    asyncio.run(run())


def test_schema_rejects_unknown_task_type(tmp_path):
    async def run():
        db = Database(str(tmp_path / "m.db"))
        await apply_migrations(db, now_iso="2024-01-01T00:00:00+00:00")
        await UserSqliteRepo(db).ensure_user("u", "2024-01-01T00:00:00+00:00")
        await db.execute(
            "INSERT INTO categories(category_id, name, owner_id, created_at) VALUES ('c', 'n', 'u', 'now');"
        )
        with pytest.raises(ConflictError):
            await db.execute(
                "INSERT INTO tasks(task_id, title, type, body_json, shared, category_id, owner_id, created_at, updated_at)"
                " VALUES ('t', 'x', 'image', '\"\"', 0, 'c', 'u', 'now', 'now');"
            )

    asyncio.run(run())


def test_seed_builds_demo_dataset(tmp_path):
    async def run():
        db_path = tmp_path / "seed.db"
        db = Database(str(db_path))
        await seed(db, SystemClock("UTC"), UuidGenerator())
        # running twice resets instead of duplicating
        await seed(db, SystemClock("UTC"), UuidGenerator())

        services = build_services(db, Settings(db_path=db_path))
        john = await services.tasks.list_tasks("john")
        jane = await services.tasks.list_tasks("jane")
        assert john.total_count == 2
        assert jane.total_count == 2

        groceries = next(v for v in john.items if v.task.title == "Buy groceries")
        report = next(v for v in john.items if v.task.title == "Complete project report")

        # shared: jane can open it directly, private: she cannot
        assert (await services.tasks.get_task("jane", groceries.task.id)).owner.name == "John Doe"
        with pytest.raises(ForbiddenError):
            await services.tasks.get_task("jane", report.task.id)

        user = await UserSqliteRepo(db).get("jane")
        assert user is not None and user.name == "Jane Doe"

    asyncio.run(run())

from __future__ import annotations

from typing import Optional, Sequence

from tasknest.domain.tasks.models import Category
from tasknest.domain.tasks.ports import CategoryRepository
from tasknest.infra.db.connection import Database


class CategorySqliteRepo(CategoryRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    async def get(self, category_id: str) -> Optional[Category]:
        row = await self._db.fetchone(
            "SELECT category_id, name, owner_id FROM categories WHERE category_id = ?;",
            (category_id,),
        )
        return self._row_to_category(row) if row else None

    async def ids_by_name(self, owner_id: str, name: str) -> Sequence[str]:
        rows = await self._db.fetchall(
            "SELECT category_id FROM categories WHERE owner_id = ? AND name = ?;",
            (owner_id, name),
        )
        return [r["category_id"] for r in rows]

    async def list_for_owner(self, owner_id: str) -> Sequence[Category]:
        rows = await self._db.fetchall(
            """
            SELECT category_id, name, owner_id
            FROM categories
            WHERE owner_id = ?
            ORDER BY created_at, rowid;
            """,
            (owner_id,),
        )
        return [self._row_to_category(r) for r in rows]

    async def insert(self, category: Category, created_at_iso: str) -> None:
        await self._db.execute(
            "INSERT INTO categories(category_id, name, owner_id, created_at) VALUES (?, ?, ?, ?);",
            (category.id, category.name, category.owner_id, created_at_iso),
        )

    async def delete(self, category_id: str) -> None:
        await self._db.execute("DELETE FROM categories WHERE category_id = ?;", (category_id,))

    async def count_tasks(self, category_id: str) -> int:
        row = await self._db.fetchone("SELECT COUNT(*) AS n FROM tasks WHERE category_id = ?;", (category_id,))
        return int(row["n"]) if row else 0

    def _row_to_category(self, row) -> Category:
        return Category(id=row["category_id"], name=row["name"], owner_id=row["owner_id"])

from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple

from tasknest.domain.common.time import from_iso, to_iso
from tasknest.domain.tasks.models import (
    Category,
    ListBody,
    Page,
    Task,
    TaskBody,
    TaskQuery,
    TaskView,
    TextBody,
    User,
)
from tasknest.domain.tasks.ports import TaskRepository
from tasknest.infra.db.connection import Database

ORDERABLE_COLUMNS = frozenset({"title", "type", "shared", "created_at", "updated_at"})

_VIEW_SELECT = """
    SELECT t.task_id, t.title, t.type, t.body_json, t.shared, t.category_id, t.owner_id,
           t.created_at, t.updated_at,
           c.category_id AS c_id, c.name AS c_name, c.owner_id AS c_owner_id,
           u.user_id AS u_id, u.name AS u_name
    FROM tasks t
    LEFT JOIN categories c ON c.category_id = t.category_id
    LEFT JOIN users u ON u.user_id = t.owner_id
"""


def _body_to_json(body: TaskBody) -> str:
    return json.dumps(body.to_raw(), ensure_ascii=False)


def _body_from_row(task_type: str, body_json: str) -> TaskBody:
    raw = json.loads(body_json)
    if task_type == "list":
        return ListBody(tuple(str(item) for item in raw))
    return TextBody(raw if isinstance(raw, str) else str(raw))


class TaskSqliteRepo(TaskRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    async def get(self, task_id: str) -> Optional[Task]:
        row = await self._db.fetchone("SELECT * FROM tasks WHERE task_id = ?;", (task_id,))
        return self._row_to_task(row) if row else None

    async def get_view(self, task_id: str) -> Optional[TaskView]:
        row = await self._db.fetchone(_VIEW_SELECT + " WHERE t.task_id = ?;", (task_id,))
        return self._row_to_view(row) if row else None

    async def insert(self, task: Task) -> None:
        await self._db.execute(
            """
            INSERT INTO tasks(
              task_id, title, type, body_json, shared,
              category_id, owner_id, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?);
            """,
            (
                task.id,
                task.title,
                task.type,
                _body_to_json(task.body),
                1 if task.shared else 0,
                task.category_id,
                task.owner_id,
                to_iso(task.created_at),
                to_iso(task.updated_at),
            ),
        )

    async def update(self, task: Task) -> bool:
        changed = await self._db.execute(
            """
            UPDATE tasks
            SET title = ?,
                type = ?,
                body_json = ?,
                shared = ?,
                updated_at = ?
            WHERE task_id = ?;
            """,
            (
                task.title,
                task.type,
                _body_to_json(task.body),
                1 if task.shared else 0,
                to_iso(task.updated_at),
                task.id,
            ),
        )
        return changed > 0

    async def delete(self, task_id: str) -> None:
        await self._db.execute("DELETE FROM tasks WHERE task_id = ?;", (task_id,))

    async def find_page(self, query: TaskQuery) -> Page:
        where, params = self._where(query)
        order_by = self._order_by(query)

        async with self._db.connect() as conn:
            cur = await conn.execute(f"SELECT COUNT(*) AS n FROM tasks t WHERE {where};", params)
            total = int((await cur.fetchone())["n"])

            rows = []
            # pages past the end skip the row query; their offset can exceed SQLite INTEGER
            if query.offset < total:
                cur = await conn.execute(
                    f"{_VIEW_SELECT} WHERE {where} ORDER BY {order_by} LIMIT ? OFFSET ?;",
                    (*params, query.limit, query.offset),
                )
                rows = await cur.fetchall()

        return Page(
            items=[self._row_to_view(r) for r in rows],
            total_count=total,
            page=query.page,
            limit=query.limit,
        )

    def _where(self, query: TaskQuery) -> Tuple[str, List[Any]]:
        # owner scope is unconditional
        clauses = ["t.owner_id = ?"]
        params: List[Any] = [query.owner_id]

        if query.category_ids is not None:
            if not query.category_ids:
                clauses.append("0")
            else:
                placeholders = ", ".join("?" for _ in query.category_ids)
                clauses.append(f"t.category_id IN ({placeholders})")
                params.extend(query.category_ids)

        if query.shared is not None:
            clauses.append("t.shared = ?")
            params.append(1 if query.shared else 0)

        return " AND ".join(clauses), params

    def _order_by(self, query: TaskQuery) -> str:
        parts: List[str] = []
        for key in query.sort:
            if key.column not in ORDERABLE_COLUMNS:
                raise ValueError(f"not an orderable column: {key.column}")
            parts.append(f"t.{key.column} {'DESC' if key.descending else 'ASC'}")
        # insertion order breaks ties
        parts.append("t.rowid ASC")
        return ", ".join(parts)

    def _row_to_task(self, row) -> Task:
        return Task(
            id=row["task_id"],
            title=row["title"],
            body=_body_from_row(row["type"], row["body_json"]),
            shared=bool(row["shared"]),
            category_id=row["category_id"],
            owner_id=row["owner_id"],
            created_at=from_iso(row["created_at"]),
            updated_at=from_iso(row["updated_at"]),
        )

    def _row_to_view(self, row) -> TaskView:
        category = None
        if row["c_id"] is not None:
            category = Category(id=row["c_id"], name=row["c_name"], owner_id=row["c_owner_id"])
        owner = None
        if row["u_id"] is not None:
            owner = User(id=row["u_id"], name=row["u_name"])
        return TaskView(task=self._row_to_task(row), category=category, owner=owner)

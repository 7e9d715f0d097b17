from __future__ import annotations

from typing import Optional

from tasknest.domain.tasks.models import User
from tasknest.domain.tasks.ports import UserRepository
from tasknest.infra.db.connection import Database


class UserSqliteRepo(UserRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    async def ensure_user(self, user_id: str, now_iso: str, name: Optional[str] = None) -> None:
        await self._db.execute(
            """
            INSERT INTO users(user_id, name, created_at, last_seen_at) VALUES (?, ?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET
              last_seen_at = excluded.last_seen_at,
              name = COALESCE(excluded.name, users.name);
            """,
            (user_id, name, now_iso, now_iso),
        )

    async def get(self, user_id: str) -> Optional[User]:
        row = await self._db.fetchone("SELECT user_id, name FROM users WHERE user_id = ?;", (user_id,))
        if not row:
            return None
        return User(id=row["user_id"], name=row["name"])

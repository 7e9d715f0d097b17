"""SQLite implementations of the task-domain repositories."""

from tasknest.infra.db.repo.categories_sqlite import CategorySqliteRepo
from tasknest.infra.db.repo.tasks_sqlite import TaskSqliteRepo
from tasknest.infra.db.repo.users_sqlite import UserSqliteRepo

__all__ = [
    "CategorySqliteRepo",
    "TaskSqliteRepo",
    "UserSqliteRepo",
]

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from tasknest.config import Settings
from tasknest.domain.common.errors import AuthenticationError
from tasknest.domain.tasks.categories import CategoryService
from tasknest.domain.tasks.query import TaskQueryBuilder
from tasknest.domain.tasks.service import TaskService
from tasknest.infra.clock.system_clock import SystemClock
from tasknest.infra.db.connection import Database
from tasknest.infra.db.repo import CategorySqliteRepo, TaskSqliteRepo, UserSqliteRepo
from tasknest.infra.ids.uuid_gen import UuidGenerator


@dataclass(frozen=True)
class Services:
    tasks: TaskService
    categories: CategoryService


def build_services(db: Database, settings: Settings) -> Services:
    """Composition root: one set of repos and services per process."""
    clock = SystemClock(settings.timezone)
    ids = UuidGenerator()

    users_repo = UserSqliteRepo(db)
    categories_repo = CategorySqliteRepo(db)
    tasks_repo = TaskSqliteRepo(db)

    query_builder = TaskQueryBuilder(
        categories_repo,
        default_limit=settings.default_page_limit,
        max_limit=settings.max_page_limit,
    )
    return Services(
        tasks=TaskService(
            tasks=tasks_repo,
            categories=categories_repo,
            users=users_repo,
            clock=clock,
            ids=ids,
            query_builder=query_builder,
        ),
        categories=CategoryService(
            categories=categories_repo,
            users=users_repo,
            clock=clock,
            ids=ids,
        ),
    )


async def current_user_id(request: Request) -> str:
    # identity is established upstream; the header value is trusted as-is
    header = request.app.state.settings.identity_header
    user_id = (request.headers.get(header) or "").strip()
    if not user_id:
        raise AuthenticationError("No token, authorization denied")
    return user_id


def task_service(request: Request) -> TaskService:
    return request.app.state.services.tasks


def category_service(request: Request) -> CategoryService:
    return request.app.state.services.categories

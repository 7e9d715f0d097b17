from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from tasknest.domain.common.errors import NotFoundError
from tasknest.domain.common.time import to_iso
from tasknest.domain.tasks.models import (
    UNSET,
    CreateTaskRequest,
    Page,
    Task,
    TaskView,
    UpdateTaskRequest,
)
from tasknest.domain.tasks.policy import (
    TASK_NOT_FOUND,
    authorize_category_use,
    authorize_read,
    authorize_write,
)
from tasknest.domain.tasks.ports import (
    CategoryRepository,
    Clock,
    IdGenerator,
    TaskRepository,
    UserRepository,
)
from tasknest.domain.tasks.query import TaskQueryBuilder
from tasknest.domain.tasks.rules import (
    make_body,
    validate_id,
    validate_shared,
    validate_title,
    validate_type,
)

logger = logging.getLogger(__name__)


def _absent(value: Any) -> bool:
    return value is UNSET or value is None


class TaskService:
    """
    Task use cases. No FastAPI. No sqlite.

    Every method takes the caller id as established by the identity layer and
    trusts it as-is.
    """

    def __init__(
        self,
        tasks: TaskRepository,
        categories: CategoryRepository,
        users: UserRepository,
        clock: Clock,
        ids: IdGenerator,
        query_builder: TaskQueryBuilder,
    ) -> None:
        self._tasks = tasks
        self._categories = categories
        self._users = users
        self._clock = clock
        self._ids = ids
        self._query_builder = query_builder

    async def list_tasks(
        self,
        caller_id: str,
        page: Any = None,
        limit: Any = None,
        sort: Any = None,
        filter_raw: Any = None,
    ) -> Page:
        query = await self._query_builder.build(
            owner_id=caller_id,
            page=page,
            limit=limit,
            sort=sort,
            filter_raw=filter_raw,
        )
        return await self._tasks.find_page(query)

    async def create_task(self, caller_id: str, req: CreateTaskRequest) -> Task:
        title = validate_title(req.title)
        task_type = validate_type(req.type)
        body = make_body(task_type, req.body)
        shared = False if req.shared is None else validate_shared(req.shared)
        category_id = validate_id(req.category_id, "Category")

        category = await self._categories.get(category_id)
        authorize_category_use(category, caller_id)

        now = self._clock.now()
        await self._users.ensure_user(caller_id, to_iso(now))

        task = Task(
            id=self._ids.new_id(),
            title=title,
            body=body,
            shared=shared,
            category_id=category_id,
            owner_id=caller_id,
            created_at=now,
            updated_at=now,
        )
        await self._tasks.insert(task)
        logger.info("task created id=%s owner=%s category=%s", task.id, caller_id, category_id)
        return task

    async def get_task(self, caller_id: str, task_id: str) -> TaskView:
        view = await self._tasks.get_view(task_id)
        authorize_read(view.task if view else None, caller_id)
        return view

    async def update_task(self, caller_id: str, task_id: str, req: UpdateTaskRequest) -> Task:
        task = authorize_write(await self._tasks.get(task_id), caller_id)

        title = task.title if _absent(req.title) else validate_title(req.title)
        task_type = task.type if _absent(req.type) else validate_type(req.type)
        # a type change without a new body must still fit the stored body
        raw_body = task.body.to_raw() if _absent(req.body) else req.body
        body = make_body(task_type, raw_body)
        # explicit False overwrites; only an absent field keeps the old value
        shared = task.shared if req.shared is UNSET else validate_shared(req.shared)

        updated = replace(
            task,
            title=title,
            body=body,
            shared=shared,
            updated_at=self._clock.now(),
        )
        if not await self._tasks.update(updated):
            # removed since it was read
            raise NotFoundError(TASK_NOT_FOUND)
        logger.info("task updated id=%s owner=%s", task.id, caller_id)
        return updated

    async def delete_task(self, caller_id: str, task_id: str) -> None:
        task = authorize_write(await self._tasks.get(task_id), caller_id)
        await self._tasks.delete(task.id)
        logger.info("task deleted id=%s owner=%s", task.id, caller_id)

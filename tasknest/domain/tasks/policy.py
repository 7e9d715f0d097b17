"""
Access rules for tasks and categories. Pure functions, no I/O.

Task paths check existence first and ownership second, so a caller learns
that someone else's task exists (403) but not what is in it. Category paths
answer 404 for both "missing" and "owned by someone else" so a caller can
never confirm another user's category id.
"""
from __future__ import annotations

import logging
from typing import Optional

from tasknest.domain.common.errors import ForbiddenError, NotFoundError
from tasknest.domain.tasks.models import Category, Task

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"
CATEGORY_NOT_FOUND = "Category not found"
NOT_AUTHORIZED = "Not authorized"


def can_read(task: Task, caller_id: str) -> bool:
    return task.owner_id == caller_id or task.shared


def can_write(task: Task, caller_id: str) -> bool:
    # sharing grants read access only
    return task.owner_id == caller_id


def authorize_category_use(category: Optional[Category], caller_id: str) -> Category:
    if category is None or category.owner_id != caller_id:
        logger.debug("category access denied caller=%s category=%s", caller_id, category and category.id)
        raise NotFoundError(CATEGORY_NOT_FOUND)
    return category


def authorize_read(task: Optional[Task], caller_id: str) -> Task:
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)
    if not can_read(task, caller_id):
        logger.debug("read denied caller=%s task=%s", caller_id, task.id)
        raise ForbiddenError(NOT_AUTHORIZED)
    return task


def authorize_write(task: Optional[Task], caller_id: str) -> Task:
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)
    if not can_write(task, caller_id):
        logger.debug("write denied caller=%s task=%s", caller_id, task.id)
        raise ForbiddenError(NOT_AUTHORIZED)
    return task

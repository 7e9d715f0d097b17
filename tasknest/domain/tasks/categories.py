from __future__ import annotations

import logging
from typing import Any, Sequence

from tasknest.domain.common.errors import ConflictError, ValidationError
from tasknest.domain.common.time import to_iso
from tasknest.domain.tasks.models import Category
from tasknest.domain.tasks.policy import authorize_category_use
from tasknest.domain.tasks.ports import CategoryRepository, Clock, IdGenerator, UserRepository

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(
        self,
        categories: CategoryRepository,
        users: UserRepository,
        clock: Clock,
        ids: IdGenerator,
    ) -> None:
        self._categories = categories
        self._users = users
        self._clock = clock
        self._ids = ids

    async def list_categories(self, caller_id: str) -> Sequence[Category]:
        return await self._categories.list_for_owner(caller_id)

    async def create_category(self, caller_id: str, name: Any = None) -> Category:
        if name is not None and not isinstance(name, str):
            raise ValidationError("Name must be a string.")

        now_iso = to_iso(self._clock.now())
        await self._users.ensure_user(caller_id, now_iso)

        category = Category(id=self._ids.new_id(), name=name, owner_id=caller_id)
        await self._categories.insert(category, now_iso)
        logger.info("category created id=%s owner=%s", category.id, caller_id)
        return category

    async def delete_category(self, caller_id: str, category_id: str) -> None:
        category = authorize_category_use(await self._categories.get(category_id), caller_id)

        # tasks never lose their category
        in_use = await self._categories.count_tasks(category.id)
        if in_use:
            raise ConflictError(f"Category is used by {in_use} task(s).")

        await self._categories.delete(category.id)
        logger.info("category deleted id=%s owner=%s", category.id, caller_id)

from __future__ import annotations

from typing import Any, Optional, Tuple

from tasknest.domain.tasks.models import TaskQuery
from tasknest.domain.tasks.ports import CategoryRepository
from tasknest.domain.tasks.rules import coerce_positive_int, parse_filter, parse_sort


class TaskQueryBuilder:
    """
    Turns raw list parameters (page, limit, sort, filter) into a TaskQuery.

    The query is always pinned to the requesting user, so shared tasks of
    other users never show up in a listing.
    """

    def __init__(self, categories: CategoryRepository, default_limit: int = 10, max_limit: int = 100) -> None:
        self._categories = categories
        self._default_limit = default_limit
        self._max_limit = max_limit

    async def build(
        self,
        owner_id: str,
        page: Any = None,
        limit: Any = None,
        sort: Any = None,
        filter_raw: Any = None,
    ) -> TaskQuery:
        page_no = coerce_positive_int("page", page, 1)
        page_size = min(coerce_positive_int("limit", limit, self._default_limit), self._max_limit)
        sort_keys = parse_sort(sort)
        filter_spec = parse_filter(filter_raw)

        category_ids: Optional[Tuple[str, ...]] = None
        if filter_spec.category_name is not None:
            ids = await self._categories.ids_by_name(owner_id, filter_spec.category_name)
            category_ids = tuple(ids)

        return TaskQuery(
            owner_id=owner_id,
            page=page_no,
            limit=page_size,
            category_ids=category_ids,
            shared=filter_spec.shared,
            sort=sort_keys,
        )

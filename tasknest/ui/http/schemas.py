from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr

from tasknest.domain.common.time import to_iso
from tasknest.domain.tasks.models import Category, Page, Task, TaskView, User


class TaskCreateIn(BaseModel):
    # owner/user fields are dropped; the owner is always the caller
    model_config = ConfigDict(extra="ignore")

    title: Optional[StrictStr] = None
    type: Optional[StrictStr] = None
    body: Any = Field(default=None, description="string for text tasks, list of strings for list tasks")
    category: Optional[StrictStr] = None
    shared: Optional[StrictBool] = None


class TaskUpdateIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: Optional[StrictStr] = None
    type: Optional[StrictStr] = None
    body: Any = None
    shared: Optional[StrictBool] = None

    def sent_fields(self) -> Dict[str, Any]:
        """Only the fields present in the request, so absent and explicit values stay distinct."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class CategoryCreateIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[StrictStr] = None


def category_to_dict(category: Category) -> Dict[str, Any]:
    return {"id": category.id, "name": category.name, "owner": category.owner_id}


def user_to_dict(user: User) -> Dict[str, Any]:
    return {"id": user.id, "name": user.name}


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "type": task.type,
        "body": task.body.to_raw(),
        "shared": task.shared,
        "category": task.category_id,
        "owner": task.owner_id,
        "createdAt": to_iso(task.created_at),
        "updatedAt": to_iso(task.updated_at),
    }


def view_to_dict(view: TaskView) -> Dict[str, Any]:
    data = task_to_dict(view.task)
    data["category"] = category_to_dict(view.category) if view.category else None
    data["owner"] = user_to_dict(view.owner) if view.owner else None
    return data


def page_to_dict(page: Page) -> Dict[str, Any]:
    return {
        "items": [view_to_dict(v) for v in page.items],
        "totalCount": page.total_count,
        "page": page.page,
        "limit": page.limit,
        "pageCount": page.page_count,
    }

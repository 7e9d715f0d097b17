from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, List, Literal, Optional, Tuple, Union


TaskType = Literal["text", "list"]
TASK_TYPES: Tuple[str, ...] = ("text", "list")


class _Unset:
    """Marker for a field the caller did not send (distinct from an explicit None/False)."""

    _instance: ClassVar[Optional["_Unset"]] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class TextBody:
    text: str

    kind: ClassVar[str] = "text"

    def to_raw(self) -> str:
        return self.text


@dataclass(frozen=True)
class ListBody:
    items: Tuple[str, ...]

    kind: ClassVar[str] = "list"

    def to_raw(self) -> List[str]:
        return list(self.items)


TaskBody = Union[TextBody, ListBody]


@dataclass(frozen=True)
class User:
    id: str
    name: Optional[str] = None


@dataclass(frozen=True)
class Category:
    id: str
    name: Optional[str]
    owner_id: str


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    body: TaskBody
    shared: bool
    category_id: str
    owner_id: str
    created_at: datetime
    updated_at: datetime

    @property
    def type(self) -> str:
        return self.body.kind


@dataclass(frozen=True)
class TaskView:
    """Task with its category and owner resolved."""

    task: Task
    category: Optional[Category]
    owner: Optional[User]


@dataclass(frozen=True)
class CreateTaskRequest:
    title: Any
    type: Any
    body: Any
    category_id: Any
    shared: Any = False


@dataclass(frozen=True)
class UpdateTaskRequest:
    # UNSET keeps the stored value. Category and owner cannot be changed.
    title: Any = UNSET
    type: Any = UNSET
    body: Any = UNSET
    shared: Any = UNSET


@dataclass(frozen=True)
class FilterSpec:
    category_name: Optional[str] = None
    shared: Optional[bool] = None


@dataclass(frozen=True)
class SortKey:
    column: str
    descending: bool = False


@dataclass(frozen=True)
class TaskQuery:
    """Storage-level description of a list request. Always scoped to one owner."""

    owner_id: str
    page: int = 1
    limit: int = 10
    # None means "no category constraint"; an empty tuple matches nothing.
    category_ids: Optional[Tuple[str, ...]] = None
    shared: Optional[bool] = None
    sort: Tuple[SortKey, ...] = field(default_factory=tuple)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page:
    items: List[TaskView]
    total_count: int
    page: int
    limit: int

    @property
    def page_count(self) -> int:
        if self.total_count <= 0:
            return 0
        return math.ceil(self.total_count / self.limit)

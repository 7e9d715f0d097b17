from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from tasknest.domain.tasks.models import Category, Page, Task, TaskQuery, TaskView, User


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...


class IdGenerator(ABC):
    @abstractmethod
    def new_id(self) -> str: ...


class UserRepository(ABC):
    @abstractmethod
    async def ensure_user(self, user_id: str, now_iso: str) -> None: ...

    @abstractmethod
    async def get(self, user_id: str) -> Optional[User]: ...


class CategoryRepository(ABC):
    @abstractmethod
    async def get(self, category_id: str) -> Optional[Category]: ...

    @abstractmethod
    async def ids_by_name(self, owner_id: str, name: str) -> Sequence[str]: ...

    @abstractmethod
    async def list_for_owner(self, owner_id: str) -> Sequence[Category]: ...

    @abstractmethod
    async def insert(self, category: Category, created_at_iso: str) -> None: ...

    @abstractmethod
    async def delete(self, category_id: str) -> None: ...

    @abstractmethod
    async def count_tasks(self, category_id: str) -> int: ...


class TaskRepository(ABC):
    @abstractmethod
    async def get(self, task_id: str) -> Optional[Task]: ...

    @abstractmethod
    async def get_view(self, task_id: str) -> Optional[TaskView]: ...

    @abstractmethod
    async def insert(self, task: Task) -> None: ...

    @abstractmethod
    async def update(self, task: Task) -> bool: ...

    @abstractmethod
    async def delete(self, task_id: str) -> None: ...

    @abstractmethod
    async def find_page(self, query: TaskQuery) -> Page: ...

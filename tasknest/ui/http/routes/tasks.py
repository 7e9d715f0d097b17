from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status

from tasknest.domain.tasks.models import CreateTaskRequest, UpdateTaskRequest
from tasknest.domain.tasks.service import TaskService
from tasknest.ui.http.deps import current_user_id, task_service
from tasknest.ui.http.schemas import (
    TaskCreateIn,
    TaskUpdateIn,
    page_to_dict,
    task_to_dict,
    view_to_dict,
)

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("")
async def list_tasks(
    page: Optional[str] = Query(None, description="Page number"),
    limit: Optional[str] = Query(None, description="Number of tasks per page"),
    sort: Optional[str] = Query(None, description="Sort by field, '-field' for descending"),
    filter_raw: Optional[str] = Query(None, alias="filter", description="Filter as a JSON object"),
    user_id: str = Depends(current_user_id),
    service: TaskService = Depends(task_service),
) -> Dict[str, Any]:
    result = await service.list_tasks(user_id, page=page, limit=limit, sort=sort, filter_raw=filter_raw)
    return page_to_dict(result)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreateIn,
    user_id: str = Depends(current_user_id),
    service: TaskService = Depends(task_service),
) -> Dict[str, Any]:
    task = await service.create_task(
        user_id,
        CreateTaskRequest(
            title=payload.title,
            type=payload.type,
            body=payload.body,
            category_id=payload.category,
            shared=payload.shared,
        ),
    )
    return task_to_dict(task)


@router.get("/{task_id}")
async def get_task(
    task_id: str,
    user_id: str = Depends(current_user_id),
    service: TaskService = Depends(task_service),
) -> Dict[str, Any]:
    view = await service.get_task(user_id, task_id)
    return view_to_dict(view)


@router.put("/{task_id}")
async def update_task(
    task_id: str,
    payload: TaskUpdateIn,
    user_id: str = Depends(current_user_id),
    service: TaskService = Depends(task_service),
) -> Dict[str, Any]:
    task = await service.update_task(user_id, task_id, UpdateTaskRequest(**payload.sent_fields()))
    return task_to_dict(task)


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    user_id: str = Depends(current_user_id),
    service: TaskService = Depends(task_service),
) -> Dict[str, str]:
    await service.delete_task(user_id, task_id)
    return {"msg": "Task removed"}

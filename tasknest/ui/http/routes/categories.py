from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from tasknest.domain.tasks.categories import CategoryService
from tasknest.ui.http.deps import category_service, current_user_id
from tasknest.ui.http.schemas import CategoryCreateIn, category_to_dict

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("")
async def list_categories(
    user_id: str = Depends(current_user_id),
    service: CategoryService = Depends(category_service),
) -> List[Dict[str, Any]]:
    return [category_to_dict(c) for c in await service.list_categories(user_id)]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreateIn,
    user_id: str = Depends(current_user_id),
    service: CategoryService = Depends(category_service),
) -> Dict[str, Any]:
    category = await service.create_category(user_id, payload.name)
    return category_to_dict(category)


@router.delete("/{category_id}")
async def delete_category(
    category_id: str,
    user_id: str = Depends(current_user_id),
    service: CategoryService = Depends(category_service),
) -> Dict[str, str]:
    await service.delete_category(user_id, category_id)
    return {"msg": "Category removed"}

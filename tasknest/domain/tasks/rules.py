from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple

from tasknest.domain.common.errors import MalformedFilterError, ValidationError
from tasknest.domain.tasks.models import (
    TASK_TYPES,
    FilterSpec,
    ListBody,
    SortKey,
    TaskBody,
    TextBody,
)


# wire name -> column
SORTABLE_FIELDS: Dict[str, str] = {
    "title": "title",
    "type": "type",
    "shared": "shared",
    "created_at": "created_at",
    "createdAt": "created_at",
    "updated_at": "updated_at",
    "updatedAt": "updated_at",
}


def validate_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Title is required.")
    return title


def validate_type(task_type: Any) -> str:
    if task_type not in TASK_TYPES:
        raise ValidationError(f"Type must be one of: {', '.join(TASK_TYPES)}.")
    return task_type


def validate_shared(shared: Any) -> bool:
    if not isinstance(shared, bool):
        raise ValidationError("Shared must be a boolean.")
    return shared


def validate_id(value: Any, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{what} is required.")
    return value.strip()


def make_body(task_type: str, raw: Any) -> TaskBody:
    """Build the body variant for `task_type`, rejecting a raw value of the wrong shape."""
    if raw is None:
        raise ValidationError("Body is required.")
    if task_type == "text":
        if not isinstance(raw, str):
            raise ValidationError("Body of a text task must be a string.")
        return TextBody(raw)
    if not isinstance(raw, (list, tuple)) or not all(isinstance(item, str) for item in raw):
        raise ValidationError("Body of a list task must be a list of strings.")
    return ListBody(tuple(raw))


def coerce_positive_int(name: str, raw: Any, default: int) -> int:
    if raw is None or raw == "":
        return default
    if isinstance(raw, bool):
        raise ValidationError(f"{name} must be a positive integer.")
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip())
        except ValueError:
            raise ValidationError(f"{name} must be a positive integer.") from None
    if value < 1:
        raise ValidationError(f"{name} must be a positive integer.")
    return value


def parse_filter(raw: Any) -> FilterSpec:
    if raw is None or raw == "":
        return FilterSpec()

    if isinstance(raw, dict):
        data = raw
    else:
        try:
            data = json.loads(raw)
        except (TypeError, ValueError, RecursionError):
            raise MalformedFilterError("Filter must be a JSON object.") from None
    if not isinstance(data, dict):
        raise MalformedFilterError("Filter must be a JSON object.")

    category_name: Optional[str] = None
    if "categoryName" in data:
        value = data["categoryName"]
        if not isinstance(value, str):
            raise MalformedFilterError("categoryName must be a string.")
        # empty name means no constraint
        category_name = value or None

    shared: Optional[bool] = None
    if "shared" in data:
        value = data["shared"]
        if not isinstance(value, bool):
            raise MalformedFilterError("shared must be a boolean.")
        shared = value

    # other keys are ignored
    return FilterSpec(category_name=category_name, shared=shared)


def parse_sort(raw: Any) -> Tuple[SortKey, ...]:
    """Parse "title -createdAt" style sort strings; '-' means descending."""
    if raw is None:
        return ()
    if not isinstance(raw, str):
        raise ValidationError("Sort must be a string.")

    keys = []
    for token in raw.replace(",", " ").split():
        descending = token.startswith("-")
        name = token.lstrip("+-")
        column = SORTABLE_FIELDS.get(name)
        if column is None:
            raise ValidationError(f"Cannot sort by '{name}'.")
        keys.append(SortKey(column=column, descending=descending))
    return tuple(keys)

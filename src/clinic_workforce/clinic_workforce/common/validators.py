from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_positive_int(value: Optional[int], field_name: str) -> int:
    if value is None or int(value) <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return int(value)


def require_date_order(start: date, end: date, *, message: str = "End date cannot be before start date") -> None:
    if end < start:
        raise ValidationError(message)


def clean_optional(value: Optional[str]) -> Optional[str]:
    return (value.strip() or None) if value else None

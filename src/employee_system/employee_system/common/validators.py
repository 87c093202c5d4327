from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_positive_id(value: Any, field_name: str) -> int:
    # JSON true/false and fractional numbers would otherwise coerce to a real id.
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} must be a numeric id")
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a numeric id")
    if parsed <= 0:
        raise ValidationError(f"{field_name} must be a positive id")
    return parsed


def optional_text(value: Optional[str]) -> Optional[str]:
    text = (value or "").strip()
    return text or None

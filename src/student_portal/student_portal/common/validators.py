from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def normalize_alias(value: str) -> str:
    """Lookup key for an alias: trimmed and case-folded."""
    return value.strip().lower()


def first_text(value: Any) -> Optional[str]:
    """A text field that may also arrive as a one-element list (lookup fields)."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, str) and value.strip():
        return value
    return None


def linked_ids(value: Any) -> tuple[str, ...]:
    """Linked-record ids of a field, in stored order."""
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value if v)
    if isinstance(value, str) and value:
        return (value,)
    return ()

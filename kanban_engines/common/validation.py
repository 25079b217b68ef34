"""Input checks shared by the registries."""
from __future__ import annotations

from typing import Optional

from kanban_engines.common.errors import ValidationError


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def require_text(value: Optional[str], message: str, resource_kind: Optional[str] = None) -> str:
    """Return ``value`` untouched, or raise ValidationError if it is blank."""
    if is_blank(value):
        raise ValidationError(message, resource_kind=resource_kind)
    return value  # type: ignore[return-value]

from __future__ import annotations

from typing import Any

from ..core.constants import SESSION_NUMBERS
from ..core.exceptions import ValidationError


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_non_empty(value: str, field_name: str) -> str:
    """Reject blank input but hand the value back exactly as submitted."""
    if is_blank(value) or not isinstance(value, str):
        raise ValidationError(f"{field_name} is required")
    return value


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def require_session_num(value: Any) -> int:
    try:
        session_num = require_int(value, "sessionNum")
    except ValidationError:
        session_num = 0
    if session_num not in SESSION_NUMBERS:
        raise ValidationError("Invalid session number. Must be 1, 2, 3, or 4.")
    return session_num

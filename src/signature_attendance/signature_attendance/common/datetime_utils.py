from __future__ import annotations

from datetime import date, datetime

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def now_local() -> datetime:
    """Current local time, truncated to whole seconds like a MySQL DATETIME.

    Note: Wrapped so tests can patch/mock it easily.
    """
    return datetime.now().replace(microsecond=0)


def isoformat_or_none(value) -> str | None:
    return value.isoformat() if value is not None else None

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from ..common.datetime_utils import isoformat_or_none
from ..core.constants import SESSION_COUNT, SESSION_NUMBERS


@dataclass(frozen=True)
class SessionSlot:
    """One of the four signing slots of a module attendance record."""

    signature: Optional[str] = None
    is_signed: bool = False


EMPTY_SLOTS: Tuple[SessionSlot, ...] = tuple(SessionSlot() for _ in SESSION_NUMBERS)


def slots_with(slots: Tuple[SessionSlot, ...], session_num: int, signature: str) -> Tuple[SessionSlot, ...]:
    """Return a copy of ``slots`` with ``session_num`` (1-based) signed by ``signature``."""
    if len(slots) != SESSION_COUNT:
        raise ValueError(f"expected {SESSION_COUNT} slots, got {len(slots)}")
    out = list(slots)
    out[session_num - 1] = SessionSlot(signature=signature, is_signed=True)
    return tuple(out)


def signature_key(session_num: int) -> str:
    return f"signature{session_num}"


def is_signed_key(session_num: int) -> str:
    return f"is_signed{session_num}"


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one learner's attendance for one module.

    ``slots`` always holds exactly four entries, index 0 being session 1.
    ``learner_name`` is only filled by joined reads.
    """

    record_id: int
    learner_id: int
    attendance_date: date
    module_title: str
    slots: Tuple[SessionSlot, ...] = EMPTY_SLOTS
    module_day: Optional[str] = None
    submission_timestamp: Optional[datetime] = None
    learner_name: Optional[str] = None

    def slot(self, session_num: int) -> SessionSlot:
        return self.slots[session_num - 1]

    def to_dict(self) -> dict:
        """Flat shape served by the single learner/module status endpoint."""
        out = {
            "record_id": self.record_id,
            "learner_id": self.learner_id,
            "attendance_date": isoformat_or_none(self.attendance_date),
            "module_title": self.module_title,
        }
        for num, slot in zip(SESSION_NUMBERS, self.slots):
            out[signature_key(num)] = slot.signature
            out[is_signed_key(num)] = slot.is_signed
        return out

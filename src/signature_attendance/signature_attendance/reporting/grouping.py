from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Dict, Hashable, Iterable, List, Optional

from ..attendance.model import AttendanceRecord, is_signed_key, signature_key
from ..common.datetime_utils import isoformat_or_none
from ..core.constants import SESSION_NUMBERS


@dataclass
class GroupedAttendance:
    """Read-model row: one logical attendance entry built from one or more records."""

    module_title: str
    attendance_date: Optional[date]
    submission_timestamp: Optional[datetime]
    learner_id: Optional[int] = None
    learner_name: Optional[str] = None
    module_day: Optional[str] = None
    signatures: Dict[int, Optional[str]] = field(default_factory=dict)
    is_signed: Dict[int, bool] = field(default_factory=dict)

    def absorb(self, record: AttendanceRecord) -> None:
        # Every row overwrites all four slots; the newest timestamp owns the date.
        for num in SESSION_NUMBERS:
            slot = record.slot(num)
            self.signatures[num] = slot.signature
            self.is_signed[num] = slot.is_signed

        ts = record.submission_timestamp
        if ts is not None and (self.submission_timestamp is None or ts > self.submission_timestamp):
            self.submission_timestamp = ts
            self.attendance_date = record.attendance_date

    def _slot_maps(self) -> dict:
        return {
            "signatures": {signature_key(n): self.signatures.get(n) for n in SESSION_NUMBERS},
            "isSignedStatus": {is_signed_key(n): bool(self.is_signed.get(n, False)) for n in SESSION_NUMBERS},
        }

    def to_learner_module_view(self) -> dict:
        return {
            "learnerId": self.learner_id,
            "learnerName": self.learner_name,
            "moduleTitle": self.module_title,
            "attendanceDate": isoformat_or_none(self.attendance_date),
            "submissionTimestamp": isoformat_or_none(self.submission_timestamp),
            **self._slot_maps(),
        }

    def to_history_view(self) -> dict:
        return {
            "moduleDay": self.module_day,
            "moduleTitle": self.module_title,
            "attendanceDate": isoformat_or_none(self.attendance_date),
            "submissionTimestamp": isoformat_or_none(self.submission_timestamp),
            **self._slot_maps(),
        }


def by_learner_and_module(record: AttendanceRecord) -> Hashable:
    return (record.learner_id, record.module_title)


def by_day_and_module(record: AttendanceRecord) -> Hashable:
    return (record.module_day, record.module_title)


def fold_records(
    records: Iterable[AttendanceRecord],
    key: Callable[[AttendanceRecord], Hashable],
) -> List[GroupedAttendance]:
    """Fold ordered records into one ``GroupedAttendance`` per key.

    ``records`` are expected newest first; groups keep first-seen order.
    """
    groups: Dict[Hashable, GroupedAttendance] = {}
    for record in records:
        k = key(record)
        group = groups.get(k)
        if group is None:
            group = GroupedAttendance(
                module_title=record.module_title,
                attendance_date=record.attendance_date,
                submission_timestamp=record.submission_timestamp,
                learner_id=record.learner_id,
                learner_name=record.learner_name,
                module_day=record.module_day,
            )
            groups[k] = group
        group.absorb(record)
    return list(groups.values())

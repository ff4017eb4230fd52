from __future__ import annotations

from typing import List

from ..attendance.repository import AttendanceRepository
from .grouping import by_day_and_module, by_learner_and_module, fold_records


class AttendanceReportService:
    """Use case: dashboard-wide and per-learner attendance views."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def all_attendance(self) -> List[dict]:
        groups = fold_records(self._attendance.get_all_joined(), by_learner_and_module)
        return [g.to_learner_module_view() for g in groups]

    def attendance_for_learner(self, learner_id: int) -> List[dict]:
        groups = fold_records(self._attendance.get_by_learner(int(learner_id)), by_day_and_module)
        return [g.to_history_view() for g in groups]

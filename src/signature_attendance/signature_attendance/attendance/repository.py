from __future__ import annotations

from datetime import date, datetime
from typing import ContextManager, Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Read side of the attendance record store."""

    def get_by_learner_and_module(self, learner_id: int, module_title: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_all_joined(self) -> Sequence[AttendanceRecord]:
        """Every record with ``learner_name`` filled, newest submission first."""

        raise NotImplementedError

    def get_by_learner(self, learner_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError


class SigningTransaction(Protocol):
    """Operations available inside one signing transaction."""

    def find_learner_id_by_name(self, learner_name: str) -> Optional[int]:
        raise NotImplementedError

    def learner_exists(self, learner_id: int) -> bool:
        raise NotImplementedError

    def create_learner(self, learner_name: str) -> int:
        raise NotImplementedError

    def find_record_id(self, learner_id: int, module_title: str) -> Optional[int]:
        raise NotImplementedError

    def sign_existing(
        self,
        *,
        record_id: int,
        session_num: int,
        signature: str,
        attendance_date: date,
        submitted_at: datetime,
    ) -> None:
        raise NotImplementedError

    def insert_signed(
        self,
        *,
        learner_id: int,
        module_title: str,
        session_num: int,
        signature: str,
        attendance_date: date,
        submitted_at: datetime,
    ) -> int:
        raise NotImplementedError


class SigningStore(Protocol):
    def transaction(self) -> ContextManager[SigningTransaction]:
        """Open a transaction: committed on clean exit, rolled back on any exception."""

        raise NotImplementedError

from __future__ import annotations

import copy
from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.signature_attendance.signature_attendance.attendance.model import (
    EMPTY_SLOTS,
    AttendanceRecord,
    slots_with,
)
from src.signature_attendance.signature_attendance.attendance.service import SigningService
from src.signature_attendance.signature_attendance.auth.service import AuthService
from src.signature_attendance.signature_attendance.container import Container
from src.signature_attendance.signature_attendance.learners.model import Learner
from src.signature_attendance.signature_attendance.learners.service import LearnerService
from src.signature_attendance.signature_attendance.reporting.service import AttendanceReportService


class InMemoryStore:
    """Learners + attendance records in dicts, with all-or-nothing transactions.

    Implements the learner repository, the attendance repository and the
    signing store at once so services share a single view of the data.
    """

    def __init__(self):
        self.learners: dict[int, Learner] = {}
        self.records: dict[int, AttendanceRecord] = {}
        self._next_learner_id = 1
        self._next_record_id = 1
        self.calls: list[str] = []
        self.writes = 0
        self.fail_on: Optional[str] = None

    # -------- seeding --------
    def add_learner(self, name: str, registered: datetime | None = None) -> int:
        lid = self._next_learner_id
        self._next_learner_id += 1
        self.learners[lid] = Learner(learner_id=lid, learner_name=name, registration_date=registered)
        return lid

    def add_record(self, record: AttendanceRecord) -> None:
        self.records[record.record_id] = record
        self._next_record_id = max(self._next_record_id, record.record_id + 1)

    # -------- LearnerRepository --------
    def search_by_name(self, fragment: str, *, limit: int):
        self.calls.append("search_by_name")
        return [l for l in self.learners.values() if fragment in l.learner_name][:limit]

    def list_all(self):
        return sorted(self.learners.values(), key=lambda l: l.registration_date or datetime.min, reverse=True)

    def count(self) -> int:
        return len(self.learners)

    def delete_with_attendance(self, learner_id: int) -> bool:
        with self.transaction():
            if learner_id not in self.learners:
                return False
            for rid in [r.record_id for r in self.records.values() if r.learner_id == learner_id]:
                del self.records[rid]
                self.writes += 1
            del self.learners[learner_id]
            self.writes += 1
            return True

    # -------- AttendanceRepository --------
    def _ordered(self, records):
        return sorted(
            records,
            key=lambda r: (r.submission_timestamp or datetime.min, r.attendance_date),
            reverse=True,
        )

    def get_by_learner_and_module(self, learner_id: int, module_title: str):
        for r in self.records.values():
            if r.learner_id == learner_id and r.module_title == module_title:
                return r
        return None

    def get_all_joined(self):
        return [
            replace(r, learner_name=self.learners[r.learner_id].learner_name)
            for r in self._ordered(self.records.values())
        ]

    def get_by_learner(self, learner_id: int):
        return self._ordered(r for r in self.records.values() if r.learner_id == learner_id)

    # -------- SigningStore / SigningTransaction --------
    @contextmanager
    def transaction(self):
        snapshot = (
            copy.deepcopy(self.learners),
            copy.deepcopy(self.records),
            self._next_learner_id,
            self._next_record_id,
        )
        try:
            yield self
        except BaseException:
            self.learners, self.records, self._next_learner_id, self._next_record_id = snapshot
            raise

    def _maybe_fail(self, op: str) -> None:
        if self.fail_on == op:
            raise RuntimeError(f"simulated store failure in {op}")

    def find_learner_id_by_name(self, learner_name: str):
        for l in self.learners.values():
            if l.learner_name == learner_name:
                return l.learner_id
        return None

    def learner_exists(self, learner_id: int) -> bool:
        return learner_id in self.learners

    def create_learner(self, learner_name: str) -> int:
        self.writes += 1
        return self.add_learner(learner_name, registered=datetime(2024, 1, 1, 9, 0, 0))

    def find_record_id(self, learner_id: int, module_title: str):
        r = self.get_by_learner_and_module(learner_id, module_title)
        return r.record_id if r else None

    def sign_existing(self, *, record_id, session_num, signature, attendance_date, submitted_at):
        self._maybe_fail("sign_existing")
        self.writes += 1
        r = self.records[record_id]
        latest = max(submitted_at, r.submission_timestamp) if r.submission_timestamp else submitted_at
        self.records[record_id] = replace(
            r,
            slots=slots_with(r.slots, session_num, signature),
            attendance_date=attendance_date,
            submission_timestamp=latest,
        )

    def insert_signed(self, *, learner_id, module_title, session_num, signature, attendance_date, submitted_at):
        self._maybe_fail("insert_signed")
        self.writes += 1
        rid = self._next_record_id
        self._next_record_id += 1
        self.records[rid] = AttendanceRecord(
            record_id=rid,
            learner_id=learner_id,
            attendance_date=attendance_date,
            module_title=module_title,
            slots=slots_with(EMPTY_SLOTS, session_num, signature),
            submission_timestamp=submitted_at,
        )
        return rid


class Clock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 1, 10, 0, 0)


@pytest.fixture
def clock(fixed_now) -> Clock:
    return Clock(fixed_now)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def signing_service(store, clock) -> SigningService:
    return SigningService(store, store, clock=clock)


@pytest.fixture
def container(store, signing_service) -> Container:
    return Container(
        conn=None,
        learners_repo=store,
        attendance_repo=store,
        signing_store=store,
        learner_service=LearnerService(store),
        signing_service=signing_service,
        report_service=AttendanceReportService(store),
        auth_service=AuthService(username="trainer@example.com", password="s3cret", token="test-token"),
    )


@pytest.fixture
def client(container):
    from src.signature_attendance.signature_attendance.main import create_app

    app = create_app(container, settings_module="config.testing")
    return app.test_client()


@pytest.fixture
def sample_date() -> date:
    return date(2024, 1, 1)

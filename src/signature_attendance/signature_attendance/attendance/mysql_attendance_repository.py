from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, Optional, Sequence, Tuple

from ..core.constants import SESSION_NUMBERS
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_transaction, fetchall, fetchone
from .model import EMPTY_SLOTS, AttendanceRecord, SessionSlot, is_signed_key, signature_key, slots_with
from .repository import AttendanceRepository, SigningStore, SigningTransaction

_SLOT_COLUMNS = ", ".join(f"ar.{signature_key(n)}, ar.{is_signed_key(n)}" for n in SESSION_NUMBERS)


def _slots_from_row(r: dict) -> Tuple[SessionSlot, ...]:
    return tuple(
        SessionSlot(signature=r.get(signature_key(n)), is_signed=bool(r.get(is_signed_key(n))))
        for n in SESSION_NUMBERS
    )


def _slot_params(slots: Tuple[SessionSlot, ...]) -> list:
    params: list = []
    for slot in slots:
        params.extend([slot.signature, 1 if slot.is_signed else 0])
    return params


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        learner_id=int(r["learner_id"]),
        attendance_date=r["attendance_date"],
        module_title=r["module_title"],
        slots=_slots_from_row(r),
        module_day=r.get("module_day"),
        submission_timestamp=r.get("submission_timestamp"),
        learner_name=r.get("learner_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_learner_and_module(self, learner_id: int, module_title: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT ar.record_id, ar.learner_id, ar.attendance_date, ar.module_title, ar.module_day,
                       {_SLOT_COLUMNS}, ar.submission_timestamp
                FROM attendance_records ar
                WHERE ar.learner_id=%s AND ar.module_title=%s
                """,
                (int(learner_id), module_title),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_all_joined(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT ar.record_id, ar.learner_id, ar.attendance_date, ar.module_title, ar.module_day,
                       {_SLOT_COLUMNS}, ar.submission_timestamp,
                       l.learner_name
                FROM attendance_records ar
                JOIN learners l ON l.learner_id = ar.learner_id
                ORDER BY ar.submission_timestamp DESC, ar.attendance_date DESC
                """
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_learner(self, learner_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT ar.record_id, ar.learner_id, ar.attendance_date, ar.module_title, ar.module_day,
                       {_SLOT_COLUMNS}, ar.submission_timestamp
                FROM attendance_records ar
                WHERE ar.learner_id=%s
                ORDER BY ar.submission_timestamp DESC, ar.attendance_date DESC
                """,
                (int(learner_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]


class _MySQLSigningTransaction(SigningTransaction):
    def __init__(self, cur):
        self._cur = cur

    def find_learner_id_by_name(self, learner_name: str) -> Optional[int]:
        self._cur.execute("SELECT learner_id FROM learners WHERE learner_name=%s LIMIT 1", (learner_name,))
        r = fetchone(self._cur)
        return int(r["learner_id"]) if r else None

    def learner_exists(self, learner_id: int) -> bool:
        self._cur.execute("SELECT learner_id FROM learners WHERE learner_id=%s", (int(learner_id),))
        return fetchone(self._cur) is not None

    def create_learner(self, learner_name: str) -> int:
        self._cur.execute("INSERT INTO learners(learner_name) VALUES(%s)", (learner_name,))
        return int(self._cur.lastrowid)

    def find_record_id(self, learner_id: int, module_title: str) -> Optional[int]:
        self._cur.execute(
            "SELECT record_id FROM attendance_records WHERE learner_id=%s AND module_title=%s FOR UPDATE",
            (int(learner_id), module_title),
        )
        r = fetchone(self._cur)
        return int(r["record_id"]) if r else None

    def sign_existing(
        self,
        *,
        record_id: int,
        session_num: int,
        signature: str,
        attendance_date: date,
        submitted_at: datetime,
    ) -> None:
        # Column names come from SESSION_NUMBERS only; never from user input.
        if session_num not in SESSION_NUMBERS:
            raise ValueError(f"session_num out of range: {session_num!r}")
        self._cur.execute(
            f"""
            UPDATE attendance_records
            SET {signature_key(session_num)}=%s,
                {is_signed_key(session_num)}=1,
                attendance_date=%s,
                submission_timestamp=GREATEST(COALESCE(submission_timestamp, %s), %s)
            WHERE record_id=%s
            """,
            (signature, attendance_date, submitted_at, submitted_at, int(record_id)),
        )

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
        slots = slots_with(EMPTY_SLOTS, session_num, signature)
        self._cur.execute(
            """
            INSERT INTO attendance_records(
                learner_id, attendance_date, module_title,
                signature1, is_signed1, signature2, is_signed2,
                signature3, is_signed3, signature4, is_signed4,
                submission_timestamp
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (int(learner_id), attendance_date, module_title, *_slot_params(slots), submitted_at),
        )
        return int(self._cur.lastrowid)


class MySQLSigningStore(SigningStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def transaction(self) -> Iterator[SigningTransaction]:
        with db_transaction(self._conn_factory) as (_, cur):
            yield _MySQLSigningTransaction(cur)

from __future__ import annotations

import logging
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_transaction, escape_like, fetchall, fetchone
from .model import Learner
from .repository import LearnerRepository

logger = logging.getLogger(__name__)


def _to_learner(r: dict) -> Learner:
    return Learner(
        learner_id=int(r["learner_id"]),
        learner_name=r["learner_name"],
        registration_date=r.get("registration_date"),
    )


class MySQLLearnerRepository(LearnerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def search_by_name(self, fragment: str, *, limit: int) -> Sequence[Learner]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT learner_id, learner_name
                FROM learners
                WHERE learner_name LIKE %s
                LIMIT %s
                """,
                (f"%{escape_like(fragment)}%", int(limit)),
            )
            return [_to_learner(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Learner]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT learner_id, learner_name, registration_date
                FROM learners
                ORDER BY registration_date DESC
                """
            )
            return [_to_learner(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total_learners FROM learners")
            row = fetchone(cur)
            return int(row["total_learners"]) if row else 0

    def delete_with_attendance(self, learner_id: int) -> bool:
        with db_transaction(self._conn_factory) as (_, cur):
            cur.execute("SELECT learner_id FROM learners WHERE learner_id=%s FOR UPDATE", (int(learner_id),))
            if not fetchone(cur):
                return False

            cur.execute("DELETE FROM attendance_records WHERE learner_id=%s", (int(learner_id),))
            removed_records = cur.rowcount
            cur.execute("DELETE FROM learners WHERE learner_id=%s", (int(learner_id),))
            logger.info("Deleted learner %s and %s attendance record(s)", learner_id, removed_records)
            return True

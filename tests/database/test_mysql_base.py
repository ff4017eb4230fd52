from __future__ import annotations

from datetime import date, datetime
from unittest.mock import MagicMock

import mysql.connector
import pytest
from mysql.connector import errors

from src.signature_attendance.signature_attendance.attendance.mysql_attendance_repository import (
    MySQLAttendanceRepository,
    MySQLSigningStore,
)
from src.signature_attendance.signature_attendance.core.exceptions import NotFoundError, StoreError
from src.signature_attendance.signature_attendance.database.bootstrap import iter_sql_statements
from src.signature_attendance.signature_attendance.database.mysql_base import db_cursor, db_transaction, escape_like
from src.signature_attendance.signature_attendance.learners.mysql_learner_repository import MySQLLearnerRepository
from src.signature_attendance.signature_attendance.main import SCHEMA_PATH


def _factory(cursor=None):
    conn = MagicMock(name="pooled_connection")
    cur = cursor or MagicMock(name="cursor")
    conn.cursor.return_value = cur
    factory = MagicMock(name="conn_factory")
    factory.connect.return_value = conn
    return factory, conn, cur


def test_transaction_commits_and_releases_on_success():
    factory, conn, cur = _factory()

    with db_transaction(factory) as (_, c):
        c.execute("SELECT 1")

    conn.start_transaction.assert_called_once()
    conn.commit.assert_called_once()
    conn.rollback.assert_not_called()
    cur.close.assert_called_once()
    conn.close.assert_called_once()


def test_transaction_rolls_back_domain_error_and_reraises_it():
    factory, conn, _ = _factory()

    with pytest.raises(NotFoundError):
        with db_transaction(factory):
            raise NotFoundError("missing")

    conn.commit.assert_not_called()
    conn.rollback.assert_called_once()
    conn.close.assert_called_once()


def test_driver_error_becomes_store_error_after_rollback():
    factory, conn, cur = _factory()
    cur.execute.side_effect = mysql.connector.Error("deadlock")

    with pytest.raises(StoreError) as exc_info:
        with db_transaction(factory) as (_, c):
            c.execute("UPDATE attendance_records SET is_signed1=1")

    assert isinstance(exc_info.value.__cause__, mysql.connector.Error)
    conn.rollback.assert_called_once()
    conn.close.assert_called_once()


def test_failed_acquisition_is_store_error_and_nothing_to_release():
    factory = MagicMock(name="conn_factory")
    factory.connect.side_effect = errors.PoolError("Failed getting connection; pool exhausted")

    with pytest.raises(StoreError):
        with db_cursor(factory):
            pass


def test_rollback_failure_does_not_mask_original_error():
    factory, conn, _ = _factory()
    conn.rollback.side_effect = mysql.connector.Error("connection lost")

    with pytest.raises(ValueError):
        with db_cursor(factory):
            raise ValueError("original")

    conn.close.assert_called_once()


def test_escape_like_treats_wildcards_literally():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


def test_schema_splitter_respects_quotes():
    sql = "CREATE TABLE a (x VARCHAR(3) DEFAULT ';'); CREATE TABLE b (y INT);"

    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (x VARCHAR(3) DEFAULT ';')",
        "CREATE TABLE b (y INT)",
    ]


def test_bundled_schema_splits_into_its_statements():
    sql = SCHEMA_PATH.read_text(encoding="utf-8")

    statements = list(iter_sql_statements(sql))

    assert len(statements) == 4
    assert statements[2].startswith("CREATE TABLE IF NOT EXISTS learners")
    assert statements[3].startswith("CREATE TABLE IF NOT EXISTS attendance_records")


def test_attendance_row_maps_four_columns_into_slots():
    factory, _, cur = _factory()
    cur.fetchone.return_value = {
        "record_id": 7,
        "learner_id": 3,
        "attendance_date": date(2024, 1, 1),
        "module_title": "Fire Safety",
        "module_day": None,
        "signature1": "s1", "is_signed1": 1,
        "signature2": None, "is_signed2": 0,
        "signature3": None, "is_signed3": 0,
        "signature4": "s4", "is_signed4": 1,
        "submission_timestamp": datetime(2024, 1, 1, 10, 0),
    }

    rec = MySQLAttendanceRepository(factory).get_by_learner_and_module(3, "Fire Safety")

    assert rec.record_id == 7
    assert [s.is_signed for s in rec.slots] == [True, False, False, True]
    assert rec.slot(4).signature == "s4"
    assert cur.execute.call_args[0][1] == (3, "Fire Safety")


def test_signing_update_targets_only_the_requested_session_columns():
    factory, conn, cur = _factory()

    with MySQLSigningStore(factory).transaction() as tx:
        tx.sign_existing(
            record_id=7,
            session_num=3,
            signature="s3",
            attendance_date=date(2024, 1, 2),
            submitted_at=datetime(2024, 1, 2, 9, 0),
        )

    sql, params = cur.execute.call_args[0]
    assert "signature3=%s" in sql
    assert "is_signed3=1" in sql
    assert "signature1" not in sql
    assert "GREATEST(COALESCE(submission_timestamp, %s), %s)" in sql
    assert params == ("s3", date(2024, 1, 2), datetime(2024, 1, 2, 9, 0), datetime(2024, 1, 2, 9, 0), 7)
    conn.commit.assert_called_once()


def test_signing_insert_fills_only_one_slot():
    factory, _, cur = _factory()
    cur.lastrowid = 11

    with MySQLSigningStore(factory).transaction() as tx:
        rid = tx.insert_signed(
            learner_id=3,
            module_title="Fire Safety",
            session_num=2,
            signature="s2",
            attendance_date=date(2024, 1, 1),
            submitted_at=datetime(2024, 1, 1, 10, 0),
        )

    assert rid == 11
    params = cur.execute.call_args[0][1]
    assert params[3:11] == (None, 0, "s2", 1, None, 0, None, 0)


def test_delete_missing_learner_issues_no_deletes():
    factory, conn, cur = _factory()
    cur.fetchone.return_value = None

    assert MySQLLearnerRepository(factory).delete_with_attendance(5) is False

    statements = [c[0][0] for c in cur.execute.call_args_list]
    assert len(statements) == 1
    assert not any("DELETE" in s for s in statements)
    conn.close.assert_called_once()


def test_delete_existing_learner_removes_records_before_learner():
    factory, conn, cur = _factory()
    cur.fetchone.return_value = {"learner_id": 5}
    cur.rowcount = 2

    assert MySQLLearnerRepository(factory).delete_with_attendance(5) is True

    statements = [c[0][0] for c in cur.execute.call_args_list]
    assert "attendance_records" in statements[1]
    assert "DELETE FROM learners" in statements[2]
    conn.commit.assert_called_once()

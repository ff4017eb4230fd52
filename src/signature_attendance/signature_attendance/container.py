from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository, MySQLSigningStore
from .attendance.service import SigningService
from .auth.service import AuthService
from .core.constants import DEFAULT_POOL_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .learners.mysql_learner_repository import MySQLLearnerRepository
from .learners.service import LearnerService
from .reporting.service import AttendanceReportService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    learners_repo: MySQLLearnerRepository
    attendance_repo: MySQLAttendanceRepository
    signing_store: MySQLSigningStore

    learner_service: LearnerService
    signing_service: SigningService
    report_service: AttendanceReportService
    auth_service: AuthService


def build_container(*, db_config: dict, login: dict, pool_size: int = DEFAULT_POOL_SIZE) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        pool_size=int(pool_size),
    )
    conn = DatabaseConnection.get_instance(config)

    learners_repo = MySQLLearnerRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    signing_store = MySQLSigningStore(conn)

    return Container(
        conn=conn,
        learners_repo=learners_repo,
        attendance_repo=attendance_repo,
        signing_store=signing_store,
        learner_service=LearnerService(learners_repo),
        signing_service=SigningService(signing_store, attendance_repo),
        report_service=AttendanceReportService(attendance_repo),
        auth_service=AuthService(
            username=str(login["username"]),
            password=str(login["password"]),
            token=str(login["token"]),
        ),
    )

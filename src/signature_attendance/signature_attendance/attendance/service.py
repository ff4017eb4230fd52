from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import is_blank, require_int, require_non_empty, require_session_num
from ..core.constants import NEW_LEARNER_SENTINEL
from ..core.exceptions import NotFoundError, ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository, SigningStore, SigningTransaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignRequest:
    learner_name: str
    learner_id: Optional[int]  # None means "resolve or create by name"
    attendance_date: date
    module_title: str
    session_num: int
    signature: str

    @classmethod
    def from_payload(cls, payload: dict) -> "SignRequest":
        """Validate a raw JSON body.

        Field presence is checked first so any missing value yields the same
        message the signing form has always shown.
        """
        required = ("learnerName", "learnerId", "attendanceDate", "moduleTitle", "sessionNum", "signatureData")
        if any(is_blank(payload.get(key)) for key in required):
            raise ValidationError("Missing required fields for session signing.")

        session_num = require_session_num(payload["sessionNum"])

        raw_id: Any = payload["learnerId"]
        if isinstance(raw_id, str) and raw_id.strip() == NEW_LEARNER_SENTINEL:
            learner_id = None
        else:
            learner_id = require_int(raw_id, "learnerId")

        return cls(
            learner_name=require_non_empty(payload["learnerName"], "learnerName"),
            learner_id=learner_id,
            attendance_date=parse_iso_date(str(payload["attendanceDate"])),
            module_title=require_non_empty(payload["moduleTitle"], "moduleTitle"),
            session_num=session_num,
            signature=require_non_empty(payload["signatureData"], "signatureData"),
        )


@dataclass(frozen=True)
class SignResult:
    learner_id: int
    record_id: int
    session_num: int
    created_record: bool

    @property
    def message(self) -> str:
        return f"Session {self.session_num} signed successfully!"


class SigningService:
    """Use case: sign one session of a learner's module attendance.

    Learner resolution and the record insert/update run in one transaction:
    a new learner is only kept if its first signature is stored too.
    """

    def __init__(
        self,
        store: SigningStore,
        attendance: AttendanceRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._store = store
        self._attendance = attendance
        self._clock = clock

    def sign_session(self, request: SignRequest) -> SignResult:
        submitted_at = self._clock()

        with self._store.transaction() as tx:
            learner_id = self._resolve_learner(tx, request)

            record_id = tx.find_record_id(learner_id, request.module_title)
            if record_id is not None:
                logger.info(
                    "Updating session %s for learner %s (id=%s) module %r on %s",
                    request.session_num, request.learner_name, learner_id, request.module_title, request.attendance_date,
                )
                tx.sign_existing(
                    record_id=record_id,
                    session_num=request.session_num,
                    signature=request.signature,
                    attendance_date=request.attendance_date,
                    submitted_at=submitted_at,
                )
                created = False
            else:
                logger.info(
                    "Inserting record for learner %s (id=%s) module %r on %s, session %s",
                    request.learner_name, learner_id, request.module_title, request.attendance_date, request.session_num,
                )
                record_id = tx.insert_signed(
                    learner_id=learner_id,
                    module_title=request.module_title,
                    session_num=request.session_num,
                    signature=request.signature,
                    attendance_date=request.attendance_date,
                    submitted_at=submitted_at,
                )
                created = True

        return SignResult(learner_id=learner_id, record_id=record_id, session_num=request.session_num, created_record=created)

    @staticmethod
    def _resolve_learner(tx: SigningTransaction, request: SignRequest) -> int:
        if request.learner_id is None:
            existing = tx.find_learner_id_by_name(request.learner_name)
            if existing is not None:
                return existing
            learner_id = tx.create_learner(request.learner_name)
            logger.info("Created learner %s (id=%s)", request.learner_name, learner_id)
            return learner_id

        # An explicit id must already exist; unlike "NEW" it is never auto-created.
        if not tx.learner_exists(request.learner_id):
            raise NotFoundError(
                f"Learner with ID {request.learner_id} not found. Please re-enter learner name."
            )
        return request.learner_id

    def get_status(self, learner_id: int, module_title: str) -> Optional[AttendanceRecord]:
        return self._attendance.get_by_learner_and_module(int(learner_id), module_title)

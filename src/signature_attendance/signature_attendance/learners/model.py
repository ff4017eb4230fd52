from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import isoformat_or_none


@dataclass(frozen=True)
class Learner:
    """Domain entity: a person attending training modules.

    Created on the first signing that names an unknown learner, never updated.
    """

    learner_id: int
    learner_name: str
    registration_date: Optional[datetime] = None

    def to_summary(self) -> dict:
        return {"learner_id": self.learner_id, "learner_name": self.learner_name}

    def to_dict(self) -> dict:
        return {
            "learner_id": self.learner_id,
            "learner_name": self.learner_name,
            "registration_date": isoformat_or_none(self.registration_date),
        }

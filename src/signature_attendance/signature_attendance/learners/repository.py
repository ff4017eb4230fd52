from __future__ import annotations

from typing import Protocol, Sequence

from .model import Learner


class LearnerRepository(Protocol):
    """Storage interface for learners.

    The service layer depends on this Protocol, never on a concrete database.
    """

    def search_by_name(self, fragment: str, *, limit: int) -> Sequence[Learner]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Learner]:
        """All learners, newest registration first."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def delete_with_attendance(self, learner_id: int) -> bool:
        """Remove the learner and every attendance record it owns, atomically.

        Returns False (having written nothing) when the learner does not exist.
        """

        raise NotImplementedError

from __future__ import annotations

from typing import Sequence

from ..core.constants import SEARCH_LIMIT, SEARCH_MIN_LENGTH
from ..core.exceptions import NotFoundError
from .model import Learner
from .repository import LearnerRepository


class LearnerService:
    """Use cases: look up, list and remove learners."""

    def __init__(self, learners: LearnerRepository, *, min_query_length: int = SEARCH_MIN_LENGTH, limit: int = SEARCH_LIMIT):
        self._learners = learners
        self._min_query_length = int(min_query_length)
        self._limit = int(limit)

    def search(self, query: str | None) -> Sequence[Learner]:
        # Short queries never reach the store (autocomplete fires per keystroke).
        if not query or len(query) < self._min_query_length:
            return []
        return self._learners.search_by_name(query, limit=self._limit)

    def list_all(self) -> Sequence[Learner]:
        return self._learners.list_all()

    def count(self) -> int:
        return self._learners.count()

    def delete(self, learner_id: int) -> None:
        if not self._learners.delete_with_attendance(int(learner_id)):
            raise NotFoundError("Learner not found.")

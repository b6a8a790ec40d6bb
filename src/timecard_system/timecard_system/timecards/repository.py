from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import TimeCard


class TimeCardRepository(Protocol):
    def get_active(self, user_id: int) -> Optional[TimeCard]:
        raise NotImplementedError

    def get_by_id(self, *, user_id: int, timecard_id: int) -> Optional[TimeCard]:
        """Return the card only when it belongs to ``user_id``."""

        raise NotImplementedError

    def create(self, card: TimeCard) -> int:
        """Insert a card (its timecard_id is ignored). Returns the new id."""

        raise NotImplementedError

    def save(self, card: TimeCard) -> bool:
        raise NotImplementedError

    def delete(self, *, user_id: int, timecard_id: int) -> bool:
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[TimeCard]:
        """Newest work_date first. Both bounds are inclusive."""

        raise NotImplementedError

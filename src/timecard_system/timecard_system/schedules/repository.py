from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Schedule


class ScheduleRepository(Protocol):
    def get_by_id(self, *, user_id: int, schedule_id: int) -> Optional[Schedule]:
        raise NotImplementedError

    def create(self, schedule: Schedule) -> int:
        """Insert a schedule (its schedule_id is ignored).

        Returns schedule_id.
        """

        raise NotImplementedError

    def save(self, schedule: Schedule) -> bool:
        raise NotImplementedError

    def delete(self, *, user_id: int, schedule_id: int) -> bool:
        raise NotImplementedError

    def list_for_user(
        self,
        user_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[Schedule]:
        """Ordered by work_date then start_time. Both bounds are inclusive."""

        raise NotImplementedError

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

import pytest

from src.timecard_system.timecard_system.core.enums import TimeCardStatus
from src.timecard_system.timecard_system.core.exceptions import ValidationError
from src.timecard_system.timecard_system.schedules.model import Schedule
from src.timecard_system.timecard_system.timecards.model import TimeCard
from src.timecard_system.timecard_system.users.model import User


class InMemoryTimeCards:
    def __init__(self):
        self.cards: dict[int, TimeCard] = {}
        self._id = 0

    def get_active(self, user_id: int) -> Optional[TimeCard]:
        for c in self.cards.values():
            if c.user_id == user_id and c.status == TimeCardStatus.ACTIVE:
                return c
        return None

    def get_by_id(self, *, user_id: int, timecard_id: int) -> Optional[TimeCard]:
        c = self.cards.get(timecard_id)
        return c if c and c.user_id == user_id else None

    def create(self, card: TimeCard) -> int:
        if card.is_active and self.get_active(card.user_id):
            raise ValidationError("You already have an active time card")
        self._id += 1
        self.cards[self._id] = replace(card, timecard_id=self._id)
        return self._id

    def save(self, card: TimeCard) -> bool:
        self.cards[card.timecard_id] = card
        return True

    def delete(self, *, user_id: int, timecard_id: int) -> bool:
        if self.get_by_id(user_id=user_id, timecard_id=timecard_id):
            del self.cards[timecard_id]
            return True
        return False

    def list_for_user(self, user_id: int, *, start: Optional[date] = None, end: Optional[date] = None):
        items = [c for c in self.cards.values() if c.user_id == user_id]
        if start is not None and end is not None:
            items = [c for c in items if start <= c.work_date <= end]
        items.sort(key=lambda c: (c.work_date, c.time_in), reverse=True)
        return items


class InMemorySchedules:
    def __init__(self):
        self.schedules: dict[int, Schedule] = {}
        self._id = 0

    def get_by_id(self, *, user_id: int, schedule_id: int) -> Optional[Schedule]:
        s = self.schedules.get(schedule_id)
        return s if s and s.user_id == user_id else None

    def create(self, schedule: Schedule) -> int:
        self._id += 1
        self.schedules[self._id] = replace(schedule, schedule_id=self._id)
        return self._id

    def save(self, schedule: Schedule) -> bool:
        self.schedules[schedule.schedule_id] = schedule
        return True

    def delete(self, *, user_id: int, schedule_id: int) -> bool:
        if self.get_by_id(user_id=user_id, schedule_id=schedule_id):
            del self.schedules[schedule_id]
            return True
        return False

    def list_for_user(self, user_id: int, *, start: Optional[date] = None, end: Optional[date] = None):
        items = [s for s in self.schedules.values() if s.user_id == user_id]
        if start is not None and end is not None:
            items = [s for s in items if start <= s.work_date <= end]
        items.sort(key=lambda s: (s.work_date, s.start_time))
        return items


class InMemoryUsers:
    def __init__(self):
        self.users: dict[int, User] = {}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(self, *, username: str, email: str, password_hash: str) -> int:
        user_id = len(self.users) + 1
        self.users[user_id] = User(user_id=user_id, username=username, email=email, password_hash=password_hash)
        return user_id


@pytest.fixture
def timecards_repo():
    return InMemoryTimeCards()


@pytest.fixture
def schedules_repo():
    return InMemorySchedules()


@pytest.fixture
def users_repo():
    return InMemoryUsers()

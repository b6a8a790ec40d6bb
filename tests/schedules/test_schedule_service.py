from __future__ import annotations

from datetime import date, time

import pytest

from src.timecard_system.timecard_system.core.enums import RecurringPattern, ScheduleType
from src.timecard_system.timecard_system.core.exceptions import NotFoundError, ValidationError
from src.timecard_system.timecard_system.schedules.schema import schedule_fields
from src.timecard_system.timecard_system.schedules.service import ScheduleService


def _work(svc, day: date, start: time, end: time, user_id: int = 1):
    return svc.create(user_id, title="Shift", work_date=day, start_time=start, end_time=end)


def test_create_normalizes_fields(schedules_repo):
    svc = ScheduleService(schedules_repo)

    s = svc.create(
        1,
        title="  Team sync ",
        work_date=date(2025, 7, 8),
        start_time=time(10, 0),
        end_time=time(11, 0),
        schedule_type="meeting",
        description="   ",
        recurring=True,
        recurring_pattern="weekly",
    )

    assert s.schedule_id == 1
    assert s.title == "Team sync"
    assert s.schedule_type == ScheduleType.MEETING
    assert s.description is None
    assert s.recurring_pattern == RecurringPattern.WEEKLY


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": " "},
        {"schedule_type": "party"},
        {"recurring": True},
        {"recurring": True, "recurring_pattern": "hourly"},
    ],
)
def test_create_rejects_invalid_input(schedules_repo, overrides):
    kwargs = dict(title="Shift", work_date=date(2025, 7, 8), start_time=time(9, 0), end_time=time(17, 0))
    kwargs.update(overrides)

    with pytest.raises(ValidationError):
        ScheduleService(schedules_repo).create(1, **kwargs)
    assert schedules_repo.schedules == {}


def test_pattern_dropped_when_not_recurring(schedules_repo):
    s = ScheduleService(schedules_repo).create(
        1,
        title="Shift",
        work_date=date(2025, 7, 8),
        start_time=time(9, 0),
        end_time=time(17, 0),
        recurring_pattern="daily",
    )

    assert s.recurring_pattern is None


def test_preview_pay_rolls_overnight_shift(schedules_repo):
    svc = ScheduleService(schedules_repo)
    s = _work(svc, date(2025, 7, 8), time(22, 0), time(6, 0))

    pay = svc.preview_pay(s)

    assert pay.night_hours == 8
    assert pay.regular_hours == 0
    assert pay.total_pay == 10000


def test_preview_pay_only_for_work_entries(schedules_repo):
    svc = ScheduleService(schedules_repo)
    s = svc.create(
        1,
        title="Holiday",
        work_date=date(2025, 7, 8),
        start_time=time(0, 0),
        end_time=time(23, 59),
        schedule_type=ScheduleType.HOLIDAY,
    )

    assert svc.preview_pay(s) is None


def test_work_summary_counts_past_work_days(schedules_repo):
    svc = ScheduleService(schedules_repo)
    _work(svc, date(2025, 7, 8), time(9, 0), time(12, 0))
    _work(svc, date(2025, 7, 8), time(21, 0), time(23, 0))
    _work(svc, date(2025, 7, 9), time(17, 55), time(23, 0))
    svc.create(
        1,
        title="Review",
        work_date=date(2025, 7, 9),
        start_time=time(8, 0),
        end_time=time(9, 0),
        schedule_type="meeting",
    )
    _work(svc, date(2025, 7, 20), time(9, 0), time(17, 0))  # after as_of
    _work(svc, date(2025, 7, 9), time(9, 0), time(17, 0), user_id=2)

    summary = svc.work_summary(1, start=date(2025, 7, 1), end=date(2025, 7, 31), as_of=date(2025, 7, 10))

    assert summary.days_worked == 2
    assert summary.entries == 3
    assert summary.total_pay == 3000 + 2250 + 5333
    assert summary.night_hours == 2.0


def test_update_and_delete(schedules_repo):
    svc = ScheduleService(schedules_repo)
    s = _work(svc, date(2025, 7, 8), time(9, 0), time(17, 0))

    updated = svc.update(1, s.schedule_id, end_time=time(18, 0), color="#1976d2")

    assert updated.end_time == time(18, 0)
    assert schedules_repo.schedules[s.schedule_id].color == "#1976d2"

    with pytest.raises(ValidationError):
        svc.update(1, s.schedule_id, user_id=2)
    with pytest.raises(NotFoundError):
        svc.update(2, s.schedule_id, title="Mine now")
    with pytest.raises(NotFoundError):
        svc.delete(2, s.schedule_id)

    svc.delete(1, s.schedule_id)
    assert schedules_repo.schedules == {}


def test_list_is_ordered_by_date_and_start(schedules_repo):
    svc = ScheduleService(schedules_repo)
    _work(svc, date(2025, 7, 9), time(9, 0), time(12, 0))
    _work(svc, date(2025, 7, 8), time(13, 0), time(17, 0))
    _work(svc, date(2025, 7, 8), time(8, 0), time(12, 0))

    items = svc.list_for_user(1)

    assert [(s.work_date.day, s.start_time.hour) for s in items] == [(8, 8), (8, 13), (9, 9)]


@pytest.mark.parametrize("raw,expected", [("false", False), ("False", False), ("", False), (None, False), ("true", True), (True, True), (0, False)])
def test_schedule_fields_parses_recurring_flag(raw, expected):
    assert schedule_fields({"recurring": raw}) == {"recurring": expected}


def test_schedule_fields_rejects_unreadable_flag():
    with pytest.raises(ValidationError):
        schedule_fields({"recurring": "sometimes"})


def test_update_cannot_reassign_owner(schedules_repo):
    svc = ScheduleService(schedules_repo)
    s = _work(svc, date(2025, 7, 8), time(9, 0), time(17, 0))

    with pytest.raises(ValidationError):
        svc.update(1, s.schedule_id, user_id=2, schedule_id=99)
    assert schedules_repo.schedules[s.schedule_id].user_id == 1

from __future__ import annotations

from datetime import date, datetime, time

import pytest

from src.timecard_system.timecard_system.core.enums import TimeCardStatus
from src.timecard_system.timecard_system.core.exceptions import InvalidIntervalError, NotFoundError, ValidationError
from src.timecard_system.timecard_system.timecards import service as service_module
from src.timecard_system.timecard_system.timecards.service import TimeCardService

IMPORT_TEMPLATE = """date,timeIn,timeOut
2025-07-08,17:55,23:00
2025-07-12,11:55,17:00
2025-07-19,22:00,05:00
"""


def test_clock_in_then_out_computes_pay(timecards_repo):
    svc = TimeCardService(timecards_repo)

    card = svc.clock_in(1, notes="front desk", now=datetime(2026, 2, 1, 21, 0))
    assert card.status == TimeCardStatus.ACTIVE
    assert card.total_pay == 0

    done = svc.clock_out(1, now=datetime(2026, 2, 1, 23, 0))

    assert done.status == TimeCardStatus.COMPLETED
    assert done.time_out == datetime(2026, 2, 1, 23, 0)
    assert (done.regular_pay, done.night_pay, done.total_pay) == (1000, 1250, 2250)
    assert done.notes == "front desk"
    assert timecards_repo.cards[card.timecard_id] == done
    assert svc.get_active(1) is None


def test_only_one_active_card(timecards_repo):
    svc = TimeCardService(timecards_repo)
    svc.clock_in(1, now=datetime(2026, 2, 1, 9, 0))

    with pytest.raises(ValidationError):
        svc.clock_in(1, now=datetime(2026, 2, 1, 9, 5))

    # another user is unaffected
    svc.clock_in(2, now=datetime(2026, 2, 1, 9, 5))


def test_clock_out_without_active_card(timecards_repo):
    with pytest.raises(ValidationError):
        TimeCardService(timecards_repo).clock_out(1, now=datetime(2026, 2, 1, 17, 0))


def test_clock_out_overnight_keeps_work_date(timecards_repo):
    svc = TimeCardService(timecards_repo)
    svc.clock_in(1, now=datetime(2026, 2, 1, 23, 0))

    done = svc.clock_out(1, notes="closing", now=datetime(2026, 2, 2, 5, 0))

    assert done.work_date == date(2026, 2, 1)
    assert done.night_hours == 6
    assert done.total_pay == 7500
    assert done.notes == "closing"


def test_historical_from_clock_rolls_over_midnight(timecards_repo):
    svc = TimeCardService(timecards_repo)

    card = svc.add_historical_from_clock(1, work_date=date(2025, 7, 19), time_in=time(22, 0), time_out=time(5, 0))

    assert card.time_out == datetime(2025, 7, 20, 5, 0)
    assert card.status == TimeCardStatus.COMPLETED
    assert card.night_hours == 7
    assert card.total_pay == 8750


def test_historical_with_datetimes_is_not_rolled(timecards_repo):
    svc = TimeCardService(timecards_repo)

    with pytest.raises(InvalidIntervalError):
        svc.add_historical(
            1,
            work_date=date(2025, 7, 19),
            time_in=datetime(2025, 7, 19, 17, 0),
            time_out=datetime(2025, 7, 19, 15, 0),
        )
    assert timecards_repo.cards == {}


def test_import_csv_collects_failures(timecards_repo):
    svc = TimeCardService(timecards_repo)
    text = IMPORT_TEMPLATE + "2025-07-20,25:00,23:00\nnot-a-row\n\n"

    result = svc.import_csv(1, text)

    assert result.imported == 3
    assert result.failed == 1
    assert result.errors[0].startswith("2025-07-20")

    pays = sorted(c.total_pay for c in timecards_repo.cards.values())
    assert pays == [5083, 5333, 8750]


def test_import_csv_without_header(timecards_repo):
    result = TimeCardService(timecards_repo).import_csv(1, "2025-07-08,17:55,23:00\n")

    assert result.imported == 1


def test_update_recalculates_pay(timecards_repo):
    svc = TimeCardService(timecards_repo)
    card = svc.add_historical_from_clock(1, work_date=date(2025, 7, 8), time_in=time(9, 0), time_out=time(17, 0))

    updated = svc.update(1, card.timecard_id, time_out=datetime(2025, 7, 8, 23, 0), notes="stayed late")

    assert updated.regular_hours == 13
    assert updated.night_hours == 1
    assert updated.total_pay == 14250
    assert updated.notes == "stayed late"


def test_update_does_not_roll_over(timecards_repo):
    svc = TimeCardService(timecards_repo)
    card = svc.add_historical_from_clock(1, work_date=date(2025, 7, 8), time_in=time(9, 0), time_out=time(17, 0))

    with pytest.raises(InvalidIntervalError):
        svc.update(1, card.timecard_id, time_out=datetime(2025, 7, 8, 5, 0))


def test_update_notes_on_active_card_keeps_it_active(timecards_repo):
    svc = TimeCardService(timecards_repo)
    card = svc.clock_in(1, now=datetime(2026, 2, 1, 9, 0))

    updated = svc.update(1, card.timecard_id, notes="remote")

    assert updated.status == TimeCardStatus.ACTIVE
    assert updated.notes == "remote"


def test_update_other_users_card_is_not_found(timecards_repo):
    svc = TimeCardService(timecards_repo)
    card = svc.clock_in(1, now=datetime(2026, 2, 1, 9, 0))

    with pytest.raises(NotFoundError):
        svc.update(2, card.timecard_id, notes="x")


def test_delete(timecards_repo):
    svc = TimeCardService(timecards_repo)
    card = svc.clock_in(1, now=datetime(2026, 2, 1, 9, 0))

    with pytest.raises(NotFoundError):
        svc.delete(2, card.timecard_id)

    svc.delete(1, card.timecard_id)
    assert timecards_repo.cards == {}


def test_list_for_user_filters_range(timecards_repo):
    svc = TimeCardService(timecards_repo)
    svc.import_csv(1, IMPORT_TEMPLATE)

    cards = svc.list_for_user(1, start=date(2025, 7, 10), end=date(2025, 7, 31))

    assert [c.work_date for c in cards] == [date(2025, 7, 19), date(2025, 7, 12)]
    with pytest.raises(ValidationError):
        svc.list_for_user(1, start=date(2025, 7, 31), end=date(2025, 7, 1))


class _StaleActiveLookup:
    """Repository whose active-card lookup misses, like a concurrent clock-in."""

    def __init__(self, repo):
        self._repo = repo

    def __getattr__(self, name):
        return getattr(self._repo, name)

    def get_active(self, user_id):
        return None


def test_storage_rejects_second_active_card(timecards_repo):
    svc = TimeCardService(_StaleActiveLookup(timecards_repo))
    svc.clock_in(1, now=datetime(2026, 2, 1, 9, 0))

    with pytest.raises(ValidationError):
        svc.clock_in(1, now=datetime(2026, 2, 1, 9, 0))
    assert len(timecards_repo.cards) == 1


def test_downloadable_template_imports_cleanly(timecards_repo):
    result = TimeCardService(timecards_repo).import_csv(1, service_module.IMPORT_TEMPLATE)

    assert result.imported == len(service_module.IMPORT_TEMPLATE.strip().splitlines()) - 1
    assert result.failed == 0
    overnight = next(c for c in timecards_repo.cards.values() if c.work_date == date(2025, 7, 19))
    assert overnight.time_out == datetime(2025, 7, 20, 5, 0)

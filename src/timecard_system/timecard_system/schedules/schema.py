from __future__ import annotations

from typing import Any, Optional

from ..common.datetime_utils import parse_clock_time, parse_iso_date
from ..core.exceptions import ValidationError
from ..payroll.shift_pay import PayBreakdown
from .model import Schedule

# JSON field -> Schedule attribute
_FIELDS = {
    "title": "title",
    "description": "description",
    "date": "work_date",
    "startTime": "start_time",
    "endTime": "end_time",
    "type": "schedule_type",
    "color": "color",
    "recurring": "recurring",
    "recurringPattern": "recurring_pattern",
}

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off", ""}


def schedule_to_dict(schedule: Schedule, pay: Optional[PayBreakdown] = None) -> dict:
    return {
        "id": schedule.schedule_id,
        "user_id": schedule.user_id,
        "title": schedule.title,
        "description": schedule.description,
        "date": schedule.work_date.isoformat(),
        "startTime": schedule.start_time.strftime("%H:%M"),
        "endTime": schedule.end_time.strftime("%H:%M"),
        "type": schedule.schedule_type.value,
        "color": schedule.color,
        "recurring": schedule.recurring,
        "recurringPattern": schedule.recurring_pattern.value if schedule.recurring_pattern else None,
        "pay": pay.as_dict() if pay else None,
    }


def schedule_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Translate a JSON payload into Schedule keyword arguments.

    Only keys present in the payload are returned, so the result also works
    for partial updates.
    """
    out: dict[str, Any] = {}
    for key, attr in _FIELDS.items():
        if key not in data:
            continue
        value = data[key]
        try:
            if attr == "work_date":
                value = parse_iso_date(str(value)[:10])
            elif attr in ("start_time", "end_time"):
                value = parse_clock_time(str(value))
        except ValueError:
            raise ValidationError(f"{key} has an invalid format") from None
        if attr == "recurring":
            value = _flag(value, key)
        out[attr] = value
    return out


def _flag(value: Any, key: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValidationError(f"{key} must be true or false")

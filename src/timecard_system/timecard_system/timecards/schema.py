from __future__ import annotations

from .model import TimeCard


def timecard_to_dict(card: TimeCard) -> dict:
    return {
        "id": card.timecard_id,
        "user_id": card.user_id,
        "date": card.work_date.isoformat(),
        "time_in": card.time_in.isoformat(),
        "time_out": card.time_out.isoformat() if card.time_out else None,
        "status": card.status.value,
        "notes": card.notes,
        **card.breakdown.as_dict(),
    }

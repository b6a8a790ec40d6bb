from __future__ import annotations

from enum import Enum


class TimeCardStatus(str, Enum):
    """Trạng thái thẻ chấm công: đang mở (chưa tan ca) hoặc đã hoàn tất."""

    ACTIVE = "active"
    COMPLETED = "completed"


class ScheduleType(str, Enum):
    """Loại sự kiện trên lịch. Chỉ WORK được tính lương dự kiến."""

    WORK = "work"
    MEETING = "meeting"
    BREAK = "break"
    HOLIDAY = "holiday"
    OTHER = "other"


class RecurringPattern(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ReportPeriod(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

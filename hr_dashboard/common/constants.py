"""Enums and constants for the HR dashboard — matching the HR API values."""

from __future__ import annotations

import enum
from typing import Optional


# ── Attendance ──────────────────────────────────────────────────────

class AttendanceStatus(str, enum.Enum):
    present = "present"
    absent = "absent"


class Availability(str, enum.Enum):
    """Derived status of one employee on one date."""

    present = "present"
    absent = "absent"
    no_info = "no_info"


class FilterTab(str, enum.Enum):
    all = "all"
    present = "present"
    absent = "absent"


# Tri-state names used by the older dashboard views
STATUS_ALIASES: dict[str, AttendanceStatus] = {
    "present": AttendanceStatus.present,
    "active": AttendanceStatus.present,
    "absent": AttendanceStatus.absent,
    "leave": AttendanceStatus.absent,
}


def normalize_status(value: object) -> Optional[AttendanceStatus]:
    """Map a raw status (``present``/``active``/``absent``/``leave``) to the binary enum."""
    if isinstance(value, AttendanceStatus):
        return value
    if not isinstance(value, str):
        return None
    return STATUS_ALIASES.get(value.strip().lower())


# ── Feedback ────────────────────────────────────────────────────────

class FeedbackKind(str, enum.Enum):
    success = "success"
    error = "error"


# ── Misc constants ──────────────────────────────────────────────────

ISO_DATE_FORMAT = "%Y-%m-%d"
UNKNOWN_DATE = "-"
DEFAULT_PAGE_SIZE = 10
DEFAULT_TREND_DAYS = 7
MAX_TREND_DAYS = 90

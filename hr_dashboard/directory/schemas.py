"""Directory Pydantic v2 schemas — page payloads and attendance actions."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from hr_dashboard.attendance.schemas import AvailabilityCounts
from hr_dashboard.common.constants import (
    AttendanceStatus,
    Availability,
    FeedbackKind,
    FilterTab,
    normalize_status,
)
from hr_dashboard.common.dates import parse_iso_date
from hr_dashboard.common.pagination import PaginationMeta
from hr_dashboard.hr_api.schemas import Attendance


class Feedback(BaseModel):
    """Dismissable message shown next to the control that triggered it."""

    kind: FeedbackKind
    message: str

    @classmethod
    def success(cls, message: str) -> "Feedback":
        return cls(kind=FeedbackKind.success, message=message)

    @classmethod
    def error(cls, message: str) -> "Feedback":
        return cls(kind=FeedbackKind.error, message=message)


class DirectoryRow(BaseModel):
    """One employee joined with their availability on the selected date."""

    id: str
    employee_id: str
    full_name: str
    email: str
    department: str
    initials: str
    joined: str = Field(..., description="Display date of the employee's creation")
    availability: Availability
    status_label: str
    is_updating: bool = False


class TabBadge(BaseModel):
    id: FilterTab
    label: str
    count: int
    active: bool = False


class DirectoryPage(BaseModel):
    """Everything needed to render one directory table page."""

    title: str
    subtitle: str
    query: str
    date: str
    tab: FilterTab
    show_filters: bool
    enable_actions: bool
    tabs: list[TabBadge] = Field(default_factory=list)
    counts: AvailabilityCounts
    rows: list[DirectoryRow]
    meta: PaginationMeta
    empty_message: Optional[str] = None
    feedback: Optional[Feedback] = None


class MarkAttendanceRequest(BaseModel):
    """Mark one employee present/absent on a date (defaults to today)."""

    employee_id: str = Field(..., min_length=1)
    status: AttendanceStatus
    date: Optional[str] = Field(None, description="ISO date (YYYY-MM-DD)")

    @field_validator("status", mode="before")
    @classmethod
    def _accept_aliases(cls, value):
        # "active" / "leave" are accepted as present / absent
        status = normalize_status(value)
        return status if status is not None else value

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and parse_iso_date(value) is None:
            raise ValueError("date must be YYYY-MM-DD")
        return value


class MarkAttendanceResponse(BaseModel):
    ok: bool
    row: Optional[DirectoryRow] = None
    record: Optional[Attendance] = None
    feedback: Optional[Feedback] = None

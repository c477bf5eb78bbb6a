"""Directory router — people and attendance pages, and attendance marking.

Each request is one page render: data is loaded fresh, a view model is
built for the requested query / date / tab / page, and its snapshot is
returned.
"""

import enum
from typing import Optional

from fastapi import APIRouter, Depends, Query

from hr_dashboard.attendance.service import AttendanceCache
from hr_dashboard.common.constants import FilterTab
from hr_dashboard.config import Settings
from hr_dashboard.dependencies import get_reader, get_settings, get_writer
from hr_dashboard.directory.schemas import (
    DirectoryPage,
    MarkAttendanceRequest,
    MarkAttendanceResponse,
)
from hr_dashboard.directory.view_model import (
    VIEW_PRESETS,
    DirectoryViewModel,
    selected_date_or_today,
)
from hr_dashboard.hr_api.client import HRApiClient
from hr_dashboard.hr_api.loader import load_page_data

router = APIRouter()


class DirectoryView(str, enum.Enum):
    people = "people"
    attendance = "attendance"


# ── POST /attendance/mark ───────────────────────────────────────────

@router.post("/attendance/mark", response_model=MarkAttendanceResponse)
async def mark_attendance(
    body: MarkAttendanceRequest,
    api: HRApiClient = Depends(get_reader),
    writer: HRApiClient = Depends(get_writer),
    settings: Settings = Depends(get_settings),
):
    """Mark an employee present or absent; creates or updates the day's record."""
    data = await load_page_data(api, "attendance")
    view = DirectoryViewModel(
        data.employees,
        AttendanceCache(data.attendance),
        writer,
        page_size=settings.DIRECTORY_PAGE_SIZE,
        enable_actions=True,
        today=selected_date_or_today(body.date, settings.timezone_name),
    )
    outcome = await view.mark_attendance(body.employee_id, body.status)
    return MarkAttendanceResponse(
        ok=outcome.applied,
        row=view.row_for(body.employee_id),
        record=outcome.record,
        feedback=outcome.feedback,
    )


# ── GET /{view} ─────────────────────────────────────────────────────

@router.get("/{view}", response_model=DirectoryPage)
async def directory_page(
    view: DirectoryView,
    q: Optional[str] = Query(None, description="Search name, email, employee code or department"),
    date_: Optional[str] = Query(None, alias="date", description="ISO date (default today)"),
    tab: FilterTab = Query(FilterTab.all),
    page: int = Query(1, ge=1),
    api: HRApiClient = Depends(get_reader),
    settings: Settings = Depends(get_settings),
):
    """Searchable, filterable, paginated availability table."""
    preset = VIEW_PRESETS[view.value]
    data = await load_page_data(api, view.value)

    model = DirectoryViewModel(
        data.employees,
        AttendanceCache(data.attendance),
        page_size=settings.DIRECTORY_PAGE_SIZE,
        show_filters=preset.show_filters,
        enable_actions=preset.enable_actions,
        today=selected_date_or_today(date_, settings.timezone_name),
    )
    model.set_query(q)
    model.set_tab(tab)
    model.go_to_page(page)
    return model.snapshot(preset)

"""Dashboard router — read-only endpoints for the dashboard widgets.

Load failures surface as a ``LoadError`` problem document, which the UI
renders as a full-page error panel.
"""

from fastapi import APIRouter, Depends, Query

from hr_dashboard.common.constants import DEFAULT_TREND_DAYS, MAX_TREND_DAYS
from hr_dashboard.config import Settings
from hr_dashboard.dashboard.schemas import (
    AttendanceTrendResponse,
    DashboardPageResponse,
    DashboardSummaryResponse,
)
from hr_dashboard.dashboard.service import DashboardService
from hr_dashboard.dependencies import get_reader, get_settings
from hr_dashboard.hr_api.client import HRApiClient

router = APIRouter()


# ── GET / ───────────────────────────────────────────────────────────

@router.get("", response_model=DashboardPageResponse)
async def dashboard_page(
    page: int = Query(1, ge=1, description="Listing page (clamped to the last page)"),
    api: HRApiClient = Depends(get_reader),
    settings: Settings = Depends(get_settings),
):
    """Summary cards, seven-day trend chart and the employee listing."""
    return await DashboardService.get_page(
        api,
        page=page,
        page_size=settings.DIRECTORY_PAGE_SIZE,
        trend_days=settings.TREND_DAYS,
        tz=settings.timezone_name,
    )


# ── GET /summary ────────────────────────────────────────────────────

@router.get("/summary", response_model=DashboardSummaryResponse)
async def dashboard_summary(
    api: HRApiClient = Depends(get_reader),
    settings: Settings = Depends(get_settings),
):
    """Present / absent / unknown counts for today."""
    return await DashboardService.get_summary(api, tz=settings.timezone_name)


# ── GET /attendance-trend ───────────────────────────────────────────

@router.get("/attendance-trend", response_model=AttendanceTrendResponse)
async def attendance_trend(
    days: int = Query(
        DEFAULT_TREND_DAYS, ge=1, le=MAX_TREND_DAYS, description="Trend period in days (default 7)",
    ),
    api: HRApiClient = Depends(get_reader),
    settings: Settings = Depends(get_settings),
):
    """Daily availability counts for the last N days, with chart geometry."""
    return await DashboardService.get_attendance_trend(api, days=days, tz=settings.timezone_name)

"""Dashboard service — availability cards, trend window, and listing.

All methods are static, following the project convention. Each async method
performs exactly one page load (employees and attendance fetched together);
everything after that is computed in memory.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from hr_dashboard.attendance.service import (
    AttendanceCache,
    build_status_map,
    build_trend,
    count_availability,
)
from hr_dashboard.common.constants import DEFAULT_PAGE_SIZE, DEFAULT_TREND_DAYS
from hr_dashboard.common.dates import last_n_dates, parse_iso_date, today_iso_date
from hr_dashboard.dashboard.chart import build_status_chart
from hr_dashboard.dashboard.schemas import (
    AttendanceTrendResponse,
    DashboardPageResponse,
    DashboardSummaryResponse,
    SummaryCard,
)
from hr_dashboard.directory.view_model import VIEW_PRESETS, DirectoryViewModel
from hr_dashboard.hr_api.client import HRApiClient
from hr_dashboard.hr_api.loader import load_page_data
from hr_dashboard.hr_api.schemas import Attendance, Employee


def _today(tz: Optional[str] = None) -> str:
    """Current local date as ``YYYY-MM-DD``."""
    return today_iso_date(tz)


class DashboardService:
    """Dashboard aggregation over one page load."""

    # ═════════════════════════════════════════════════════════════════
    # Pure builders
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    def summarize(
        employees: Sequence[Employee],
        attendance: Sequence[Attendance],
        day: str,
    ) -> DashboardSummaryResponse:
        counts = count_availability(employees, build_status_map(attendance, day))
        return DashboardSummaryResponse(
            date=day,
            total_employees=len(employees),
            present=counts.present,
            absent=counts.absent,
            no_info=counts.no_info,
            cards=[
                SummaryCard(key="present", label="People Present", value=counts.present),
                SummaryCard(key="absent", label="People Absent", value=counts.absent),
                SummaryCard(key="no_info", label="Location Unknown", value=counts.no_info),
            ],
        )

    @staticmethod
    def trend(
        employees: Sequence[Employee],
        attendance: Sequence[Attendance],
        days: int,
        day: str,
    ) -> AttendanceTrendResponse:
        end: Optional[date] = parse_iso_date(day)
        dates = last_n_dates(days, today=end)
        points = build_trend(employees, attendance, dates)
        return AttendanceTrendResponse(
            period_days=len(dates),
            start_date=dates[0] if dates else day,
            end_date=dates[-1] if dates else day,
            data=points,
            chart=build_status_chart(points),
        )

    # ═════════════════════════════════════════════════════════════════
    # GET /summary
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def get_summary(api: HRApiClient, *, tz: Optional[str] = None) -> DashboardSummaryResponse:
        data = await load_page_data(api, "dashboard")
        return DashboardService.summarize(data.employees, data.attendance, _today(tz))

    # ═════════════════════════════════════════════════════════════════
    # GET /attendance-trend
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def get_attendance_trend(
        api: HRApiClient,
        *,
        days: int = DEFAULT_TREND_DAYS,
        tz: Optional[str] = None,
    ) -> AttendanceTrendResponse:
        data = await load_page_data(api, "dashboard")
        return DashboardService.trend(data.employees, data.attendance, days, _today(tz))

    # ═════════════════════════════════════════════════════════════════
    # GET /
    # ═════════════════════════════════════════════════════════════════

    @staticmethod
    async def get_page(
        api: HRApiClient,
        *,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        trend_days: int = DEFAULT_TREND_DAYS,
        tz: Optional[str] = None,
    ) -> DashboardPageResponse:
        """Cards for today, the trend window, and an unfiltered listing page."""
        data = await load_page_data(api, "dashboard")
        today = _today(tz)

        view = DirectoryViewModel(
            data.employees,
            AttendanceCache(data.attendance),
            page_size=page_size,
            show_filters=False,
            today=today,
        )
        view.go_to_page(page)

        return DashboardPageResponse(
            summary=DashboardService.summarize(data.employees, data.attendance, today),
            trend=DashboardService.trend(data.employees, data.attendance, trend_days, today),
            listing=view.snapshot(VIEW_PRESETS["dashboard"]),
        )

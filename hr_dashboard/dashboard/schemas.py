"""Dashboard Pydantic v2 schemas — response models for all dashboard endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from hr_dashboard.attendance.schemas import TrendPoint
from hr_dashboard.directory.schemas import DirectoryPage


# ═════════════════════════════════════════════════════════════════════
# GET /summary
# ═════════════════════════════════════════════════════════════════════


class SummaryCard(BaseModel):
    key: str
    label: str
    value: int


class DashboardSummaryResponse(BaseModel):
    """Today's availability cards."""

    date: str
    total_employees: int = Field(..., description="Employees returned by the HR API")
    present: int = Field(..., description="Marked present on the date")
    absent: int = Field(..., description="Marked absent on the date")
    no_info: int = Field(..., description="No attendance record on the date")
    cards: list[SummaryCard] = Field(default_factory=list)


# ═════════════════════════════════════════════════════════════════════
# GET /attendance-trend
# ═════════════════════════════════════════════════════════════════════


class ChartBar(BaseModel):
    series: str
    x: float
    y: float
    width: float
    height: float


class ChartGroup(BaseModel):
    date: str
    label: str
    label_x: float
    bars: list[ChartBar]


class StatusChart(BaseModel):
    """Grouped bar chart geometry (SVG user units)."""

    width: int
    height: int
    max_value: int
    grid_lines: list[float]
    groups: list[ChartGroup]
    legend: dict[str, str]


class AttendanceTrendResponse(BaseModel):
    """Availability counts per day over the trend window."""

    period_days: int
    start_date: str
    end_date: str
    data: list[TrendPoint]
    chart: StatusChart


# ═════════════════════════════════════════════════════════════════════
# GET /
# ═════════════════════════════════════════════════════════════════════


class DashboardPageResponse(BaseModel):
    summary: DashboardSummaryResponse
    trend: AttendanceTrendResponse
    listing: DirectoryPage

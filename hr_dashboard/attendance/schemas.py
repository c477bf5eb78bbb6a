"""Attendance aggregation schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from hr_dashboard.common.constants import Availability


class AvailabilityCounts(BaseModel):
    """Three-bucket tally of availability over a set of employees."""

    present: int = 0
    absent: int = 0
    no_info: int = 0

    @property
    def total(self) -> int:
        return self.present + self.absent + self.no_info

    def add(self, availability: Availability) -> None:
        setattr(self, availability.value, getattr(self, availability.value) + 1)

    def for_tab(self, availability: Availability) -> int:
        return getattr(self, availability.value)


class TrendPoint(BaseModel):
    """Availability counts for one calendar date."""

    date: str = Field(..., description="ISO date (YYYY-MM-DD)")
    present: int = 0
    absent: int = 0
    no_info: int = 0

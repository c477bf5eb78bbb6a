"""Attendance aggregation — per-date status maps, availability counts, and
the page-local attendance cache.

A status map is always scoped to one calendar date. When the HR API returns
more than one record for the same (employee, date), the record with the
latest ``created_at`` wins; ties and unparsable timestamps fall back to the
record seen last.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from hr_dashboard.attendance.schemas import AvailabilityCounts, TrendPoint
from hr_dashboard.common.constants import AttendanceStatus, Availability
from hr_dashboard.common.dates import parse_timestamp
from hr_dashboard.hr_api.client import HRApiClient
from hr_dashboard.hr_api.schemas import Attendance, Employee

logger = logging.getLogger(__name__)

StatusMap = dict[str, Availability]


def _created_key(record: Attendance) -> Optional[float]:
    stamp = parse_timestamp(record.created_at)
    if stamp is None:
        return None
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp.timestamp()


def _supersedes(candidate: Attendance, current: Attendance) -> bool:
    """True when *candidate* (seen later) should replace *current*."""
    new_key, old_key = _created_key(candidate), _created_key(current)
    if new_key is None or old_key is None:
        return True
    return new_key >= old_key


def records_for_date(records: Iterable[Attendance], target_date: str) -> dict[str, Attendance]:
    """Winning attendance record per employee for *target_date*."""
    winners: dict[str, Attendance] = {}
    for record in records:
        if record.attendance_date != target_date:
            continue
        current = winners.get(record.employee_id)
        if current is None or _supersedes(record, current):
            winners[record.employee_id] = record
    return winners


def to_availability(status: AttendanceStatus) -> Availability:
    return Availability.present if status == AttendanceStatus.present else Availability.absent


def build_status_map(records: Iterable[Attendance], target_date: str) -> StatusMap:
    """Map ``employee id → present|absent`` for employees with a record on *target_date*."""
    return {
        employee_id: to_availability(record.status)
        for employee_id, record in records_for_date(records, target_date).items()
    }


def count_availability(employees: Iterable[Employee], status_map: StatusMap) -> AvailabilityCounts:
    """Count every employee exactly once; employees missing from the map are ``no_info``."""
    counts = AvailabilityCounts()
    for employee in employees:
        counts.add(status_map.get(employee.id, Availability.no_info))
    return counts


def build_trend(
    employees: Sequence[Employee],
    records: Sequence[Attendance],
    dates: Sequence[str],
) -> list[TrendPoint]:
    """Availability counts for each date in *dates*, in the given order."""
    points: list[TrendPoint] = []
    for day in dates:
        counts = count_availability(employees, build_status_map(records, day))
        points.append(TrendPoint(date=day, **counts.model_dump()))
    return points


# ── Page-local cache ────────────────────────────────────────────────

class AttendanceCache:
    """
    Attendance records held for one page render.

    Records are fetched once and then patched locally after each successful
    write. A new page request builds a new cache; ``refresh()`` re-reads the
    HR API on demand and ``invalidate()`` drops the local copy.
    """

    def __init__(self, records: Optional[Iterable[Attendance]] = None) -> None:
        self._records: list[Attendance] = list(records or [])
        self._loaded = records is not None
        self.loaded_at: Optional[datetime] = datetime.now(timezone.utc) if self._loaded else None

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def records(self) -> list[Attendance]:
        return list(self._records)

    async def load(self, api: HRApiClient) -> list[Attendance]:
        """Fetch once; later calls return the local copy until invalidated."""
        if not self._loaded:
            await self.refresh(api)
        return self.records

    async def refresh(self, api: HRApiClient) -> list[Attendance]:
        self._records = await api.get_attendance()
        self._loaded = True
        self.loaded_at = datetime.now(timezone.utc)
        logger.debug("Attendance cache refreshed (%d records)", len(self._records))
        return self.records

    def invalidate(self) -> None:
        self._records = []
        self._loaded = False
        self.loaded_at = None

    def upsert(self, record: Attendance) -> None:
        """Replace the record with the same id, or append it."""
        for index, existing in enumerate(self._records):
            if existing.id == record.id:
                self._records[index] = record
                return
        self._records.append(record)

    def for_date(self, target_date: str) -> dict[str, Attendance]:
        return records_for_date(self._records, target_date)

    def status_map(self, target_date: str) -> StatusMap:
        return build_status_map(self._records, target_date)

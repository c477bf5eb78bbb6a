"""Directory view model — the in-memory state behind one employee table.

Holds the employee list, the page-local attendance cache, the search query,
the selected date and status tab, and the current page. Derived state
(status map, joined rows, search and tab filtering, pagination) is recomputed
from those inputs on every access, so it can never drift from them.

Attendance writes go through the HR API; on success only the local cache is
patched. Each row carries a monotonic request token so that a slow response
to an older click cannot overwrite the result of a newer one.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from hr_dashboard.attendance.schemas import AvailabilityCounts
from hr_dashboard.attendance.service import AttendanceCache, StatusMap, count_availability
from hr_dashboard.common.constants import (
    DEFAULT_PAGE_SIZE,
    AttendanceStatus,
    Availability,
    FilterTab,
    normalize_status,
)
from hr_dashboard.common.dates import format_display_date, parse_iso_date, today_iso_date
from hr_dashboard.common.exceptions import (
    MutationError,
    NotFoundException,
    ValidationException,
)
from hr_dashboard.common.filters import apply_search, apply_status_filter
from hr_dashboard.common.pagination import PaginationMeta, clamp_page, page_count, paginate_rows
from hr_dashboard.directory.schemas import DirectoryPage, DirectoryRow, Feedback, TabBadge
from hr_dashboard.hr_api.client import HRApiClient
from hr_dashboard.hr_api.schemas import Attendance, AttendanceCreate, AttendanceUpdate, Employee

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    Availability.present: "Present",
    Availability.absent: "Absent",
    Availability.no_info: "No info",
}

TAB_LABELS = {
    FilterTab.all: "All",
    FilterTab.present: "Present",
    FilterTab.absent: "Absent",
}


@dataclass(frozen=True)
class ViewPreset:
    """Static configuration of a directory page."""

    title: str
    subtitle: str
    show_filters: bool = True
    enable_actions: bool = False


VIEW_PRESETS: dict[str, ViewPreset] = {
    "dashboard": ViewPreset(
        title="Employee Listing",
        subtitle="Showing 10 employees per page",
        show_filters=False,
    ),
    "people": ViewPreset(
        title="People",
        subtitle="Manage and collaborate with your organization's teams",
    ),
    "attendance": ViewPreset(
        title="Attendance",
        subtitle="Track daily employee availability and presence",
        enable_actions=True,
    ),
}


@dataclass(frozen=True)
class EmployeeRow:
    employee: Employee
    availability: Availability


@dataclass
class MarkOutcome:
    """Result of one ``mark_attendance`` call."""

    applied: bool
    record: Optional[Attendance] = None
    feedback: Optional[Feedback] = None
    stale: bool = False


def initials(name: str) -> str:
    return "".join(part[0].upper() for part in name.split()[:2])


def search_fields(row: EmployeeRow) -> tuple[str, ...]:
    employee = row.employee
    return (employee.full_name, employee.email, employee.employee_id, employee.department)


class DirectoryViewModel:
    """Search / filter / paginate / mark-attendance state for one page."""

    def __init__(
        self,
        employees: Iterable[Employee],
        cache: AttendanceCache,
        writer: Optional[HRApiClient] = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        show_filters: bool = True,
        enable_actions: bool = False,
        today: Optional[str] = None,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.employees: list[Employee] = list(employees)
        self.cache = cache
        self.writer = writer
        self.page_size = page_size
        self.show_filters = show_filters
        self.enable_actions = enable_actions

        self.query = ""
        self.selected_date = today or today_iso_date()
        self.selected_tab = FilterTab.all
        self.page = 1

        self.updating_ids: set[str] = set()
        self.feedback: Optional[Feedback] = None
        self._tokens = itertools.count(1)
        self._latest_token: dict[str, int] = {}

    # ── Inputs ────────────────────────────────────────────────────────

    def set_query(self, query: Optional[str]) -> None:
        self.query = query or ""
        self.page = 1

    def set_date(self, value: str) -> None:
        parsed = parse_iso_date(value)
        if parsed is None:
            raise ValidationException({"date": ["Date must be in YYYY-MM-DD format."]})
        self.selected_date = parsed.isoformat()
        self.page = 1

    def set_tab(self, tab: FilterTab | str) -> None:
        try:
            self.selected_tab = FilterTab(tab)
        except ValueError:
            raise ValidationException({"tab": [f"Unknown tab '{tab}'."]}) from None
        self.page = 1

    def go_to_page(self, page: int) -> int:
        self.page = clamp_page(page, len(self.filtered_rows), self.page_size)
        return self.page

    # ── Derivation pipeline ───────────────────────────────────────────

    @property
    def status_map(self) -> StatusMap:
        return self.cache.status_map(self.selected_date)

    @property
    def rows(self) -> list[EmployeeRow]:
        status_map = self.status_map
        return [
            EmployeeRow(employee, status_map.get(employee.id, Availability.no_info))
            for employee in self.employees
        ]

    @property
    def searched_rows(self) -> list[EmployeeRow]:
        return apply_search(self.rows, self.query, search_fields)

    @property
    def filtered_rows(self) -> list[EmployeeRow]:
        searched = self.searched_rows
        if not self.show_filters:
            return searched
        return apply_status_filter(searched, self.selected_tab, lambda row: row.availability)

    @property
    def page_count(self) -> int:
        return page_count(len(self.filtered_rows), self.page_size)

    @property
    def current_page(self) -> int:
        return clamp_page(self.page, len(self.filtered_rows), self.page_size)

    def paged(self) -> tuple[list[EmployeeRow], PaginationMeta]:
        return paginate_rows(self.filtered_rows, self.page, self.page_size)

    @property
    def paged_rows(self) -> list[EmployeeRow]:
        return self.paged()[0]

    @property
    def availability_counts(self) -> AvailabilityCounts:
        return count_availability(self.employees, self.status_map)

    def tab_badges(self) -> list[TabBadge]:
        counts = self.availability_counts
        badges = []
        for tab in FilterTab:
            if tab == FilterTab.all:
                count = len(self.searched_rows)
            else:
                count = counts.for_tab(Availability(tab.value))
            badges.append(
                TabBadge(id=tab, label=TAB_LABELS[tab], count=count, active=tab == self.selected_tab)
            )
        return badges

    # ── Rendering ─────────────────────────────────────────────────────

    def render_row(self, row: EmployeeRow) -> DirectoryRow:
        employee = row.employee
        return DirectoryRow(
            id=employee.id,
            employee_id=employee.employee_id,
            full_name=employee.full_name,
            email=employee.email,
            department=employee.department,
            initials=initials(employee.full_name),
            joined=format_display_date(employee.created_at),
            availability=row.availability,
            status_label=STATUS_LABELS[row.availability],
            is_updating=employee.id in self.updating_ids,
        )

    def row_for(self, employee_id: str) -> Optional[DirectoryRow]:
        for row in self.rows:
            if row.employee.id == employee_id:
                return self.render_row(row)
        return None

    def snapshot(self, preset: ViewPreset) -> DirectoryPage:
        rows, meta = self.paged()
        return DirectoryPage(
            title=preset.title,
            subtitle=preset.subtitle,
            query=self.query,
            date=self.selected_date,
            tab=self.selected_tab,
            show_filters=self.show_filters,
            enable_actions=self.enable_actions,
            tabs=self.tab_badges() if self.show_filters else [],
            counts=self.availability_counts,
            rows=[self.render_row(row) for row in rows],
            meta=meta,
            empty_message=None if rows else "No employees found for this filter.",
            feedback=self.feedback,
        )

    # ── Attendance mutation ───────────────────────────────────────────

    def _is_latest(self, employee_id: str, token: int) -> bool:
        return self._latest_token.get(employee_id) == token

    async def mark_attendance(self, employee_id: str, status: AttendanceStatus | str) -> MarkOutcome:
        """
        Record *status* for *employee_id* on the selected date.

        Updates the existing record for that (employee, date) when there is
        one, otherwise creates a new record. Failures become error feedback
        and leave the cache untouched.
        """
        if self.writer is None:
            raise RuntimeError("DirectoryViewModel has no writer configured")
        if not any(employee.id == employee_id for employee in self.employees):
            raise NotFoundException("Employee", employee_id)
        new_status = normalize_status(status)
        if new_status is None:
            raise ValidationException({"status": [f"Unknown status '{status}'."]})

        token = next(self._tokens)
        self._latest_token[employee_id] = token
        self.updating_ids.add(employee_id)
        self.feedback = None

        target_date = self.selected_date
        existing = self.cache.for_date(target_date).get(employee_id)

        try:
            if existing is not None:
                data = await self.writer.update_attendance(
                    existing.id, AttendanceUpdate(status=new_status),
                )
            else:
                data = await self.writer.create_attendance(
                    AttendanceCreate(
                        employee_id=employee_id,
                        attendance_date=target_date,
                        status=new_status,
                    )
                )
        except MutationError as exc:
            if not self._is_latest(employee_id, token):
                return MarkOutcome(applied=False, stale=True)
            logger.warning("Attendance update for %s failed: %s", employee_id, exc.detail)
            self.feedback = Feedback.error(exc.detail)
            return MarkOutcome(applied=False, feedback=self.feedback)
        finally:
            if self._is_latest(employee_id, token):
                self.updating_ids.discard(employee_id)

        if not self._is_latest(employee_id, token):
            logger.info("Discarding stale attendance response for %s", employee_id)
            return MarkOutcome(applied=False, stale=True)

        saved = _saved_record(data, existing, employee_id, target_date, new_status)
        self.cache.upsert(saved)
        return MarkOutcome(applied=True, record=saved)


def _saved_record(
    data: dict[str, Any],
    existing: Optional[Attendance],
    employee_id: str,
    target_date: str,
    status: AttendanceStatus,
) -> Attendance:
    """Merge the HR API's response with what was sent, preferring the response."""
    fallback_id = existing.id if existing else f"{employee_id}-{target_date}"
    fallback_created = (
        existing.created_at if existing else datetime.now(timezone.utc).isoformat()
    )
    return Attendance(
        id=str(data.get("id") or fallback_id),
        employee_id=str(data.get("employee_id") or employee_id),
        attendance_date=str(data.get("attendance_date") or target_date),
        status=normalize_status(data.get("status")) or status,
        created_at=str(data.get("created_at") or fallback_created),
    )


def selected_date_or_today(value: Optional[str], tz: Optional[str] = None) -> str:
    """Validate an optional ``YYYY-MM-DD`` query value, defaulting to today."""
    if not value:
        return today_iso_date(tz)
    parsed = parse_iso_date(value)
    if parsed is None:
        raise ValidationException({"date": ["Date must be in YYYY-MM-DD format."]})
    return parsed.isoformat()

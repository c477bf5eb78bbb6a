"""Employee roster — search, create, edit and delete over the employee list.

Writes go to the HR API; the local list is patched only after the API
accepts the change. Every action ends with success or error feedback and
failures never propagate past the roster.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from hr_dashboard.common.dates import format_display_date
from hr_dashboard.common.exceptions import MutationError, NotFoundException
from hr_dashboard.common.filters import apply_search
from hr_dashboard.directory.schemas import Feedback
from hr_dashboard.employees.schemas import RosterPage, RosterRow
from hr_dashboard.hr_api.client import HRApiClient
from hr_dashboard.hr_api.schemas import Employee, EmployeeForm

logger = logging.getLogger(__name__)

INCOMPLETE_FORM_MESSAGE = "Please fill employee ID, name, email, and department."


def roster_search_fields(employee: Employee) -> tuple[Optional[str], ...]:
    return (
        employee.employee_id,
        employee.full_name,
        employee.email,
        employee.department,
        employee.employment_type,
        employee.employ_type,
        employee.role,
        employee.phone,
    )


class EmployeeRoster:
    """State of the all-employees table for one page."""

    def __init__(self, employees: Iterable[Employee], writer: Optional[HRApiClient] = None) -> None:
        self.rows: list[Employee] = list(employees)
        self.writer = writer
        self.query = ""
        self.feedback: Optional[Feedback] = None
        self.saving_id: Optional[str] = None
        self.deleting_id: Optional[str] = None
        self.is_creating = False

    # ── Search ────────────────────────────────────────────────────────

    def search(self, query: Optional[str]) -> list[Employee]:
        self.query = query or ""
        return self.filtered_rows

    @property
    def filtered_rows(self) -> list[Employee]:
        return apply_search(self.rows, self.query, roster_search_fields)

    @property
    def row_count_label(self) -> str:
        total = len(self.rows)
        if not self.query.strip():
            return f"{total} employee{'' if total == 1 else 's'}"
        return f"{len(self.filtered_rows)} of {total} employees"

    def snapshot(self) -> RosterPage:
        rows = self.filtered_rows
        return RosterPage(
            query=self.query,
            row_count_label=self.row_count_label,
            rows=[
                RosterRow(
                    id=employee.id,
                    employee_id=employee.employee_id,
                    full_name=employee.full_name,
                    email=employee.email,
                    department=employee.department,
                    joined=format_display_date(employee.created_at),
                    is_saving=self.saving_id == employee.id,
                    is_deleting=self.deleting_id == employee.id,
                )
                for employee in rows
            ],
            empty_message=None if rows else "No employees found.",
            feedback=self.feedback,
        )

    # ── Mutations ─────────────────────────────────────────────────────

    def _find(self, employee_id: str) -> Employee:
        for employee in self.rows:
            if employee.id == employee_id:
                return employee
        raise NotFoundException("Employee", employee_id)

    def _require_writer(self) -> HRApiClient:
        if self.writer is None:
            raise RuntimeError("EmployeeRoster has no writer configured")
        return self.writer

    async def create(self, form: EmployeeForm) -> Optional[Employee]:
        """Add an employee; incomplete forms are rejected without calling the API."""
        if not form.is_complete():
            self.feedback = Feedback.error(INCOMPLETE_FORM_MESSAGE)
            return None

        writer = self._require_writer()
        self.is_creating = True
        self.feedback = None
        try:
            payload = await writer.create_employee(form)
        except MutationError as exc:
            logger.warning("Employee create failed: %s", exc.detail)
            self.feedback = Feedback.error(exc.detail)
            return None
        finally:
            self.is_creating = False

        created = Employee(
            id=str(payload.get("id") or uuid.uuid4()),
            employee_id=str(payload.get("employee_id") or form.employee_id),
            full_name=str(payload.get("full_name") or form.full_name),
            email=str(payload.get("email") or form.email),
            department=str(payload.get("department") or form.department),
            created_at=str(payload.get("created_at") or datetime.now(timezone.utc).isoformat()),
        )
        self.rows.insert(0, created)
        self.feedback = Feedback.success("Employee added successfully.")
        return created

    async def save_edit(self, employee_id: str, form: EmployeeForm) -> Optional[Employee]:
        current = self._find(employee_id)
        writer = self._require_writer()
        self.saving_id = employee_id
        self.feedback = None
        try:
            payload = await writer.update_employee(employee_id, form)
        except MutationError as exc:
            logger.warning("Employee %s update failed: %s", employee_id, exc.detail)
            self.feedback = Feedback.error(exc.detail)
            return None
        finally:
            self.saving_id = None

        updated = current.model_copy(update=_merged_fields(payload, form))
        self.rows = [updated if employee.id == employee_id else employee for employee in self.rows]
        self.feedback = Feedback.success("Employee updated successfully.")
        return updated

    async def delete(self, employee_id: str) -> bool:
        self._find(employee_id)
        writer = self._require_writer()
        self.deleting_id = employee_id
        self.feedback = None
        try:
            await writer.delete_employee(employee_id)
        except MutationError as exc:
            logger.warning("Employee %s delete failed: %s", employee_id, exc.detail)
            self.feedback = Feedback.error(exc.detail)
            return False
        finally:
            self.deleting_id = None

        self.rows = [employee for employee in self.rows if employee.id != employee_id]
        self.feedback = Feedback.success("Employee deleted successfully.")
        return True


def _merged_fields(payload: dict[str, Any], form: EmployeeForm) -> dict[str, str]:
    return {
        field: str(payload.get(field) or getattr(form, field))
        for field in ("employee_id", "full_name", "email", "department")
    }

"""HR API Pydantic v2 schemas — the backend's employee and attendance shapes.

Naming conventions:
  - *Create / *Update → request bodies sent to the HR API
  - plain names       → records read back from the HR API
  - *Query            → read filters translated to query parameters
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hr_dashboard.common.constants import AttendanceStatus, normalize_status


# ═════════════════════════════════════════════════════════════════════
# Employee
# ═════════════════════════════════════════════════════════════════════


class Employee(BaseModel):
    """Employee as returned by ``GET /employees``."""

    model_config = ConfigDict(extra="ignore")

    id: str
    employee_id: str = Field("", description="Human-readable employee code")
    full_name: str = ""
    email: str = ""
    department: str = ""
    created_at: str = ""
    employment_type: Optional[str] = None
    employ_type: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("id", "employee_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value):
        # Some deployments emit integer primary keys
        return "" if value is None else str(value)

    @field_validator("full_name", "email", "department", "created_at", mode="before")
    @classmethod
    def _blank_if_null(cls, value):
        return "" if value is None else value


class EmployeeForm(BaseModel):
    """Editable employee fields shared by create and update."""

    employee_id: str = ""
    full_name: str = ""
    email: str = ""
    department: str = ""

    def is_complete(self) -> bool:
        return all(
            value.strip()
            for value in (self.employee_id, self.full_name, self.email, self.department)
        )


# ═════════════════════════════════════════════════════════════════════
# Attendance
# ═════════════════════════════════════════════════════════════════════


class Attendance(BaseModel):
    """Attendance record as returned by ``GET /attendance``."""

    model_config = ConfigDict(extra="ignore")

    id: str
    employee_id: str
    attendance_date: str = ""
    status: AttendanceStatus = AttendanceStatus.absent
    created_at: str = ""

    @field_validator("id", "employee_id", mode="before")
    @classmethod
    def _coerce_identifier(cls, value):
        return "" if value is None else str(value)

    @field_validator("attendance_date", "created_at", mode="before")
    @classmethod
    def _blank_if_null(cls, value):
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value):
        # statuses outside the known aliases count as absent
        return normalize_status(value) or AttendanceStatus.absent


class AttendanceCreate(BaseModel):
    employee_id: str
    attendance_date: str
    status: AttendanceStatus


class AttendanceUpdate(BaseModel):
    status: AttendanceStatus


class AttendanceQuery(BaseModel):
    """Optional read filters for ``GET /attendance``."""

    employee_id: Optional[str] = None
    attendance_date: Optional[str] = None
    status: Optional[AttendanceStatus] = None

    def to_params(self) -> dict[str, str]:
        """Only non-empty filters become query parameters."""
        params: dict[str, str] = {}
        if self.employee_id:
            params["employee_id"] = self.employee_id
        if self.attendance_date:
            params["attendance_date"] = self.attendance_date
        if self.status:
            params["status"] = self.status.value
        return params

"""All-employees router — roster table with create, edit and delete.

Actions answer with the affected employee and success/error feedback; a
rejected write is reported in the feedback rather than as an HTTP error.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from hr_dashboard.dependencies import get_reader, get_writer
from hr_dashboard.employees.roster import EmployeeRoster
from hr_dashboard.employees.schemas import RosterActionResponse, RosterPage
from hr_dashboard.hr_api.client import HRApiClient
from hr_dashboard.hr_api.loader import load_page_data
from hr_dashboard.hr_api.schemas import EmployeeForm

router = APIRouter()


async def _load_roster(api: HRApiClient, writer: Optional[HRApiClient] = None) -> EmployeeRoster:
    data = await load_page_data(api, "employee", with_attendance=False)
    return EmployeeRoster(data.employees, writer)


# ── GET / ───────────────────────────────────────────────────────────

@router.get("", response_model=RosterPage)
async def roster_page(
    q: Optional[str] = Query(None, description="Search by ID, name, email, department..."),
    api: HRApiClient = Depends(get_reader),
):
    roster = await _load_roster(api)
    roster.search(q)
    return roster.snapshot()


# ── POST / ──────────────────────────────────────────────────────────

@router.post("", response_model=RosterActionResponse)
async def create_employee(
    form: EmployeeForm,
    api: HRApiClient = Depends(get_reader),
    writer: HRApiClient = Depends(get_writer),
):
    roster = await _load_roster(api, writer)
    created = await roster.create(form)
    return RosterActionResponse(ok=created is not None, employee=created, feedback=roster.feedback)


# ── PUT /{employee_id} ──────────────────────────────────────────────

@router.put("/{employee_id}", response_model=RosterActionResponse)
async def update_employee(
    employee_id: str,
    form: EmployeeForm,
    api: HRApiClient = Depends(get_reader),
    writer: HRApiClient = Depends(get_writer),
):
    roster = await _load_roster(api, writer)
    updated = await roster.save_edit(employee_id, form)
    return RosterActionResponse(ok=updated is not None, employee=updated, feedback=roster.feedback)


# ── DELETE /{employee_id} ───────────────────────────────────────────

@router.delete("/{employee_id}", response_model=RosterActionResponse)
async def delete_employee(
    employee_id: str,
    api: HRApiClient = Depends(get_reader),
    writer: HRApiClient = Depends(get_writer),
):
    roster = await _load_roster(api, writer)
    deleted = await roster.delete(employee_id)
    return RosterActionResponse(ok=deleted, feedback=roster.feedback)

"""Employee roster Pydantic v2 schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from hr_dashboard.directory.schemas import Feedback
from hr_dashboard.hr_api.schemas import Employee


class RosterRow(BaseModel):
    """One employee row of the all-employees table."""

    id: str
    employee_id: str
    full_name: str
    email: str
    department: str
    joined: str
    is_saving: bool = False
    is_deleting: bool = False


class RosterPage(BaseModel):
    query: str
    row_count_label: str
    rows: list[RosterRow]
    empty_message: Optional[str] = None
    feedback: Optional[Feedback] = None


class RosterActionResponse(BaseModel):
    ok: bool
    employee: Optional[Employee] = None
    feedback: Feedback

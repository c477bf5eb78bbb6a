"""Page-load fetching: employees and attendance together, all or nothing."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from hr_dashboard.common.exceptions import LoadError
from hr_dashboard.hr_api.client import HRApiClient, HRApiError
from hr_dashboard.hr_api.schemas import Attendance, Employee

logger = logging.getLogger(__name__)


@dataclass
class PageData:
    employees: list[Employee] = field(default_factory=list)
    attendance: list[Attendance] = field(default_factory=list)


async def load_page_data(api: HRApiClient, page: str, *, with_attendance: bool = True) -> PageData:
    """
    Fetch employees (and attendance) concurrently for one page render.

    If either request fails the whole load fails with ``LoadError``;
    a page is never rendered from half of its data.
    """
    try:
        if with_attendance:
            employees, attendance = await asyncio.gather(
                api.get_employees(), api.get_attendance(),
            )
        else:
            employees, attendance = await api.get_employees(), []
    except HRApiError as exc:
        logger.error("Loading %s page failed: %s", page, exc)
        raise LoadError(page, str(exc)) from exc

    return PageData(employees=employees, attendance=attendance)

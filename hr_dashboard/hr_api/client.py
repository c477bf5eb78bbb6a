"""HR API client — reads and writes against the external HR backend.

The client never caches: every read asks the backend again, so pages always
reflect the current system of record. Nothing is retried; callers decide how a
failure is presented (page-level error panel for reads, inline feedback for
writes).
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from hr_dashboard.common.exceptions import MutationError
from hr_dashboard.hr_api.schemas import (
    Attendance,
    AttendanceCreate,
    AttendanceQuery,
    AttendanceUpdate,
    Employee,
    EmployeeForm,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class HRApiError(Exception):
    """A read against the HR API failed (bad status, unreachable, or unreadable body)."""

    def __init__(
        self,
        path: str,
        status_code: Optional[int] = None,
        reason: str = "",
        *,
        malformed: bool = False,
    ) -> None:
        self.path = path
        self.status_code = status_code
        self.malformed = malformed
        if status_code is not None:
            message = f"Request to {path} failed with status {status_code}"
        elif malformed:
            message = f"Unexpected response from {path}: {reason}"
        else:
            message = f"Unable to reach HR API for {path}"
            if reason:
                message = f"{message}: {reason}"
        super().__init__(message)


def normalize_api_error(payload: Any, fallback: str) -> str:
    """
    Flatten the backend's ``{"detail": ...}`` error body into one message.

    * ``detail`` string → returned as-is
    * ``detail`` list of strings / ``{"msg": ...}`` items → comma-joined
    * anything else → *fallback*
    """
    if not isinstance(payload, dict):
        return fallback
    detail = payload.get("detail")
    if isinstance(detail, str):
        return detail
    if isinstance(detail, list):
        parts: list[str] = []
        for item in detail:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, dict) and isinstance(item.get("msg"), str):
                parts.append(item["msg"])
        text = ", ".join(part for part in parts if part)
        if text:
            return text
    return fallback


def _json_or_empty(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {}


class HRApiClient:
    """Async client bound to one HR API base URL.

    Usage::

        async with HRApiClient(settings.reader_base_url, timeout=15) as api:
            employees = await api.get_employees()
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "HRApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Reads ─────────────────────────────────────────────────────────

    async def _get(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        url = f"{self.base_url}{path}"
        started = time.monotonic()
        logger.info("-> GET %s", url)

        try:
            response = await self._client.get(
                path, params=params or None, headers={"Cache-Control": "no-cache"},
            )
        except httpx.HTTPError as exc:
            elapsed = (time.monotonic() - started) * 1000
            logger.error("xx %s (%dms) %s", url, elapsed, exc)
            raise HRApiError(path, reason=str(exc) or type(exc).__name__) from exc

        elapsed = (time.monotonic() - started) * 1000
        if response.is_error:
            logger.error("!! %d %s (%dms)", response.status_code, url, elapsed)
            raise HRApiError(path, response.status_code)

        logger.info("<- %d %s (%dms)", response.status_code, url, elapsed)
        try:
            return response.json()
        except ValueError as exc:
            raise HRApiError(path, reason="response was not JSON", malformed=True) from exc

    @staticmethod
    def _parse_list(path: str, data: Any, model: type[RecordT]) -> list[RecordT]:
        """Validate a collection body; shape problems become ``HRApiError``."""
        if data is None:
            return []
        if not isinstance(data, list):
            logger.error("!! %s returned %s, expected a list", path, type(data).__name__)
            raise HRApiError(path, reason="response was not a list", malformed=True)
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as exc:
            logger.error("!! %s returned an unreadable record: %s", path, exc)
            raise HRApiError(
                path, reason=f"unreadable record ({exc.error_count()} errors)", malformed=True,
            ) from exc

    async def get_employees(self) -> list[Employee]:
        data = await self._get("/employees")
        return self._parse_list("/employees", data, Employee)

    async def get_attendance(self, filters: Optional[AttendanceQuery] = None) -> list[Attendance]:
        params = filters.to_params() if filters else None
        data = await self._get("/attendance", params)
        return self._parse_list("/attendance", data, Attendance)

    # ── Writes ────────────────────────────────────────────────────────

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        fallback: str,
    ) -> dict[str, Any]:
        """Issue a write and return the decoded body, or raise ``MutationError``."""
        logger.info("-> %s %s%s", method, self.base_url, path)
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.error("xx %s %s%s %s", method, self.base_url, path, exc)
            raise MutationError(fallback) from exc

        payload = _json_or_empty(response)
        if response.is_error:
            logger.warning("!! %d %s %s", response.status_code, method, path)
            raise MutationError(
                normalize_api_error(payload, fallback),
                status_code=response.status_code,
            )

        logger.info("<- %d %s %s", response.status_code, method, path)
        return payload if isinstance(payload, dict) else {}

    async def create_employee(self, form: EmployeeForm) -> dict[str, Any]:
        return await self._send(
            "POST", "/employees", json=form.model_dump(), fallback="Failed to add employee.",
        )

    async def update_employee(self, employee_id: str, form: EmployeeForm) -> dict[str, Any]:
        return await self._send(
            "PUT",
            f"/employees/{employee_id}",
            json=form.model_dump(),
            fallback="Failed to update employee.",
        )

    async def delete_employee(self, employee_id: str) -> dict[str, Any]:
        return await self._send(
            "DELETE", f"/employees/{employee_id}", fallback="Failed to delete employee.",
        )

    async def create_attendance(self, body: AttendanceCreate) -> dict[str, Any]:
        return await self._send(
            "POST",
            "/attendance",
            json=body.model_dump(mode="json"),
            fallback="Failed to update attendance.",
        )

    async def update_attendance(self, record_id: str, body: AttendanceUpdate) -> dict[str, Any]:
        return await self._send(
            "PUT",
            f"/attendance/{record_id}",
            json=body.model_dump(mode="json"),
            fallback="Failed to update attendance.",
        )

"""Shared test fixtures — fake HR API, app, clients, factories.

Reusable across all test modules (attendance, directory, dashboard, proxy…).
The external HR API is replaced by an in-memory backend served through
``httpx.MockTransport``, injected into the app and clients at construction.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from hr_dashboard.config import Settings
from hr_dashboard.hr_api.client import HRApiClient
from hr_dashboard.hr_api.schemas import Attendance, Employee
from hr_dashboard.main import create_app

TEST_API_BASE = "http://hr.test"


# ── Fake HR API ─────────────────────────────────────────────────────

class FakeHRBackend:
    """In-memory stand-in for the HR API's REST endpoints."""

    def __init__(self) -> None:
        self.employees: list[dict] = []
        self.attendance: list[dict] = []
        self.calls: list[tuple[str, str]] = []
        self.bodies: list[object] = []
        self.fail: dict[tuple[str, str], tuple[int, object]] = {}
        self.unreachable = False

    # helpers
    def add_employee(self, **kwargs) -> dict:
        data = _make_employee(**kwargs)
        self.employees.append(data)
        return data

    def add_attendance(self, **kwargs) -> dict:
        data = _make_attendance(**kwargs)
        self.attendance.append(data)
        return data

    def fail_with(self, method: str, path: str, status: int, body: object = None) -> None:
        self.fail[(method, path)] = (status, body if body is not None else {"detail": "Backend error"})

    def writes(self) -> list[tuple[str, str]]:
        return [call for call in self.calls if call[0] != "GET"]

    # transport handler
    def handle(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        self.calls.append((method, path))

        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)

        if (method, path) in self.fail:
            status, body = self.fail[(method, path)]
            return httpx.Response(status, json=body)

        body = json.loads(request.content) if request.content else None
        if body is not None:
            self.bodies.append(body)

        parts = [p for p in path.split("/") if p]
        if parts[:1] == ["employees"]:
            return self._employees(method, parts[1:], body)
        if parts[:1] == ["attendance"]:
            return self._attendance(method, parts[1:], body, request.url.params)
        return httpx.Response(404, json={"detail": "Not Found"})

    def _employees(self, method: str, rest: list[str], body) -> httpx.Response:
        if not rest and method == "GET":
            return httpx.Response(200, json=self.employees)
        if not rest and method == "POST":
            created = {
                **body,
                "id": str(uuid.uuid4()),
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
            self.employees.append(created)
            return httpx.Response(201, json=created)

        target = next((e for e in self.employees if e["id"] == rest[0]), None)
        if target is None:
            return httpx.Response(404, json={"detail": "Employee not found"})
        if method == "PUT":
            target.update(body)
            return httpx.Response(200, json=target)
        if method == "DELETE":
            self.employees.remove(target)
            return httpx.Response(200, json={"detail": "Employee deleted"})
        return httpx.Response(405, json={"detail": "Method Not Allowed"})

    def _attendance(self, method: str, rest: list[str], body, params) -> httpx.Response:
        if not rest and method == "GET":
            rows = [
                row for row in self.attendance
                if all(str(row.get(key)) == value for key, value in params.items())
            ]
            return httpx.Response(200, json=rows)
        if not rest and method == "POST":
            created = {
                **body,
                "id": str(uuid.uuid4()),
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
            self.attendance.append(created)
            return httpx.Response(201, json=created)

        target = next((a for a in self.attendance if a["id"] == rest[0]), None)
        if target is None:
            return httpx.Response(404, json={"detail": "Attendance record not found"})
        if method == "PUT":
            target.update(body)
            return httpx.Response(200, json=target)
        return httpx.Response(405, json={"detail": "Method Not Allowed"})


# ── Factories ───────────────────────────────────────────────────────

def _make_employee(
    *,
    id: Optional[str] = None,
    employee_id: Optional[str] = None,
    full_name: str = "Test User",
    email: Optional[str] = None,
    department: str = "Engineering",
    created_at: str = "2024-01-15T09:30:00",
    **extra,
) -> dict:
    ident = id or str(uuid.uuid4())
    return dict(
        id=ident,
        employee_id=employee_id or f"EMP-{ident[:6].upper()}",
        full_name=full_name,
        email=email or f"{full_name.lower().replace(' ', '.')}@example.com",
        department=department,
        created_at=created_at,
        **extra,
    )


def _make_attendance(
    *,
    employee_id: str,
    attendance_date: str,
    status: object = "present",
    id: Optional[str] = None,
    created_at: str = "2024-05-01T08:00:00+00:00",
) -> dict:
    return dict(
        id=id or str(uuid.uuid4()),
        employee_id=employee_id,
        attendance_date=attendance_date,
        status=status,
        created_at=created_at,
    )


def employee(**kwargs) -> Employee:
    return Employee.model_validate(_make_employee(**kwargs))


def attendance(**kwargs) -> Attendance:
    return Attendance.model_validate(_make_attendance(**kwargs))


# ── Fixtures ────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    """Reset rate limiter storage between tests to prevent cross-test interference."""
    from hr_dashboard.common.rate_limit import limiter

    limiter.reset()
    yield


@pytest.fixture
def backend() -> FakeHRBackend:
    return FakeHRBackend()


@pytest.fixture
def transport(backend) -> httpx.MockTransport:
    return httpx.MockTransport(backend.handle)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(API_BASE=TEST_API_BASE, LOG_LEVEL="warning")


@pytest.fixture
async def app(test_settings, transport):
    """Create a fresh app instance wired to the fake HR API."""
    yield create_app(test_settings, upstream_transport=transport)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client wired to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
async def api(transport) -> AsyncGenerator[HRApiClient, None]:
    """HR API client talking to the fake backend."""
    async with HRApiClient(TEST_API_BASE, timeout=5, transport=transport) as client:
        yield client

"""HR API client test suite — reads, query filters, error shapes, writes,
and the all-or-nothing page loader.
"""

from __future__ import annotations

import httpx
import pytest

from hr_dashboard.common.constants import AttendanceStatus
from hr_dashboard.common.exceptions import LoadError, MutationError
from hr_dashboard.hr_api.client import HRApiClient, HRApiError, normalize_api_error
from hr_dashboard.hr_api.loader import load_page_data
from hr_dashboard.hr_api.schemas import (
    AttendanceCreate,
    AttendanceQuery,
    AttendanceUpdate,
    EmployeeForm,
)
from tests.conftest import TEST_API_BASE


# ═════════════════════════════════════════════════════════════════════
# 1. READS
# ═════════════════════════════════════════════════════════════════════


async def test_get_employees_parses_records(api, backend):
    backend.add_employee(id="1", full_name="Ann", department="Eng", role="Designer")

    employees = await api.get_employees()

    assert len(employees) == 1
    assert employees[0].full_name == "Ann"
    assert employees[0].role == "Designer"


async def test_get_employees_coerces_integer_ids(api, backend):
    backend.employees.append({"id": 7, "employee_id": 1007, "full_name": "Int Id"})

    employees = await api.get_employees()

    assert employees[0].id == "7"
    assert employees[0].employee_id == "1007"


async def test_get_attendance_without_filters_sends_no_query(api, backend):
    captured = []
    original = backend.handle

    def spy(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return original(request)

    async with HRApiClient(TEST_API_BASE, transport=httpx.MockTransport(spy)) as client:
        await client.get_attendance()

    assert captured[0].url.query == b""
    assert captured[0].headers["cache-control"] == "no-cache"


async def test_get_attendance_filters_only_non_empty(api, backend):
    backend.add_attendance(employee_id="1", attendance_date="2024-05-01", status="present")
    backend.add_attendance(employee_id="1", attendance_date="2024-05-02", status="absent")
    backend.add_attendance(employee_id="2", attendance_date="2024-05-01", status="absent")

    rows = await api.get_attendance(
        AttendanceQuery(employee_id="1", attendance_date="", status=AttendanceStatus.absent)
    )

    assert [(r.employee_id, r.attendance_date) for r in rows] == [("1", "2024-05-02")]


def test_attendance_query_params():
    query = AttendanceQuery(attendance_date="2024-05-01", status=AttendanceStatus.present)
    assert query.to_params() == {"attendance_date": "2024-05-01", "status": "present"}
    assert AttendanceQuery().to_params() == {}


async def test_every_read_hits_the_backend(api, backend):
    await api.get_employees()
    await api.get_employees()
    assert backend.calls.count(("GET", "/employees")) == 2


# ═════════════════════════════════════════════════════════════════════
# 2. READ ERRORS
# ═════════════════════════════════════════════════════════════════════


async def test_bad_status_carries_path_and_code(api, backend):
    backend.fail_with("GET", "/employees", 503)

    with pytest.raises(HRApiError) as exc_info:
        await api.get_employees()

    assert exc_info.value.path == "/employees"
    assert exc_info.value.status_code == 503
    assert str(exc_info.value) == "Request to /employees failed with status 503"


async def test_network_failure_is_generic(api, backend):
    backend.unreachable = True

    with pytest.raises(HRApiError) as exc_info:
        await api.get_attendance()

    assert exc_info.value.status_code is None
    assert "Unable to reach HR API" in str(exc_info.value)


async def test_reads_are_not_retried(api, backend):
    backend.fail_with("GET", "/employees", 500)
    with pytest.raises(HRApiError):
        await api.get_employees()
    assert backend.calls == [("GET", "/employees")]


# ═════════════════════════════════════════════════════════════════════
# 3. ERROR BODY NORMALISATION
# ═════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"detail": "Employee ID already exists"}, "Employee ID already exists"),
        ({"detail": [{"msg": "field required"}, {"msg": "invalid email"}]}, "field required, invalid email"),
        ({"detail": ["first", {"msg": "second"}, {"loc": ["x"]}, ""]}, "first, second"),
        ({"detail": []}, "fallback"),
        ({"detail": 42}, "fallback"),
        ({"message": "nope"}, "fallback"),
        ("plain text", "fallback"),
        (None, "fallback"),
    ],
)
def test_normalize_api_error(payload, expected):
    assert normalize_api_error(payload, "fallback") == expected


# ═════════════════════════════════════════════════════════════════════
# 4. WRITES
# ═════════════════════════════════════════════════════════════════════


async def test_create_attendance_returns_backend_record(api, backend):
    saved = await api.create_attendance(
        AttendanceCreate(employee_id="1", attendance_date="2024-05-01", status=AttendanceStatus.present)
    )

    assert saved["employee_id"] == "1"
    assert backend.bodies[-1] == {
        "employee_id": "1",
        "attendance_date": "2024-05-01",
        "status": "present",
    }


async def test_update_attendance_targets_record(api, backend):
    record = backend.add_attendance(id="rec-1", employee_id="1", attendance_date="2024-05-01")

    await api.update_attendance(record["id"], AttendanceUpdate(status=AttendanceStatus.absent))

    assert ("PUT", "/attendance/rec-1") in backend.calls
    assert backend.attendance[0]["status"] == "absent"


async def test_write_failure_uses_backend_detail(api, backend):
    backend.fail_with(
        "POST", "/employees", 422, {"detail": [{"msg": "value is not a valid email address"}]},
    )

    with pytest.raises(MutationError) as exc_info:
        await api.create_employee(
            EmployeeForm(employee_id="E1", full_name="A", email="bad", department="Ops")
        )

    assert exc_info.value.detail == "value is not a valid email address"
    assert exc_info.value.upstream_status == 422


async def test_write_failure_without_detail_uses_fallback(api, backend):
    backend.fail_with("DELETE", "/employees/x", 500, {"error": "boom"})

    with pytest.raises(MutationError) as exc_info:
        await api.delete_employee("x")

    assert exc_info.value.detail == "Failed to delete employee."


async def test_write_network_failure(api, backend):
    backend.unreachable = True

    with pytest.raises(MutationError) as exc_info:
        await api.update_employee("x", EmployeeForm())

    assert exc_info.value.detail == "Failed to update employee."
    assert exc_info.value.status_code == 502


# ═════════════════════════════════════════════════════════════════════
# 5. PAGE LOADER
# ═════════════════════════════════════════════════════════════════════


async def test_load_page_data_fetches_both(api, backend):
    backend.add_employee(id="1")
    backend.add_attendance(employee_id="1", attendance_date="2024-05-01")

    data = await load_page_data(api, "attendance")

    assert len(data.employees) == 1
    assert len(data.attendance) == 1


async def test_load_page_data_fails_when_either_request_fails(api, backend):
    backend.add_employee(id="1")
    backend.fail_with("GET", "/attendance", 500)

    with pytest.raises(LoadError) as exc_info:
        await load_page_data(api, "attendance")

    assert exc_info.value.title == "Unable to load attendance data"
    assert "/attendance" in exc_info.value.detail


async def test_load_page_data_can_skip_attendance(api, backend):
    backend.fail_with("GET", "/attendance", 500)

    data = await load_page_data(api, "employee", with_attendance=False)

    assert data.attendance == []
    assert ("GET", "/attendance") not in backend.calls


# ═════════════════════════════════════════════════════════════════════
# 6. LOOSELY-SHAPED RECORDS
# ═════════════════════════════════════════════════════════════════════


async def test_null_employee_fields_read_as_blank(api, backend):
    record = backend.add_employee(id="1", full_name="Ann")
    record.update(department=None, email=None, created_at=None)

    employees = await api.get_employees()

    assert employees[0].department == ""
    assert employees[0].email == ""
    assert employees[0].created_at == ""


@pytest.mark.parametrize("raw", ["late", "half-day", "", None, 3])
async def test_unrecognised_status_reads_as_absent(api, backend, raw):
    backend.add_attendance(employee_id="1", attendance_date="2024-05-01", status=raw)

    records = await api.get_attendance()

    assert records[0].status == AttendanceStatus.absent


async def test_null_attendance_timestamp_reads_as_blank(api, backend):
    record = backend.add_attendance(employee_id="1", attendance_date="2024-05-01")
    record["created_at"] = None

    records = await api.get_attendance()

    assert records[0].created_at == ""


async def test_object_body_instead_of_list(api, backend):
    backend.employees = {"items": []}

    with pytest.raises(HRApiError) as exc_info:
        await api.get_employees()

    assert exc_info.value.malformed is True
    assert exc_info.value.status_code is None
    assert str(exc_info.value) == "Unexpected response from /employees: response was not a list"


async def test_record_without_id_is_a_read_error(api, backend):
    backend.attendance.append({"employee_id": "1", "attendance_date": "2024-05-01"})

    with pytest.raises(HRApiError) as exc_info:
        await api.get_attendance()

    assert exc_info.value.malformed is True
    assert "/attendance" in str(exc_info.value)


async def test_load_page_data_turns_bad_body_into_load_error(api, backend):
    backend.fail_with("GET", "/attendance", 200, {"detail": "not a list"})

    with pytest.raises(LoadError) as exc_info:
        await load_page_data(api, "attendance")

    assert exc_info.value.status_code == 502
    assert "Unexpected response from /attendance" in exc_info.value.detail


async def test_attendance_without_status_reads_as_absent(api, backend):
    backend.attendance.append({"id": "r1", "employee_id": "1", "attendance_date": "2024-05-01"})

    records = await api.get_attendance()

    assert records[0].status == AttendanceStatus.absent

"""Proxy router — browser-facing mirrors of the HR API write endpoints.

Every route checks configuration first, then reads the body (where one is
required), then forwards. Read pass-throughs are included for symmetry.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from hr_dashboard.common.rate_limit import limiter
from hr_dashboard.config import settings
from hr_dashboard.dependencies import get_proxy
from hr_dashboard.proxy.service import MutationProxy, read_json_body

router = APIRouter()


def _write_limit() -> str:
    return settings.PROXY_RATE_LIMIT


# ── /attendance ─────────────────────────────────────────────────────

@router.get("/attendance")
async def list_attendance(request: Request, proxy: MutationProxy = Depends(get_proxy)) -> Response:
    proxy.ensure_configured()
    return await proxy.forward(
        "GET", "/attendance", params=dict(request.query_params), service="attendance",
    )


@router.post("/attendance")
@limiter.limit(_write_limit)
async def create_attendance(request: Request, proxy: MutationProxy = Depends(get_proxy)) -> Response:
    """Forward a new attendance record."""
    proxy.ensure_configured()
    body = await read_json_body(request)
    return await proxy.forward("POST", "/attendance", body=body, service="attendance")


@router.put("/attendance/{record_id}")
@limiter.limit(_write_limit)
async def update_attendance(
    record_id: str,
    request: Request,
    proxy: MutationProxy = Depends(get_proxy),
) -> Response:
    """Forward a status change for an existing attendance record."""
    proxy.ensure_configured()
    body = await read_json_body(request)
    return await proxy.forward("PUT", f"/attendance/{record_id}", body=body, service="attendance")


# ── /employees ──────────────────────────────────────────────────────

@router.get("/employees")
async def list_employees(request: Request, proxy: MutationProxy = Depends(get_proxy)) -> Response:
    proxy.ensure_configured()
    return await proxy.forward("GET", "/employees", service="employee")


@router.post("/employees")
@limiter.limit(_write_limit)
async def create_employee(request: Request, proxy: MutationProxy = Depends(get_proxy)) -> Response:
    proxy.ensure_configured()
    body = await read_json_body(request)
    return await proxy.forward("POST", "/employees", body=body, service="employee")


@router.put("/employees/{employee_id}")
@limiter.limit(_write_limit)
async def update_employee(
    employee_id: str,
    request: Request,
    proxy: MutationProxy = Depends(get_proxy),
) -> Response:
    proxy.ensure_configured()
    body = await read_json_body(request)
    return await proxy.forward("PUT", f"/employees/{employee_id}", body=body, service="employee")


@router.delete("/employees/{employee_id}")
@limiter.limit(_write_limit)
async def delete_employee(
    employee_id: str,
    request: Request,
    proxy: MutationProxy = Depends(get_proxy),
) -> Response:
    proxy.ensure_configured()
    return await proxy.forward("DELETE", f"/employees/{employee_id}", service="employee")

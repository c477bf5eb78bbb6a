"""Mutation proxy — pass-through forwarding to the HR API.

The backend's status code, body bytes and content type reach the caller
unchanged. Only three conditions are answered locally: a missing base URL
(500), an unreadable JSON body (400) and an unreachable backend (502).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx
from fastapi import Request
from fastapi.responses import Response

from hr_dashboard.common.exceptions import (
    BadRequestError,
    ConfigurationError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

_NO_BODY = object()


async def read_json_body(request: Request) -> Any:
    """Decode the inbound JSON body or raise ``BadRequestError``."""
    try:
        return await request.json()
    except ValueError as exc:
        logger.info("Rejected malformed JSON body on %s: %s", request.url.path, exc)
        raise BadRequestError("Invalid JSON body.") from exc


class MutationProxy:
    """Forwards requests to ``{base_url}{path}`` with a fresh client per call."""

    def __init__(
        self,
        base_url: Optional[str],
        *,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.timeout = timeout
        self.transport = transport

    def ensure_configured(self) -> str:
        if not self.base_url:
            raise ConfigurationError()
        return self.base_url

    async def forward(
        self,
        method: str,
        path: str,
        *,
        body: Any = _NO_BODY,
        params: Optional[dict[str, str]] = None,
        service: str = "HR",
    ) -> Response:
        base_url = self.ensure_configured()
        url = f"{base_url}{path}"

        content: Optional[bytes] = None
        headers: dict[str, str] = {"Cache-Control": "no-cache"}
        if body is not _NO_BODY:
            content = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"

        logger.info("-> %s %s (proxy)", method, url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                upstream = await client.request(
                    method, url, content=content, headers=headers, params=params or None,
                )
        except httpx.RequestError as exc:
            logger.error("xx %s %s (proxy) %s", method, url, exc)
            raise UpstreamUnavailableError(service) from exc

        logger.info("<- %d %s %s (proxy)", upstream.status_code, method, url)
        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            headers={"content-type": upstream.headers.get("content-type", "application/json")},
        )

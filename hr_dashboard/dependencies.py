"""Shared FastAPI dependencies.

Configuration is attached to ``app.state`` by ``create_app`` and handed to
each component at construction; nothing reads the environment per request.
"""

from typing import AsyncGenerator, Optional

import httpx
from fastapi import Depends, Request

from hr_dashboard.common.exceptions import ConfigurationError
from hr_dashboard.config import Settings
from hr_dashboard.hr_api.client import HRApiClient
from hr_dashboard.proxy.service import MutationProxy


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upstream_transport(request: Request) -> Optional[httpx.AsyncBaseTransport]:
    """Transport override for the HR API (tests inject an in-memory backend)."""
    return getattr(request.app.state, "upstream_transport", None)


async def get_reader(
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> AsyncGenerator[HRApiClient, None]:
    """HR API client for page-load reads."""
    async with HRApiClient(
        settings.reader_base_url,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        transport=transport,
    ) as client:
        yield client


async def get_writer(
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> AsyncGenerator[HRApiClient, None]:
    """HR API client for writes; requires an explicitly configured base URL."""
    base_url = settings.proxy_base_url
    if not base_url:
        raise ConfigurationError()
    async with HRApiClient(
        base_url,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        transport=transport,
    ) as client:
        yield client


def get_proxy(
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> MutationProxy:
    return MutationProxy(
        settings.proxy_base_url,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        transport=transport,
    )

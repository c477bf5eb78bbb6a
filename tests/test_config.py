"""Settings resolution and logging setup."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from hr_dashboard.config import DEFAULT_API_BASE, Settings
from hr_dashboard.logging_config import configure_logging


def test_reader_prefers_public_base():
    s = Settings(API_BASE="http://private", PUBLIC_API_BASE="http://public")
    assert s.reader_base_url == "http://public"
    assert s.proxy_base_url == "http://private"


def test_reader_falls_back_to_local_default():
    s = Settings(API_BASE=None, PUBLIC_API_BASE=None)
    assert s.reader_base_url == DEFAULT_API_BASE
    assert s.proxy_base_url is None


def test_proxy_uses_public_base_when_only_one_set():
    s = Settings(API_BASE=None, PUBLIC_API_BASE="http://public")
    assert s.proxy_base_url == "http://public"


def test_cors_origins_bad_json_falls_back():
    assert Settings(CORS_ORIGINS="not json").cors_origins_list == ["http://localhost:3000"]
    assert Settings(CORS_ORIGINS='["http://a"]').cors_origins_list == ["http://a"]


def test_blank_timezone_means_local():
    assert Settings(TIMEZONE="").timezone_name is None
    assert Settings(TIMEZONE="Asia/Kolkata").timezone_name == "Asia/Kolkata"


def test_configure_logging_sets_package_level():
    configure_logging("debug")
    assert logging.getLogger("hr_dashboard").level == logging.DEBUG
    configure_logging("nonsense")
    assert logging.getLogger("hr_dashboard").level == logging.INFO


def test_unknown_timezone_fails_at_startup():
    with pytest.raises(ValidationError) as exc_info:
        Settings(TIMEZONE="Asia/Kolkatta")
    assert "Unknown timezone 'Asia/Kolkatta'" in str(exc_info.value)


def test_timezone_is_trimmed():
    assert Settings(TIMEZONE="  UTC ").timezone_name == "UTC"

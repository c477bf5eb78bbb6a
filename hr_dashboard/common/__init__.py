"""Common module — shared utilities for the HR dashboard."""

from hr_dashboard.common.constants import (
    DEFAULT_PAGE_SIZE,
    UNKNOWN_DATE,
    AttendanceStatus,
    Availability,
    FeedbackKind,
    FilterTab,
    normalize_status,
)
from hr_dashboard.common.dates import (
    format_display_date,
    last_n_dates,
    parse_date,
    short_date_label,
    to_iso_date,
    today_iso_date,
)
from hr_dashboard.common.exceptions import (
    AppException,
    BadRequestError,
    ConfigurationError,
    LoadError,
    MutationError,
    NotFoundException,
    UpstreamUnavailableError,
    ValidationException,
    register_exception_handlers,
)
from hr_dashboard.common.filters import apply_search, apply_status_filter
from hr_dashboard.common.pagination import PaginationMeta, paginate_rows

__all__ = [
    # Constants / Enums
    "AttendanceStatus",
    "Availability",
    "FeedbackKind",
    "FilterTab",
    "normalize_status",
    "DEFAULT_PAGE_SIZE",
    "UNKNOWN_DATE",
    # Dates
    "format_display_date",
    "last_n_dates",
    "parse_date",
    "short_date_label",
    "to_iso_date",
    "today_iso_date",
    # Exceptions
    "AppException",
    "BadRequestError",
    "ConfigurationError",
    "LoadError",
    "MutationError",
    "NotFoundException",
    "UpstreamUnavailableError",
    "ValidationException",
    "register_exception_handlers",
    # Filters
    "apply_search",
    "apply_status_filter",
    # Pagination
    "PaginationMeta",
    "paginate_rows",
]

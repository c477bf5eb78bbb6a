"""Calendar helpers for attendance views: ISO dates, day windows, labels.

All dates exchanged with the HR API are ``YYYY-MM-DD`` strings. "Today" is the
local calendar date, so it rolls over at local midnight rather than UTC.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo

from hr_dashboard.common.constants import ISO_DATE_FORMAT, UNKNOWN_DATE


def _today(tz: Optional[str] = None) -> date:
    """Current local date, or the date in *tz* when an IANA zone is given."""
    if tz:
        return datetime.now(ZoneInfo(tz)).date()
    return datetime.now().date()


def to_iso_date(value: Union[date, datetime]) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(ISO_DATE_FORMAT)


def today_iso_date(tz: Optional[str] = None) -> str:
    return to_iso_date(_today(tz))


def last_n_dates(n: int, today: Optional[date] = None) -> list[str]:
    """Ascending ISO dates for the *n* days ending at *today* (inclusive)."""
    if n <= 0:
        return []
    end = today or _today()
    return [to_iso_date(end - timedelta(days=offset)) for offset in range(n - 1, -1, -1)]


def parse_date(value: object) -> Optional[date]:
    """
    Parse ``YYYY-MM-DD`` or an ISO-8601 timestamp into a calendar date.

    Aware timestamps are converted to local time first so that a
    ``created_at`` written late in the UTC day lands on the local date.
    Returns ``None`` for anything unparsable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.date()


def parse_iso_date(value: object) -> Optional[date]:
    """Strict ``YYYY-MM-DD`` parse for user-selected dates; ``None`` otherwise."""
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), ISO_DATE_FORMAT).date()
    except ValueError:
        return None


def parse_timestamp(value: object) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are kept naive."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def format_display_date(value: object) -> str:
    """``"May 1, 2024"``; ``UNKNOWN_DATE`` when unparsable."""
    parsed = parse_date(value)
    if parsed is None:
        return UNKNOWN_DATE
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def short_date_label(value: object) -> str:
    """``"May 1"`` for chart axes; ``UNKNOWN_DATE`` when unparsable."""
    parsed = parse_date(value)
    if parsed is None:
        return UNKNOWN_DATE
    return f"{parsed.strftime('%b')} {parsed.day}"

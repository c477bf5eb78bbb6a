"""Free-text search and status filtering over in-memory rows."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from hr_dashboard.common.constants import FilterTab

T = TypeVar("T")


def normalize_query(query: Optional[str]) -> str:
    return (query or "").strip().lower()


def matches_query(values: Iterable[Any], query: str) -> bool:
    """
    Case-insensitive substring match of *query* against the joined *values*.

    Empty values are skipped; *query* is expected already normalised.
    """
    haystack = " ".join(str(v) for v in values if v not in (None, ""))
    return query in haystack.lower()


def apply_search(
    rows: Sequence[T],
    query: Optional[str],
    fields: Callable[[T], Iterable[Any]],
) -> list[T]:
    """Keep rows whose *fields* contain *query*; a blank query keeps all."""
    needle = normalize_query(query)
    if not needle:
        return list(rows)
    return [row for row in rows if matches_query(fields(row), needle)]


def apply_status_filter(
    rows: Sequence[T],
    tab: FilterTab,
    status_of: Callable[[T], Any],
) -> list[T]:
    """Keep rows whose status equals the selected tab; ``all`` keeps every row."""
    if tab == FilterTab.all:
        return list(rows)
    return [row for row in rows if status_of(row) == tab.value]

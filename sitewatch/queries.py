"""Filtering and free-text search over record collections.

These back the list pages: exact-match filters on enum fields (role,
shift, status, type, severity ...) and a case-insensitive substring
search over a chosen set of text fields.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence, TypeVar

from sitewatch.models.schemas import RecordModel

R = TypeVar("R", bound=RecordModel)

# Fields searched by default per collection
SEARCH_KEYS = {
    "workers": ("name", "badge_id", "phone"),
    "incidents": ("type", "notes"),
    "devices": ("type", "serial"),
    "attendance": ("method",),
    "zones": ("name",),
}


def filter_records(records: Iterable[R], **criteria: Optional[Any]) -> List[R]:
    """Keep records whose fields equal every given criterion.

    Criteria that are None or empty are skipped, so an unset filter
    control matches everything.
    """
    active = {name: value for name, value in criteria.items() if value not in (None, "")}
    return [r for r in records if all(getattr(r, name) == value for name, value in active.items())]


def search_records(records: Iterable[R], query: str, keys: Sequence[str]) -> List[R]:
    """Case-insensitive substring match of ``query`` against ``keys``."""
    needle = query.strip().lower()
    if not needle:
        return list(records)
    matches = []
    for record in records:
        for key in keys:
            value = getattr(record, key, None)
            if value is not None and needle in str(value).lower():
                matches.append(record)
                break
    return matches

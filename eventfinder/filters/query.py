"""Serialization of a filter snapshot into search endpoint parameters."""

from datetime import datetime, time, timezone
from typing import List, Tuple
from urllib.parse import urlencode

from .state import ALL_ORGANIZATIONS, DateLike, EventType, FilterState

def to_iso_timestamp(value: DateLike) -> str:
    """
    Format a date or datetime as a UTC timestamp with millisecond precision.

    Naive datetimes are taken to be UTC; plain dates are midnight UTC.
    e.g. ``date(2024, 1, 1)`` -> ``2024-01-01T00:00:00.000Z``
    """
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"

def serialize_filters(state: FilterState) -> List[Tuple[str, str]]:
    """
    Build the query parameters for ``/api/events/search``.

    The order of keys is fixed. ``locations`` repeats once per selected
    location. ``eventType`` is left out whenever a complete date range is
    set, even if the snapshot is inconsistent.
    """
    params: List[Tuple[str, str]] = []

    if state.search_term:
        params.append(('search', state.search_term))

    if state.organization != ALL_ORGANIZATIONS:
        params.append(('organization', state.organization))

    if state.date_range.start is not None:
        params.append(('dateFrom', to_iso_timestamp(state.date_range.start)))
    if state.date_range.end is not None:
        params.append(('dateTo', to_iso_timestamp(state.date_range.end)))

    for location in state.locations:
        params.append(('locations', location))

    if state.event_type != EventType.ALL and not state.date_range.is_complete:
        params.append(('eventType', EventType(state.event_type).value))

    return params

def to_query_string(state: FilterState) -> str:
    return urlencode(serialize_filters(state))

"""Filter state reconciliation and query serialization."""

from .state import (
    ALL_ORGANIZATIONS,
    LOCATIONS,
    DateRange,
    EventType,
    FilterDimension,
    FilterState,
    FilterStateModel,
    UnknownLocationError,
)
from .query import serialize_filters, to_iso_timestamp, to_query_string

__all__ = [
    'ALL_ORGANIZATIONS',
    'LOCATIONS',
    'DateRange',
    'EventType',
    'FilterDimension',
    'FilterState',
    'FilterStateModel',
    'UnknownLocationError',
    'serialize_filters',
    'to_iso_timestamp',
    'to_query_string',
]

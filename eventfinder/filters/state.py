"""Filter state and its reconciliation into active filter labels.

Every change goes through ``FilterStateModel.apply_filter_change`` which
replaces the immutable ``FilterState`` and rebuilds the label list from it,
so the labels can never hold stale or duplicate entries.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple, Union

DateLike = Union[date, datetime]

# Sentinel organization id meaning "no organization filter"
ALL_ORGANIZATIONS = 'all'

# Location ids offered by the filter panel and their display names
LOCATIONS: Dict[str, str] = {
    'ny': 'New York',
    'dc': 'Washington D.C.',
    'sf': 'San Francisco',
    'chi': 'Chicago',
    'la': 'Los Angeles',
    'bos': 'Boston',
    'virtual': 'Virtual',
}

# Locale-independent month names used in every formatted date
MONTH_ABBREVIATIONS = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)

DATE_LABEL_PREFIX = 'Date:'
LOCATION_LABEL_PREFIX = 'Location:'
TYPE_LABEL_PREFIX = 'Type:'

class UnknownLocationError(ValueError):
    """Raised when a location id is not in the lookup table."""

class FilterDimension(str, Enum):
    DATE_RANGE = 'dateRange'
    LOCATION = 'location'
    EVENT_TYPE = 'eventType'

class EventType(str, Enum):
    UPCOMING = 'upcoming'
    PAST = 'past'
    ALL = 'all'

@dataclass(frozen=True)
class DateRange:
    """An optional (start, end) pair picked on the calendar."""
    start: Optional[DateLike] = None
    end: Optional[DateLike] = None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

@dataclass(frozen=True)
class FilterState:
    """Snapshot of every filter dimension a view can apply."""
    date_range: DateRange = DateRange()
    locations: Tuple[str, ...] = ()
    event_type: EventType = EventType.ALL
    search_term: str = ''
    organization: str = ALL_ORGANIZATIONS

def format_short_date(value: DateLike) -> str:
    """Format a date as ``Mon d``, e.g. ``Jan 5``."""
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day}"

class FilterStateModel:
    """
    Owns a ``FilterState`` and the chips describing its active dimensions.

    Args:
        default_event_type: Event type a fresh or cleared view starts with
        locations: Lookup table from location id to display name
    """

    def __init__(self, default_event_type: EventType = EventType.UPCOMING,
                 locations: Optional[Dict[str, str]] = None):
        self.default_event_type = EventType(default_event_type)
        self.locations = dict(LOCATIONS if locations is None else locations)
        self.state = FilterState(event_type=self.default_event_type)
        # Set while the user has picked an event type other than "all"
        self.event_type_selected = False
        self.active_filters: List[str] = []

    def copy(self) -> 'FilterStateModel':
        clone = FilterStateModel(self.default_event_type, self.locations)
        clone.event_type_selected = self.event_type_selected
        clone._replace_state(self.state)
        return clone

    def location_name(self, location_id: str) -> str:
        try:
            return self.locations[location_id]
        except KeyError:
            raise UnknownLocationError(f"Unknown location: {location_id!r}") from None

    def apply_filter_change(self, dimension: FilterDimension, value) -> FilterState:
        """
        Apply one filter change and reconcile the mutually exclusive dimensions.

        Args:
            dimension: Which filter the user touched
            value: ``DateRange`` (or ``{"from", "to"}``) for dates, a location id,
                or an ``EventType``

        Returns:
            FilterState: The new state

        Raises:
            UnknownLocationError: If a location id has no display name
            ValueError: If the dimension or event type is not recognised
            TypeError: If a date range value has the wrong shape
        """
        dimension = FilterDimension(dimension)
        state = self.state

        if dimension is FilterDimension.DATE_RANGE:
            date_range = self._coerce_date_range(value)
            state = replace(state, date_range=date_range)
            if date_range.is_complete:
                state = replace(state, event_type=EventType.ALL)
                self.event_type_selected = False

        elif dimension is FilterDimension.LOCATION:
            if value in state.locations:
                locations = tuple(loc for loc in state.locations if loc != value)
            else:
                self.location_name(value)
                locations = state.locations + (value,)
            state = replace(state, locations=locations)

        elif dimension is FilterDimension.EVENT_TYPE:
            event_type = EventType(value)
            state = replace(state, date_range=DateRange(), event_type=event_type)
            self.event_type_selected = event_type is not EventType.ALL

        return self._replace_state(state)

    def clear_all(self) -> FilterState:
        """Reset dates, locations and event type. Search and organization are kept."""
        self.event_type_selected = False
        return self._replace_state(replace(
            self.state,
            date_range=DateRange(),
            locations=(),
            event_type=self.default_event_type,
        ))

    def remove_filter(self, label: str) -> FilterState:
        """Undo the filter behind one active label."""
        if label not in self.active_filters:
            raise ValueError(f"No active filter labelled {label!r}")

        if label.startswith(LOCATION_LABEL_PREFIX):
            for location_id in self.state.locations:
                if self._location_label(location_id) == label:
                    return self.apply_filter_change(FilterDimension.LOCATION, location_id)
        elif label.startswith(DATE_LABEL_PREFIX):
            return self.apply_filter_change(FilterDimension.DATE_RANGE, DateRange())
        elif label.startswith(TYPE_LABEL_PREFIX):
            return self.apply_filter_change(FilterDimension.EVENT_TYPE, EventType.ALL)

        raise ValueError(f"Unrecognised filter label {label!r}")

    def set_search_term(self, term: str) -> FilterState:
        return self._replace_state(replace(self.state, search_term=term or ''))

    def select_organization(self, organization_id: Optional[str]) -> FilterState:
        return self._replace_state(
            replace(self.state, organization=organization_id or ALL_ORGANIZATIONS)
        )

    def _replace_state(self, state: FilterState) -> FilterState:
        self.state = state
        self.active_filters = self._build_labels(state)
        return state

    def _location_label(self, location_id: str) -> str:
        return f"{LOCATION_LABEL_PREFIX} {self.location_name(location_id)}"

    def _build_labels(self, state: FilterState) -> List[str]:
        labels = []
        if state.date_range.is_complete:
            labels.append(
                f"{DATE_LABEL_PREFIX} {format_short_date(state.date_range.start)}"
                f" - {format_short_date(state.date_range.end)}"
            )
        labels.extend(self._location_label(loc) for loc in state.locations)
        if self.event_type_selected and state.event_type is not EventType.ALL:
            labels.append(f"{TYPE_LABEL_PREFIX} {state.event_type.value.capitalize()}")
        return labels

    @staticmethod
    def _coerce_date_range(value) -> DateRange:
        """Accept a ``DateRange``, a ``{'from', 'to'}`` mapping or a 2-tuple."""
        if isinstance(value, DateRange):
            return value
        if isinstance(value, Mapping):
            return DateRange(value.get('from'), value.get('to'))
        if isinstance(value, tuple) and len(value) == 2:
            return DateRange(*value)
        raise TypeError(f"Expected a date range, got {type(value).__name__}")

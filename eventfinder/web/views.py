"""Page controllers for the all-events and saved-events views.

A view owns one ``FilterStateModel``, refetches whenever the filters or the
organization change, and turns the last fetched list into a ``ViewModel``
for the templates.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Dict, List, Optional

import requests

from ..filters import (
    ALL_ORGANIZATIONS,
    DateRange,
    EventType,
    FilterDimension,
    FilterState,
    FilterStateModel,
    serialize_filters,
)
from ..models.event import Event, Organization
from ..utils.debounce import Debouncer
from ..utils.grouping import group_events_by_date
from .api import EventAPIClient, EventAPIError

logger = logging.getLogger(__name__)

# Number of placeholder cards shown while a fetch is in flight
SKELETON_COUNT = 5

@dataclass
class ViewModel:
    """Everything a template needs to draw one page."""
    title: str
    loading: bool
    skeletons: int
    groups: Dict[str, List[Event]]
    active_filters: List[str]
    filters: FilterState
    organizations: List[Organization] = field(default_factory=list)

class EventsView(ABC):
    """
    Base controller for an event list page.

    Args:
        client: API client used for every fetch
        debounce_wait: Quiet period in seconds before a typed search is sent
        tz: Zone used to bucket events by date
    """

    title = 'Events'
    default_event_type = EventType.ALL

    def __init__(self, client: EventAPIClient, debounce_wait: float = 0.3,
                 tz: Optional[tzinfo] = None):
        self.client = client
        self.tz = tz
        self.filters = FilterStateModel(default_event_type=self.default_event_type)
        self.events: List[Event] = []
        self.organizations: List[Organization] = []
        self.loading = False
        self._lock = threading.Lock()
        self._generation = 0
        self._search = Debouncer(debounce_wait, self._search_now)

    @abstractmethod
    def fetch_events(self, state: FilterState) -> List[Event]:
        """Fetch the events for a filter snapshot."""

    def apply_filter_change(self, dimension: FilterDimension, value) -> None:
        with self._lock:
            self.filters.apply_filter_change(dimension, value)
        self.refresh()

    def clear_all_filters(self) -> None:
        with self._lock:
            self.filters.clear_all()
        self.refresh()

    def remove_filter(self, label: str) -> None:
        with self._lock:
            self.filters.remove_filter(label)
        self.refresh()

    def select_organization(self, organization_id: Optional[str]) -> None:
        with self._lock:
            self.filters.select_organization(organization_id)
        self.refresh()

    def search(self, term: str) -> None:
        """Record the typed term and schedule a debounced refetch."""
        with self._lock:
            self.filters.set_search_term(term)
        self._search(term.strip())

    def _search_now(self, term: str) -> None:
        # Runs on the debouncer's timer thread
        with self._lock:
            self.filters.set_search_term(term)
        self.refresh()

    def close(self) -> None:
        """Tear the view down; a pending search will not fire afterwards."""
        self._search.cancel()

    def refresh(self) -> bool:
        """
        Refetch events for the current filters.

        On failure the previous list is kept and ``loading`` is cleared. A
        fetch that was overtaken by a newer one does not overwrite the newer
        results.

        Returns:
            bool: True if the list was replaced
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            state = self.filters.state
            self.loading = True

        events = None
        try:
            events = self.fetch_events(state)
        except (requests.RequestException, EventAPIError) as e:
            logger.error(f"Error fetching events for {type(self).__name__}: {e}")
        finally:
            with self._lock:
                current = generation == self._generation
                if current:
                    self.loading = False
                    if events is not None:
                        self.events = events

        if not current:
            logger.debug(f"Discarding stale fetch {generation}")
        return current and events is not None

    def load_organizations(self) -> None:
        try:
            self.organizations = self.client.get_organizations()
        except (requests.RequestException, EventAPIError) as e:
            logger.error(f"Error fetching organizations: {e}")

    def grouped_events(self) -> Dict[str, List[Event]]:
        return group_events_by_date(self.events, self.tz)

    def render(self) -> ViewModel:
        with self._lock:
            loading = self.loading
            events = list(self.events)
            state = self.filters.state
            active_filters = list(self.filters.active_filters)
        return ViewModel(
            title=self.title,
            loading=loading,
            skeletons=SKELETON_COUNT if loading else 0,
            groups={} if loading else group_events_by_date(events, self.tz),
            active_filters=active_filters,
            filters=state,
            organizations=list(self.organizations),
        )

class AllEventsView(EventsView):
    """Every event, narrowed by the full filter panel."""

    title = 'Upcoming Events'
    default_event_type = EventType.UPCOMING

    def fetch_events(self, state: FilterState) -> List[Event]:
        return self.client.search_events(serialize_filters(state))

class SavedEventsView(EventsView):
    """Events the current user saved, narrowed by search and organization."""

    title = 'My Saved Events'

    def fetch_events(self, state: FilterState) -> List[Event]:
        saved_ids = self.client.get_saved_event_ids()
        if not saved_ids:
            return []

        if not state.search_term and state.organization == ALL_ORGANIZATIONS:
            return self.client.get_saved_events(saved_ids)

        # Searching goes through the search endpoint; keep only saved hits
        query = FilterState(
            date_range=DateRange(),
            event_type=EventType.ALL,
            search_term=state.search_term,
            organization=state.organization,
        )
        saved = set(saved_ids)
        events = [e for e in self.client.search_events(serialize_filters(query)) if e.id in saved]
        for event in events:
            event.is_saved = True
        return events

"""Shared fixtures for the test suite."""
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from eventfinder.config import Config
from eventfinder.models import Event, Organization
from eventfinder.web.api import EventAPIClient


class FrontendTestConfig(Config):
    TESTING = True
    API_BASE_URL = 'http://api.test'
    API_TIMEOUT = 5
    SEARCH_DEBOUNCE_SECONDS = 0.01
    DISPLAY_TIMEZONE = 'UTC'


def make_event(event_id, start, title=None, **kwargs):
    """Build an Event starting at ``start`` (a ``YYYY-MM-DD[THH:MM]`` string)."""
    start_time = datetime.fromisoformat(start)
    if start_time.tzinfo is None:
        start_time = start_time.replace(tzinfo=timezone.utc)
    return Event(id=event_id, title=title or f"Event {event_id}", start_time=start_time, **kwargs)


def event_payload(event_id, date_from, **kwargs):
    """Build an event document as the API serves it."""
    payload = {
        '_id': event_id,
        'title': f"Event {event_id}",
        'date_from': date_from,
        'description': 'Talks and networking',
        'location': 'Main hall',
    }
    payload.update(kwargs)
    return payload


@pytest.fixture
def mock_client():
    """API client double with empty defaults."""
    client = Mock(spec=EventAPIClient)
    client.search_events.return_value = []
    client.get_events.return_value = []
    client.get_organizations.return_value = [Organization(id='org1', name='AI Club')]
    client.get_saved_event_ids.return_value = []
    client.get_saved_events.return_value = []
    return client


@pytest.fixture
def app():
    from eventfinder.web import create_app
    return create_app(FrontendTestConfig)


@pytest.fixture
def web_client(app):
    return app.test_client()

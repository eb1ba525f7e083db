"""Unit tests for EventAPIClient."""
from datetime import datetime, timezone

import pytest
import responses
from responses import matchers
from requests.exceptions import ConnectionError

from eventfinder.models import Organization
from eventfinder.tests.conftest import event_payload
from eventfinder.web.api import EventAPIClient, EventAPIError

BASE_URL = 'http://api.test'


@pytest.fixture
def client():
    return EventAPIClient(base_url=BASE_URL + '/', timeout=5)


class TestEventAPIClient:
    """Test cases for EventAPIClient."""

    @responses.activate
    def test_get_events(self, client):
        responses.add(
            responses.GET,
            f"{BASE_URL}/api/events",
            json={
                'success': True,
                'events': [
                    event_payload(
                        'e1', '2024-03-01T18:00:00.000Z',
                        date_to='2024-03-01T20:00:00.000Z',
                        organization={'name': 'AI Club'},
                        is_virtual=True,
                        keywords=['ai'],
                    ),
                ],
            },
            match=[matchers.query_param_matcher({'organization': 'org1'})],
        )

        events = client.get_events(organization='org1')

        assert len(events) == 1
        event = events[0]
        assert event.id == 'e1'
        assert event.title == 'Event e1'
        assert event.start_time == datetime(2024, 3, 1, 18, tzinfo=timezone.utc)
        assert event.end_time == datetime(2024, 3, 1, 20, tzinfo=timezone.utc)
        assert event.organization == 'AI Club'
        assert event.is_virtual is True
        assert event.keywords == ['ai']

    @responses.activate
    def test_search_events_sends_repeated_keys(self, client):
        responses.add(
            responses.GET,
            f"{BASE_URL}/api/events/search",
            json={'success': True, 'events': []},
        )

        client.search_events([('search', 'ai'), ('locations', 'ny'), ('locations', 'sf')])

        url = responses.calls[0].request.url
        assert 'search=ai' in url
        assert 'locations=ny&locations=sf' in url

    @responses.activate
    def test_success_false_raises(self, client):
        """The envelope, not the status code, signals failure."""
        responses.add(
            responses.GET,
            f"{BASE_URL}/api/events/search",
            json={'success': False, 'message': 'bad filter'},
            status=200,
        )

        with pytest.raises(EventAPIError, match='bad filter'):
            client.search_events([])

    @responses.activate
    def test_error_status_with_success_envelope_is_accepted(self, client):
        responses.add(
            responses.GET,
            f"{BASE_URL}/api/organizations",
            json={'success': True, 'organizations': [{'_id': 'org1', 'name': 'AI Club'}]},
            status=500,
        )

        assert client.get_organizations() == [Organization(id='org1', name='AI Club')]

    @responses.activate
    def test_invalid_json_raises(self, client):
        responses.add(responses.GET, f"{BASE_URL}/api/organizations", body='<html>oops</html>')

        with pytest.raises(EventAPIError):
            client.get_organizations()

    @responses.activate
    def test_transport_failure_propagates(self, client):
        responses.add(
            responses.GET,
            f"{BASE_URL}/api/events",
            body=ConnectionError('connection refused'),
        )

        with pytest.raises(ConnectionError):
            client.get_events()

    @responses.activate
    def test_missing_required_fields(self, client):
        responses.add(
            responses.GET,
            f"{BASE_URL}/api/events",
            json={'success': True, 'events': [{'_id': 'e1', 'title': 'No date'}]},
        )

        with pytest.raises(EventAPIError, match='date_from'):
            client.get_events()

    @responses.activate
    def test_unparsable_start_time(self, client):
        responses.add(
            responses.GET,
            f"{BASE_URL}/api/events/search",
            json={'success': True, 'events': [event_payload('e1', 'next tuesday')]},
        )

        with pytest.raises(EventAPIError, match='Malformed event'):
            client.search_events([])

    @responses.activate
    def test_saved_events(self, client):
        responses.add(
            responses.GET,
            f"{BASE_URL}/api/saveevent",
            json={'success': True, 'eventIds': ['e1', 'e2']},
        )
        responses.add(
            responses.GET,
            f"{BASE_URL}/api/events/savedevents",
            json={
                'success': True,
                'events': [
                    event_payload('e1', '2024-03-01T18:00:00Z'),
                    event_payload('e2', '2024-03-02T18:00:00Z'),
                ],
            },
            match=[matchers.query_param_matcher({'savedIds': 'e1,e2'})],
        )

        ids = client.get_saved_event_ids()
        events = client.get_saved_events(ids)

        assert ids == ['e1', 'e2']
        assert [e.id for e in events] == ['e1', 'e2']
        assert all(e.is_saved for e in events)

    @responses.activate
    def test_cookies_are_forwarded(self):
        client = EventAPIClient(base_url=BASE_URL, cookies={'session': 'abc'})
        responses.add(
            responses.GET,
            f"{BASE_URL}/api/saveevent",
            json={'success': True, 'eventIds': []},
        )

        assert client.get_saved_event_ids() == []
        assert responses.calls[0].request.headers['Cookie'] == 'session=abc'

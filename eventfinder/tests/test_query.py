"""Unit tests for the query serializer."""
from datetime import date, datetime, timedelta, timezone
from urllib.parse import parse_qsl

from eventfinder.filters import (
    DateRange,
    EventType,
    FilterState,
    serialize_filters,
    to_iso_timestamp,
    to_query_string,
)


class TestSerializeFilters:
    """Test cases for serialize_filters."""

    def test_full_state_omits_event_type_when_dates_set(self):
        """A complete date range wins over an (inconsistent) event type."""
        state = FilterState(
            search_term='ai',
            organization='org1',
            date_range=DateRange(date(2024, 1, 1), date(2024, 1, 31)),
            locations=('ny', 'sf'),
            event_type=EventType.PAST,
        )

        params = serialize_filters(state)

        assert params[:4] == [
            ('search', 'ai'),
            ('organization', 'org1'),
            ('dateFrom', '2024-01-01T00:00:00.000Z'),
            ('dateTo', '2024-01-31T00:00:00.000Z'),
        ]
        assert sorted(params[4:]) == [('locations', 'ny'), ('locations', 'sf')]
        assert 'eventType' not in dict(params)

    def test_query_string(self):
        state = FilterState(
            search_term='ai',
            organization='org1',
            date_range=DateRange(date(2024, 1, 1), date(2024, 1, 31)),
            locations=('ny', 'sf'),
            event_type=EventType.PAST,
        )

        query = to_query_string(state)

        assert query.startswith(
            'search=ai&organization=org1'
            '&dateFrom=2024-01-01T00%3A00%3A00.000Z&dateTo=2024-01-31T00%3A00%3A00.000Z'
        )
        assert sorted(parse_qsl(query)) == sorted(serialize_filters(state))

    def test_defaults_serialize_to_nothing(self):
        assert serialize_filters(FilterState()) == []

    def test_event_type_without_dates(self):
        state = FilterState(event_type=EventType.UPCOMING)
        assert serialize_filters(state) == [('eventType', 'upcoming')]

    def test_event_type_kept_with_partial_range(self):
        state = FilterState(
            date_range=DateRange(date(2024, 5, 1), None),
            event_type=EventType.PAST,
        )
        assert serialize_filters(state) == [
            ('dateFrom', '2024-05-01T00:00:00.000Z'),
            ('eventType', 'past'),
        ]

    def test_serialization_is_pure(self):
        state = FilterState(search_term='jazz', locations=('bos',), event_type=EventType.PAST)
        assert serialize_filters(state) == serialize_filters(state)


class TestIsoTimestamp:
    """Test cases for to_iso_timestamp."""

    def test_naive_datetime_is_utc(self):
        assert to_iso_timestamp(datetime(2024, 3, 2, 14, 5, 9, 123456)) == '2024-03-02T14:05:09.123Z'

    def test_aware_datetime_is_converted(self):
        oslo_winter = timezone(timedelta(hours=1))
        value = datetime(2024, 1, 1, 0, 30, tzinfo=oslo_winter)
        assert to_iso_timestamp(value) == '2023-12-31T23:30:00.000Z'

    def test_date_is_midnight(self):
        assert to_iso_timestamp(date(2024, 12, 25)) == '2024-12-25T00:00:00.000Z'

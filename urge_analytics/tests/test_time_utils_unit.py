"""
Unit tests for urge_analytics/utils/time_utils.py

Tests time calculation utilities including:
- Relative window slicing (this week, last week, this month)
- Naive/aware comparison on the UTC axis
- Part-of-day slots
- Default reference instant
"""
import pytest
from datetime import datetime, timedelta
from unittest.mock import patch

import pytz

from urge_analytics.tests.factories import REFERENCE_NOW, UrgeEventFactory
from urge_analytics.utils import constants
from urge_analytics.utils.time_utils import (
    TimeWindowFilter,
    as_utc,
    get_default_timezone,
    get_time_slot,
    reference_now,
    sort_chronologically,
)


class TestTimeWindowFilter:
    """Tests for TimeWindowFilter.split."""

    def test_empty_events_give_empty_windows(self):
        windows = TimeWindowFilter.split([], REFERENCE_NOW)

        assert windows.this_week == []
        assert windows.last_week == []
        assert windows.this_month == []

    def test_events_land_in_expected_windows(self):
        recent = UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(days=2))
        previous = UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(days=10))
        older = UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(days=20))
        ancient = UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(days=45))

        windows = TimeWindowFilter.split([recent, previous, older, ancient], REFERENCE_NOW)

        assert windows.this_week == [recent]
        assert windows.last_week == [previous]
        assert windows.this_month == [recent, previous, older]

    def test_boundary_at_exactly_seven_days_is_this_week(self):
        """this_week is inclusive at now-7d; last_week is exclusive there."""
        boundary = UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(days=7))

        windows = TimeWindowFilter.split([boundary], REFERENCE_NOW)

        assert windows.this_week == [boundary]
        assert windows.last_week == []

    def test_boundary_at_exactly_fourteen_days_is_last_week(self):
        boundary = UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(days=14))

        windows = TimeWindowFilter.split([boundary], REFERENCE_NOW)

        assert windows.last_week == [boundary]

    def test_future_event_is_counted_in_current_windows(self):
        """Clock anomalies are tolerated, not special-cased."""
        future = UrgeEventFactory.create(timestamp=REFERENCE_NOW + timedelta(hours=5))

        windows = TimeWindowFilter.split([future], REFERENCE_NOW)

        assert windows.this_week == [future]
        assert windows.this_month == [future]

    def test_mixed_naive_and_aware_timestamps_do_not_raise(self):
        aware = UrgeEventFactory.create(
            timestamp=pytz.utc.localize(REFERENCE_NOW - timedelta(days=1))
        )
        naive = UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(days=9))

        windows = TimeWindowFilter.split([aware, naive], REFERENCE_NOW)

        assert windows.this_week == [aware]
        assert windows.last_week == [naive]

    def test_repeated_calls_are_stable(self):
        events = [
            UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(days=d))
            for d in (1, 8, 25)
        ]

        assert TimeWindowFilter.split(events, REFERENCE_NOW) == TimeWindowFilter.split(events, REFERENCE_NOW)


class TestAsUtc:

    def test_naive_is_read_as_utc(self):
        result = as_utc(datetime(2025, 1, 1, 12, 0))

        assert result == pytz.utc.localize(datetime(2025, 1, 1, 12, 0))

    def test_aware_is_converted(self):
        eastern = pytz.timezone('America/New_York')
        local = eastern.localize(datetime(2025, 1, 1, 7, 0))

        assert as_utc(local) == pytz.utc.localize(datetime(2025, 1, 1, 12, 0))


class TestGetTimeSlot:

    @pytest.mark.parametrize('hour,expected', [
        (5, constants.TIME_SLOT_MORNING),
        (11, constants.TIME_SLOT_MORNING),
        (12, constants.TIME_SLOT_AFTERNOON),
        (16, constants.TIME_SLOT_AFTERNOON),
        (17, constants.TIME_SLOT_EVENING),
        (20, constants.TIME_SLOT_EVENING),
        (21, constants.TIME_SLOT_NIGHT),
        (0, constants.TIME_SLOT_NIGHT),
        (4, constants.TIME_SLOT_NIGHT),
    ])
    def test_slot_boundaries(self, hour, expected):
        assert get_time_slot(hour) == expected


class TestReferenceNow:

    def test_naive_events_give_naive_now(self):
        events = [UrgeEventFactory.create()]

        assert reference_now(events).tzinfo is None

    def test_aware_events_give_aware_now(self):
        events = [UrgeEventFactory.create(timestamp=pytz.utc.localize(REFERENCE_NOW))]

        assert reference_now(events).tzinfo is not None

    def test_unknown_timezone_falls_back_to_utc(self):
        with patch('urge_analytics.utils.time_utils.settings.DEFAULT_TIMEZONE', 'Mars/Olympus'):
            assert get_default_timezone() is pytz.utc


class TestSortChronologically:

    def test_sorts_ascending_and_keeps_ties_stable(self):
        a = UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(hours=1))
        b = UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(hours=5))
        c = UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(hours=1))

        assert sort_chronologically([a, b, c]) == [b, a, c]

"""
Tests for StreakCalculator.
"""
import random
from datetime import timedelta

from urge_analytics.services.streak_service import StreakCalculator, StreakResult
from urge_analytics.tests.factories import REFERENCE_NOW, UrgeEventFactory, create_event_series


class TestStreakCalculator:

    def test_empty_log(self):
        assert StreakCalculator.calculate([]) == StreakResult(current_streak=0, longest_streak=0)

    def test_all_overcome(self, all_overcome_events):
        result = StreakCalculator.calculate(all_overcome_events)

        assert result.current_streak == len(all_overcome_events)
        assert result.longest_streak == len(all_overcome_events)

    def test_all_failed(self, all_failed_events):
        assert StreakCalculator.calculate(all_failed_events) == StreakResult(0, 0)

    def test_failure_resets_running_count(self):
        events = create_event_series([True, True, True, False, True, True])

        result = StreakCalculator.calculate(events)

        assert result.longest_streak == 3
        assert result.current_streak == 2

    def test_trailing_failure_zeroes_current_streak(self):
        events = create_event_series([True, True, False])

        assert StreakCalculator.calculate(events).current_streak == 0

    def test_input_order_does_not_matter(self):
        """Events are sorted by timestamp before streaks are walked."""
        events = create_event_series([False, True, True, True, False, True])
        shuffled = list(events)
        random.Random(7).shuffle(shuffled)

        assert StreakCalculator.calculate(shuffled) == StreakCalculator.calculate(events)

    def test_latest_event_decides_current_streak(self):
        older_failure = UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(days=3), overcome=False)
        newer_success = UrgeEventFactory.create(timestamp=REFERENCE_NOW - timedelta(days=1), overcome=True)

        result = StreakCalculator.calculate([newer_success, older_failure])

        assert result == StreakResult(current_streak=1, longest_streak=1)

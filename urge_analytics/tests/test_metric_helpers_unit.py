
import pytest
from datetime import datetime, timedelta

from urge_analytics.helpers import metric_helpers
from urge_analytics.tests.factories import create_event_series


class TestMetricHelpersUnit:

    def test_detect_streaks(self):
        # Test basic streak
        result = metric_helpers.detect_streaks_numpy([True, True, True])
        assert (result['current_streak'], result['longest_streak']) == (3, 3)
        # Test broken streak
        result = metric_helpers.detect_streaks_numpy([True, False, True, True])
        assert (result['current_streak'], result['longest_streak']) == (2, 2)
        # Test empty
        assert metric_helpers.detect_streaks_numpy([]) == {'current_streak': 0, 'longest_streak': 0, 'total': 0}
        # Test all false
        result = metric_helpers.detect_streaks_numpy([False, False])
        assert (result['current_streak'], result['longest_streak']) == (0, 0)
        # Test mix
        result = metric_helpers.detect_streaks_numpy([True, True, False, True, True, True, False])
        assert (result['current_streak'], result['longest_streak']) == (0, 3)
        assert result['total'] == 7

    def test_compute_success_rate(self):
        # No events means no failures
        assert metric_helpers.compute_success_rate([]) == 100.0

        events = create_event_series([True, False, True, True])
        assert metric_helpers.compute_success_rate(events) == 75.0

        assert metric_helpers.compute_success_rate(create_event_series([False, False])) == 0.0

    def test_compute_mean(self):
        assert metric_helpers.compute_mean([]) == 0.0
        assert metric_helpers.compute_mean([], default=3.5) == 3.5
        assert metric_helpers.compute_mean([2, 4, 9]) == 5.0

    def test_compute_mean_interval_hours(self):
        assert metric_helpers.compute_mean_interval_hours([]) is None
        assert metric_helpers.compute_mean_interval_hours([datetime(2025, 1, 1)]) is None

        start = datetime(2025, 1, 1)
        # Gaps: 2h, 4h -> mean 3h
        stamps = [start, start + timedelta(hours=2), start + timedelta(hours=6)]
        assert metric_helpers.compute_mean_interval_hours(stamps) == pytest.approx(3.0)

    def test_clamp_score(self):
        assert metric_helpers.clamp_score(140) == 100.0
        assert metric_helpers.clamp_score(-5) == 0.0
        assert metric_helpers.clamp_score(42.5) == 42.5
        assert metric_helpers.clamp_score(float('nan')) == 0.0

from typing import NamedTuple, Sequence

from urge_analytics.helpers import metric_helpers
from urge_analytics.models import UrgeEvent
from urge_analytics.utils.time_utils import sort_chronologically


class StreakResult(NamedTuple):
    current_streak: int
    longest_streak: int


class StreakCalculator:
    """Runs of consecutive overcome urges."""

    @staticmethod
    def calculate(events: Sequence[UrgeEvent]) -> StreakResult:
        """
        Longest and current success streak over the event log.

        Events are sorted ascending by timestamp first. A single failed urge
        resets the running count; the current streak is the trailing run
        ending at the most recent event.
        """
        ordered = sort_chronologically(events)
        streaks = metric_helpers.detect_streaks_numpy([e.overcome for e in ordered])
        return StreakResult(
            current_streak=streaks['current_streak'],
            longest_streak=streaks['longest_streak'],
        )

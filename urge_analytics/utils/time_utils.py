"""
Time utility functions for the analytics engine.

Window slicing is relative to a single reference instant ("now") that the
facade picks once per invocation, so every component sees the same windows.
"""
from datetime import datetime, timedelta
from typing import Iterable, List, NamedTuple, Optional, Sequence
import logging

import pytz

from urge_analytics import settings
from urge_analytics.models import UrgeEvent
from urge_analytics.utils.constants import (
    MONTH_WINDOW_DAYS, PREVIOUS_WEEK_WINDOW_DAYS, WEEK_WINDOW_DAYS,
    TIME_SLOT_AFTERNOON, TIME_SLOT_EVENING, TIME_SLOT_MORNING, TIME_SLOT_NIGHT,
)

logger = logging.getLogger(__name__)


def as_utc(dt: datetime) -> datetime:
    """
    Put a datetime on the UTC axis for comparison.

    Naive datetimes are read as UTC, matching how the tracking store writes
    timestamps without an offset.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=pytz.utc)
    return dt.astimezone(pytz.utc)


def get_default_timezone():
    """Resolve settings.DEFAULT_TIMEZONE, falling back to UTC if invalid."""
    try:
        return pytz.timezone(settings.DEFAULT_TIMEZONE)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"Unknown timezone {settings.DEFAULT_TIMEZONE!r}, using UTC")
        return pytz.utc


def reference_now(events: Iterable[UrgeEvent]) -> datetime:
    """
    Pick "now" for a caller that did not supply one.

    Aware events get an aware instant in the default timezone; otherwise the
    local naive clock is used so hour-of-day projections line up with the
    events' own wall-clock hours.
    """
    if any(event.timestamp.tzinfo is not None for event in events):
        return datetime.now(get_default_timezone())
    return datetime.now()


def get_time_slot(hour: int) -> str:
    """Map an hour (0-23) to its part-of-day slot."""
    if 5 <= hour < 12:
        return TIME_SLOT_MORNING
    if 12 <= hour < 17:
        return TIME_SLOT_AFTERNOON
    if 17 <= hour < 21:
        return TIME_SLOT_EVENING
    return TIME_SLOT_NIGHT


def sort_chronologically(events: Iterable[UrgeEvent]) -> List[UrgeEvent]:
    """Stable ascending sort by timestamp on the UTC axis."""
    return sorted(events, key=lambda event: as_utc(event.timestamp))


# =============================================================================
# TIME WINDOW FILTER
# =============================================================================

class TimeWindows(NamedTuple):
    this_week: List[UrgeEvent]
    last_week: List[UrgeEvent]
    this_month: List[UrgeEvent]


class TimeWindowFilter:
    """
    Slices an event list into windows relative to a reference instant.

    - this_week:  timestamp >= now - 7d
    - last_week:  now - 14d <= timestamp < now - 7d
    - this_month: timestamp >= now - 30d

    Future-dated events land in whichever window their timestamp satisfies.
    """

    @staticmethod
    def since(events: Sequence[UrgeEvent], now: datetime, days: int) -> List[UrgeEvent]:
        cutoff = as_utc(now) - timedelta(days=days)
        return [e for e in events if as_utc(e.timestamp) >= cutoff]

    @staticmethod
    def between(events: Sequence[UrgeEvent], now: datetime,
                start_days: int, end_days: int) -> List[UrgeEvent]:
        """Events with now - start_days <= timestamp < now - end_days."""
        now_utc = as_utc(now)
        lower = now_utc - timedelta(days=start_days)
        upper = now_utc - timedelta(days=end_days)
        return [e for e in events if lower <= as_utc(e.timestamp) < upper]

    @staticmethod
    def split(events: Sequence[UrgeEvent], now: Optional[datetime] = None) -> TimeWindows:
        if now is None:
            now = reference_now(events)
        return TimeWindows(
            this_week=TimeWindowFilter.since(events, now, WEEK_WINDOW_DAYS),
            last_week=TimeWindowFilter.between(
                events, now, PREVIOUS_WEEK_WINDOW_DAYS, WEEK_WINDOW_DAYS
            ),
            this_month=TimeWindowFilter.since(events, now, MONTH_WINDOW_DAYS),
        )

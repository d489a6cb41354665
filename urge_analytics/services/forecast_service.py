"""
Forecast Service

Peak-hour projections for the next likely urge. These are illustrative
windows derived from the hour-of-day histogram, not probability intervals.
"""
from datetime import datetime, timedelta
from typing import List, NamedTuple, Optional, Sequence
import logging

from urge_analytics.helpers.metric_helpers import compute_mean_interval_hours
from urge_analytics.models import PeakHour, RiskPeriod, UrgeEvent
from urge_analytics.utils.constants import (
    HIGH_RISK_PERIOD_COUNT, HIGH_RISK_PERIOD_HOURS, MIN_EVENTS_FOR_PREDICTION,
)
from urge_analytics.utils.time_utils import as_utc, sort_chronologically

logger = logging.getLogger(__name__)


class Prediction(NamedTuple):
    next_likely_urge_time: Optional[datetime]
    high_risk_periods: List[RiskPeriod]
    average_interval_hours: Optional[float]


def _localize_like(now: datetime, wall: datetime) -> datetime:
    """Attach now's timezone to a naive wall-clock time."""
    tz = now.tzinfo
    if tz is None:
        return wall
    if hasattr(tz, 'localize'):
        # pytz zones pick the offset that is valid on that date
        return tz.localize(wall)
    return wall.replace(tzinfo=tz)


def _at_hour(now: datetime, hour: int, days: int = 0, hours: int = 0) -> datetime:
    """
    Wall-clock `hour`:00 on now's date, shifted by whole days and hours.

    The shift is applied to the local wall clock before the timezone is
    attached, so the result keeps its hour across DST changes.
    """
    wall = now.replace(tzinfo=None, hour=hour, minute=0, second=0, microsecond=0)
    return _localize_like(now, wall + timedelta(days=days, hours=hours))


class Predictor:
    """Projects peak hours onto the calendar around the reference instant."""

    @staticmethod
    def next_likely_urge_time(total_events: int, peak_hours: Sequence[PeakHour],
                              now: datetime) -> Optional[datetime]:
        """
        Next occurrence of the busiest hour of day.

        Returns None with fewer than MIN_EVENTS_FOR_PREDICTION events: there
        is no pattern yet.
        """
        if total_events < MIN_EVENTS_FOR_PREDICTION or not peak_hours:
            return None

        prediction = _at_hour(now, peak_hours[0].hour)
        if prediction <= now:
            prediction = _at_hour(now, peak_hours[0].hour, days=1)
        return prediction

    @staticmethod
    def high_risk_periods(total_events: int, peak_hours: Sequence[PeakHour],
                          now: datetime) -> List[RiskPeriod]:
        """Two-hour windows starting at each of the top three peak hours, today."""
        if total_events < MIN_EVENTS_FOR_PREDICTION:
            return []

        periods = []
        for peak in peak_hours[:HIGH_RISK_PERIOD_COUNT]:
            periods.append(RiskPeriod(
                start=_at_hour(now, peak.hour),
                end=_at_hour(now, peak.hour, hours=HIGH_RISK_PERIOD_HOURS),
            ))
        return periods

    @staticmethod
    def average_interval_hours(events: Sequence[UrgeEvent]) -> Optional[float]:
        ordered = sort_chronologically(events)
        return compute_mean_interval_hours([as_utc(e.timestamp) for e in ordered])

    @staticmethod
    def predict(events: Sequence[UrgeEvent], peak_hours: Sequence[PeakHour],
                now: datetime) -> Prediction:
        total = len(events)
        return Prediction(
            next_likely_urge_time=Predictor.next_likely_urge_time(total, peak_hours, now),
            high_risk_periods=Predictor.high_risk_periods(total, peak_hours, now),
            average_interval_hours=Predictor.average_interval_hours(events),
        )

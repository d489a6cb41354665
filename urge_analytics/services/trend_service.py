"""
Trend Service

Threshold-based week-over-week classification. No significance testing:
the boundaries are fixed product constants.
"""
from typing import Sequence
import logging

from urge_analytics.helpers.metric_helpers import compute_success_rate
from urge_analytics.models import FrequencyTrend, ImprovementTrend, UrgeEvent, WeeklyComparison
from urge_analytics.utils.constants import (
    FREQUENCY_DECREASE_RATIO, FREQUENCY_INCREASE_RATIO,
    IMPROVEMENT_TREND_MARGIN, MIN_EVENTS_FOR_FREQUENCY_TREND,
)

logger = logging.getLogger(__name__)


class TrendClassifier:
    """Labels urge frequency and success trends from two adjacent weeks."""

    @staticmethod
    def frequency_trend(total_events: int, this_week: int, last_week: int) -> FrequencyTrend:
        """
        Compare this week's urge count to the previous week's.

        Below MIN_EVENTS_FOR_FREQUENCY_TREND total events the answer is always
        STABLE. With an empty previous week, any urge this week counts as
        INCREASING and none counts as STABLE.
        """
        if total_events < MIN_EVENTS_FOR_FREQUENCY_TREND:
            return FrequencyTrend.STABLE

        if last_week == 0:
            return FrequencyTrend.INCREASING if this_week > 0 else FrequencyTrend.STABLE

        if this_week > last_week * FREQUENCY_INCREASE_RATIO:
            return FrequencyTrend.INCREASING
        if this_week < last_week * FREQUENCY_DECREASE_RATIO:
            return FrequencyTrend.DECREASING
        return FrequencyTrend.STABLE

    @staticmethod
    def improvement_trend(this_week: Sequence[UrgeEvent],
                          last_week: Sequence[UrgeEvent]) -> ImprovementTrend:
        """Compare success rates; an empty week counts as 100%."""
        this_rate = compute_success_rate(this_week)
        last_rate = compute_success_rate(last_week)

        if this_rate > last_rate + IMPROVEMENT_TREND_MARGIN:
            return ImprovementTrend.IMPROVING
        if this_rate < last_rate - IMPROVEMENT_TREND_MARGIN:
            return ImprovementTrend.DECLINING
        return ImprovementTrend.STABLE

    @staticmethod
    def weekly_comparison(this_week: int, last_week: int) -> WeeklyComparison:
        change = this_week - last_week
        percent_change = (change / last_week) * 100 if last_week > 0 else 0.0
        return WeeklyComparison(
            this_week=this_week,
            last_week=last_week,
            change=change,
            percent_change=float(percent_change),
        )

"""
Urge Analytics Engine
Turns a full (habits, events) snapshot into one immutable AnalyticsSnapshot.

This is the only entry point. Every metric is computed exactly once here and
passed down, so the risk score, trend labels and insights always agree.
Nothing is cached and nothing is written; callers decide when to recompute.
"""
from datetime import datetime
from typing import Iterable, Optional
import logging

from urge_analytics.behavioral.insights_engine import InsightContext, InsightGenerator
from urge_analytics.helpers.metric_helpers import compute_mean, compute_success_rate
from urge_analytics.models import AnalyticsSnapshot, Habit, UrgeEvent
from urge_analytics.services.forecast_service import Predictor
from urge_analytics.services.pattern_service import PatternAnalyzer
from urge_analytics.services.risk_service import FactorIdentifier, RiskScorer
from urge_analytics.services.streak_service import StreakCalculator
from urge_analytics.services.trend_service import TrendClassifier
from urge_analytics.utils.constants import IMPROVEMENT_RECENT_EVENTS
from urge_analytics.utils.logging_utils import log_function_call, log_with_context, with_analysis_id
from urge_analytics.utils.time_utils import TimeWindowFilter, reference_now, sort_chronologically

logger = logging.getLogger(__name__)


class AnalyticsFacade:
    """
    Orchestrates the analytics pipeline over one input snapshot.

    Stateless: holds no fields and never mutates its inputs, so concurrent
    calls need no locking.

    Example usage:
        snapshot = AnalyticsFacade.calculate(habits, events)
        print(snapshot.risk_score, snapshot.recommendations)
    """

    @staticmethod
    @with_analysis_id
    @log_function_call()
    def calculate(habits: Iterable[Habit], events: Iterable[UrgeEvent],
                  now: Optional[datetime] = None) -> AnalyticsSnapshot:
        """
        Compute every metric for the given habits and urge events.

        Args:
            habits: All habits, already validated
            events: All urge events, in any order
            now: Reference instant for windows and predictions. Defaults to
                the current time (see time_utils.reference_now).

        Returns:
            AnalyticsSnapshot
        """
        habits = list(habits)
        events = list(events)
        if now is None:
            now = reference_now(events)

        snapshot = AnalyticsFacade._build_snapshot(habits, events, now)
        log_with_context(
            'debug', 'Analytics snapshot computed',
            habit_count=len(habits),
            event_count=len(events),
            risk_score=round(snapshot.risk_score, 2),
        )
        return snapshot

    @staticmethod
    def _build_snapshot(habits, events, now) -> AnalyticsSnapshot:
        windows = TimeWindowFilter.split(events, now)
        ordered = sort_chronologically(events)
        total = len(events)

        # Patterns
        peak_hours = PatternAnalyzer.peak_hours(events)
        peak_days = PatternAnalyzer.peak_days(events)
        time_slots = PatternAnalyzer.time_of_day_distribution(events)
        trigger_stats = PatternAnalyzer.aggregate_triggers(events)
        top_triggers = PatternAnalyzer.top_triggers(events)

        # Success metrics
        overall_success_rate = compute_success_rate(events)
        streaks = StreakCalculator.calculate(events)

        # Trends
        frequency_trend = TrendClassifier.frequency_trend(
            total, len(windows.this_week), len(windows.last_week)
        )
        improvement_trend = TrendClassifier.improvement_trend(windows.this_week, windows.last_week)
        weekly_comparison = TrendClassifier.weekly_comparison(
            len(windows.this_week), len(windows.last_week)
        )

        # Scores
        average_intensity = compute_mean([e.intensity for e in events])
        recent_success_rate = compute_success_rate(ordered[-IMPROVEMENT_RECENT_EVENTS:])
        risk = RiskScorer.assess_risk(
            len(windows.this_week), overall_success_rate, average_intensity, habits
        )
        improvement_score = RiskScorer.improvement_score(
            overall_success_rate, frequency_trend, habits, recent_success_rate
        )
        factors = FactorIdentifier.identify(
            len(windows.this_week), overall_success_rate, peak_hours, habits
        )

        # Predictions, projected on the clock of `now`
        if now.tzinfo is None:
            forecast_peaks = peak_hours
        else:
            forecast_peaks = PatternAnalyzer.peak_hours(events, tz=now.tzinfo)
        prediction = Predictor.predict(events, forecast_peaks, now)

        # Insights
        context = InsightContext(
            total_events=total,
            overall_success_rate=overall_success_rate,
            frequency_trend=frequency_trend,
            improvement_trend=improvement_trend,
            habits=habits,
            peak_hours=peak_hours,
            top_triggers=top_triggers,
        )

        return AnalyticsSnapshot(
            computed_at=now,
            total_events=total,
            peak_urge_hours=peak_hours,
            peak_urge_days=peak_days,
            time_of_day_distribution=time_slots,
            urge_frequency_trend=frequency_trend,
            top_triggers=top_triggers,
            trigger_success_rates=PatternAnalyzer.trigger_success_rates(trigger_stats),
            overall_success_rate=overall_success_rate,
            weekly_success_rate=compute_success_rate(windows.this_week),
            monthly_success_rate=compute_success_rate(windows.this_month),
            longest_success_streak=streaks.longest_streak,
            current_success_streak=streaks.current_streak,
            improvement_score=improvement_score,
            improvement_trend=improvement_trend,
            weekly_comparison=weekly_comparison,
            risk_score=risk.score,
            risk_level=risk.level,
            risk_breakdown=risk.breakdown,
            risk_factors=factors.risk_factors,
            protective_factors=factors.protective_factors,
            next_likely_urge_time=prediction.next_likely_urge_time,
            high_risk_periods=prediction.high_risk_periods,
            average_interval_hours=prediction.average_interval_hours,
            insights=InsightGenerator.generate_insights(context),
            recommendations=InsightGenerator.generate_recommendations(context),
        )

    @staticmethod
    def calculate_for_habit(habit: Habit, events: Iterable[UrgeEvent],
                            now: Optional[datetime] = None) -> AnalyticsSnapshot:
        """Same pipeline restricted to one habit and the events logged against it."""
        habit_events = [e for e in events if e.habit_id == habit.habit_id]
        return AnalyticsFacade.calculate([habit], habit_events, now)


calculate_analytics = AnalyticsFacade.calculate
calculate_habit_analytics = AnalyticsFacade.calculate_for_habit

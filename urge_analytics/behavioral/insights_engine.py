"""
Behavioral Insights Engine

Rule-based insights and recommendations for urge tracking.
Turns already-computed metrics into short prioritized messages.

No AI/ML - purely deterministic rules. The engine never recomputes a metric
itself; it reads the same trend and rates every other component used, so its
messages cannot disagree with the scores.
"""
from typing import List, NamedTuple, Optional, Sequence

from urge_analytics.models import (
    FrequencyTrend, Habit, ImprovementTrend, Insight, InsightKind, PeakHour, TriggerStat,
)
from urge_analytics.utils import constants as c


class InsightContext(NamedTuple):
    """Metrics the rules read from."""
    total_events: int
    overall_success_rate: float
    frequency_trend: FrequencyTrend
    improvement_trend: ImprovementTrend
    habits: Sequence[Habit]
    peak_hours: Sequence[PeakHour]
    top_triggers: Sequence[TriggerStat]


# =============================================================================
# RECOMMENDATION TEXT
# =============================================================================

GENERAL_RECOMMENDATIONS = [
    'Share your progress with an accountability partner for extra support.',
    'Review your urge log weekly to spot new patterns early.',
]

COPING_RECOMMENDATION = 'Try the breathing exercises or games when you feel an urge coming.'
CONSISTENCY_RECOMMENDATION = 'Focus on building consistency. Check in daily to strengthen your streak.'


class InsightGenerator:
    """
    Generates insights and recommendations from computed metrics.

    Example usage:
        context = InsightContext(...)
        for insight in InsightGenerator.generate_insights(context):
            print(f"{insight.title}: {insight.message}")
    """

    @staticmethod
    def generate_insights(context: InsightContext) -> List[Insight]:
        """
        Run every insight rule.

        Returns:
            List of Insight objects, sorted by priority (lowest first). Rules
            of equal priority keep their evaluation order.
        """
        insights: List[Insight] = []

        success = InsightGenerator._check_success_rate(context)
        if success:
            insights.append(success)

        insights.extend(InsightGenerator._check_frequency_trend(context))
        insights.extend(InsightGenerator._check_improvement_trend(context))
        insights.extend(InsightGenerator._check_streaks(context))

        insights.sort(key=lambda insight: insight.priority)
        return insights

    @staticmethod
    def _check_success_rate(context: InsightContext) -> Optional[Insight]:
        if context.overall_success_rate <= c.HIGH_SUCCESS_RATE_ABOVE:
            return None
        return Insight(
            insight_id='excellent-control',
            kind=InsightKind.SUCCESS,
            title='Excellent Control',
            message=f"You're overcoming {context.overall_success_rate:.0f}% of urges! Keep it up!",
            icon='🎉',
            priority=1,
        )

    @staticmethod
    def _check_frequency_trend(context: InsightContext) -> List[Insight]:
        if context.frequency_trend == FrequencyTrend.DECREASING:
            return [Insight(
                insight_id='positive-trend',
                kind=InsightKind.SUCCESS,
                title='Positive Trend',
                message='Your urges are decreasing over time. Great progress!',
                icon='📈',
                priority=2,
            )]
        if context.frequency_trend == FrequencyTrend.INCREASING:
            return [Insight(
                insight_id='increased-activity',
                kind=InsightKind.WARNING,
                title='Increased Activity',
                message='Your urges are increasing. Consider reviewing your triggers.',
                icon='⚠️',
                priority=1,
            )]
        return []

    @staticmethod
    def _check_improvement_trend(context: InsightContext) -> List[Insight]:
        if context.improvement_trend == ImprovementTrend.IMPROVING:
            return [Insight(
                insight_id='improving-control',
                kind=InsightKind.SUCCESS,
                title='Improving Control',
                message="You're overcoming more urges this week than last week.",
                icon='💪',
                priority=3,
            )]
        if context.improvement_trend == ImprovementTrend.DECLINING:
            return [Insight(
                insight_id='recent-struggles',
                kind=InsightKind.WARNING,
                title='Recent Struggles',
                message='Fewer urges were overcome this week than last. Reinforce your strategies.',
                icon='🧭',
                priority=2,
            )]
        return []

    @staticmethod
    def _check_streaks(context: InsightContext) -> List[Insight]:
        return [
            Insight(
                insight_id=f'streak-{habit.habit_id}',
                kind=InsightKind.ACHIEVEMENT,
                title='Strong Streak',
                message=f'{habit.current_streak} days clean from {habit.display_name}!',
                icon='🔥',
                priority=2,
            )
            for habit in context.habits
            if habit.current_streak > c.STRONG_STREAK_DAYS_ABOVE
        ]

    # =========================================================================
    # Recommendations
    # =========================================================================

    @staticmethod
    def generate_recommendations(context: InsightContext) -> List[str]:
        """
        One recommendation per topic, then the general ones, capped at
        MAX_RECOMMENDATIONS.
        """
        recommendations: List[str] = []

        if context.peak_hours:
            recommendations.append(
                f'Plan activities during your peak urge time '
                f'({context.peak_hours[0].hour:02d}:00) to stay distracted.'
            )

        if context.top_triggers and context.top_triggers[0].success_rate < c.TRIGGER_STRUGGLE_RATE_BELOW:
            recommendations.append(
                f'Work on avoiding or managing "{context.top_triggers[0].trigger}" '
                f'- your most challenging trigger.'
            )

        if context.total_events > 0 and context.overall_success_rate < c.LOW_SUCCESS_RATE_BELOW:
            recommendations.append(COPING_RECOMMENDATION)

        if any(h.current_streak < c.CONSISTENCY_STREAK_DAYS_BELOW for h in context.habits):
            recommendations.append(CONSISTENCY_RECOMMENDATION)

        recommendations.extend(GENERAL_RECOMMENDATIONS)
        return recommendations[:c.MAX_RECOMMENDATIONS]

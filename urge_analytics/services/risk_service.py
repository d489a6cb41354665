"""
Risk Service

Composite risk and improvement scores plus the qualitative factors behind
them. Both scores are sums of independently capped sub-terms, clamped to
[0, 100] at the end.

Formulas:
    risk        = min(30, recent_7d_count * 4)
                + (100 - success_rate) * 0.3
                + avg_intensity * 6
                + max(0, 20 - avg_current_streak)

    improvement = 50
                + success_rate / 100 * 30
                + trend_bonus (20 decreasing / 10 stable / 0 increasing)
                + min(20, total_current_streak / 5)
                + recent_10_success_rate / 100 * 30

The improvement weights add up to more than 100; scores saturate at the
clamp rather than being renormalized.
"""
from typing import Dict, List, NamedTuple, Sequence
import logging

from urge_analytics.helpers.metric_helpers import clamp_score, compute_mean
from urge_analytics.models import FrequencyTrend, Habit, PeakHour, RiskLevel
from urge_analytics.utils import constants as c

logger = logging.getLogger(__name__)


class RiskAssessment(NamedTuple):
    score: float
    level: RiskLevel
    breakdown: Dict[str, float]


class FactorResult(NamedTuple):
    risk_factors: List[str]
    protective_factors: List[str]


class RiskScorer:
    """Weighted, capped composite scores. No learned weights."""

    @staticmethod
    def risk_breakdown(recent_count: int, overall_success_rate: float,
                       average_intensity: float, habits: Sequence[Habit]) -> Dict[str, float]:
        """
        Contribution of each risk sub-term.

        Without habits the streak term is 0, not a division error.
        """
        if habits:
            average_streak = compute_mean([h.current_streak for h in habits])
            streak_term = max(0.0, c.RISK_STREAK_BASELINE - average_streak)
        else:
            streak_term = 0.0

        return {
            'recent_frequency': float(min(c.RISK_RECENT_EVENT_CAP, recent_count * c.RISK_RECENT_EVENT_WEIGHT)),
            'success_rate': float((100 - overall_success_rate) * c.RISK_FAILURE_RATE_WEIGHT),
            'intensity': float(average_intensity * c.RISK_INTENSITY_WEIGHT),
            'streak_health': float(streak_term),
        }

    @staticmethod
    def risk_level(score: float) -> RiskLevel:
        if score > c.RISK_LEVEL_HIGH_ABOVE:
            return RiskLevel.HIGH
        if score > c.RISK_LEVEL_MEDIUM_ABOVE:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    @staticmethod
    def assess_risk(recent_count: int, overall_success_rate: float,
                    average_intensity: float, habits: Sequence[Habit]) -> RiskAssessment:
        breakdown = RiskScorer.risk_breakdown(
            recent_count, overall_success_rate, average_intensity, habits
        )
        score = clamp_score(sum(breakdown.values()))
        return RiskAssessment(score=score, level=RiskScorer.risk_level(score), breakdown=breakdown)

    @staticmethod
    def improvement_score(overall_success_rate: float, frequency_trend: FrequencyTrend,
                          habits: Sequence[Habit], recent_success_rate: float) -> float:
        score = float(c.IMPROVEMENT_BASELINE)
        score += (overall_success_rate / 100) * c.IMPROVEMENT_SUCCESS_WEIGHT
        score += c.IMPROVEMENT_TREND_BONUS[frequency_trend.value]

        total_streak = sum(h.current_streak for h in habits)
        score += min(c.IMPROVEMENT_STREAK_CAP, total_streak / c.IMPROVEMENT_STREAK_DIVISOR)

        score += (recent_success_rate / 100) * c.IMPROVEMENT_RECENT_WEIGHT
        return clamp_score(score)


def _days(count: int) -> str:
    return f'{count} day' if count == 1 else f'{count} days'


class FactorIdentifier:
    """
    Human-readable risk and protective factors.

    Each check is independent, so one input can yield several factors.
    """

    @staticmethod
    def identify(recent_count: int, overall_success_rate: float,
                 peak_hours: Sequence[PeakHour], habits: Sequence[Habit]) -> FactorResult:
        risk_factors: List[str] = []
        protective_factors: List[str] = []

        if recent_count > c.HIGH_WEEKLY_FREQUENCY_ABOVE:
            risk_factors.append('High urge frequency this week')

        if overall_success_rate < c.LOW_SUCCESS_RATE_BELOW:
            risk_factors.append('Low success rate in overcoming urges')
        elif overall_success_rate > c.HIGH_SUCCESS_RATE_ABOVE:
            protective_factors.append('High success rate in overcoming urges')

        if peak_hours and peak_hours[0].count > c.PEAK_HOUR_SIGNIFICANT_ABOVE:
            risk_factors.append(f'Peak urge time identified: {peak_hours[0].hour:02d}:00')

        for habit in habits:
            if habit.current_streak > c.STRONG_STREAK_DAYS_ABOVE:
                protective_factors.append(
                    f'Strong {habit.display_name} streak ({_days(habit.current_streak)})'
                )
            elif habit.current_streak < c.WEAK_STREAK_DAYS_BELOW:
                risk_factors.append(
                    f'Weak {habit.display_name} streak ({_days(habit.current_streak)})'
                )

        return FactorResult(risk_factors=risk_factors, protective_factors=protective_factors)

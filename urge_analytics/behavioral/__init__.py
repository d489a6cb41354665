"""
Behavioral Insights Engine Package

Rule-based insights and recommendations derived from computed urge metrics.

No AI/ML - purely deterministic rules.
"""
from urge_analytics.behavioral.insights_engine import (
    InsightGenerator,
    InsightContext,
    GENERAL_RECOMMENDATIONS,
)

__all__ = [
    'InsightGenerator',
    'InsightContext',
    'GENERAL_RECOMMENDATIONS',
]

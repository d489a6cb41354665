"""
Urge Analytics.

Behavioral analytics and risk scoring for logged urges against habits being
abstained from. Entry point: calculate_analytics(habits, events, now=None).
"""
from urge_analytics.analytics import (
    AnalyticsFacade,
    calculate_analytics,
    calculate_habit_analytics,
)
from urge_analytics.models import AnalyticsSnapshot, Habit, UrgeEvent
from urge_analytics.schemas import load_events, load_habits

__version__ = '1.0.0'

__all__ = [
    'AnalyticsFacade',
    'AnalyticsSnapshot',
    'Habit',
    'UrgeEvent',
    'calculate_analytics',
    'calculate_habit_analytics',
    'load_events',
    'load_habits',
]

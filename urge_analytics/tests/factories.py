"""
Test factories for creating habit and urge event records.

Usage:
    from urge_analytics.tests.factories import HabitFactory, UrgeEventFactory

    habit = HabitFactory.create(current_streak=12)
    event = UrgeEventFactory.create(timestamp=now, overcome=False)
"""
from datetime import datetime, timedelta
from typing import List, Sequence

from urge_analytics.models import Habit, HabitCategory, Severity, UrgeEvent

# Wednesday afternoon; every relative timestamp in the suite hangs off this
REFERENCE_NOW = datetime(2025, 6, 18, 15, 30)


class HabitFactory:
    """Factory for creating test habits."""

    counter = 0

    @classmethod
    def create(cls, **kwargs) -> Habit:
        cls.counter += 1
        defaults = {
            'habit_id': f'habit-{cls.counter}',
            'category': HabitCategory.SMOKING,
            'quit_date': REFERENCE_NOW - timedelta(days=10),
            'current_streak': 10,
            'longest_streak': 10,
            'total_relapses': 0,
            'severity': Severity.MODERATE,
        }
        defaults.update(kwargs)
        return Habit(**defaults)


class UrgeEventFactory:
    """Factory for creating test urge events."""

    counter = 0

    @classmethod
    def create(cls, **kwargs) -> UrgeEvent:
        cls.counter += 1
        defaults = {
            'event_id': f'urge-{cls.counter}',
            'habit_id': 'habit-1',
            'timestamp': REFERENCE_NOW - timedelta(hours=1),
            'intensity': 5,
            'overcome': True,
        }
        defaults.update(kwargs)
        return UrgeEvent(**defaults)


def create_event_series(outcomes: Sequence[bool], start: datetime = None,
                        spacing: timedelta = timedelta(hours=3), **kwargs) -> List[UrgeEvent]:
    """
    Events with the given outcomes, one per `spacing`, oldest first.

    Defaults to a series that ends shortly before REFERENCE_NOW.
    """
    if start is None:
        start = REFERENCE_NOW - spacing * len(outcomes)
    return [
        UrgeEventFactory.create(timestamp=start + spacing * i, overcome=outcome, **kwargs)
        for i, outcome in enumerate(outcomes)
    ]


def days_ago(days: float, hour: int = None) -> datetime:
    """Timestamp `days` before REFERENCE_NOW, optionally pinned to an hour."""
    ts = REFERENCE_NOW - timedelta(days=days)
    if hour is not None:
        ts = ts.replace(hour=hour, minute=0)
    return ts

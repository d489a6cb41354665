"""
Pytest configuration and fixtures for the analytics engine tests.

This module provides reusable fixtures for testing.
"""
import pytest
from datetime import timedelta

from urge_analytics.models import HabitCategory
from urge_analytics.tests.factories import (
    REFERENCE_NOW, HabitFactory, UrgeEventFactory, create_event_series,
)


@pytest.fixture
def now():
    """Returns the fixed reference instant."""
    return REFERENCE_NOW


@pytest.fixture
def habit():
    """Creates a single habit with a moderate streak."""
    return HabitFactory.create(habit_id='habit-1', current_streak=10)


@pytest.fixture
def scenario_habits():
    """Three habits with current streaks of 40, 2 and 0 days."""
    return [
        HabitFactory.create(habit_id='h-strong', category=HabitCategory.ALCOHOL, current_streak=40),
        HabitFactory.create(habit_id='h-weak', category=HabitCategory.GAMING, current_streak=2),
        HabitFactory.create(
            habit_id='h-new', category=HabitCategory.CUSTOM,
            custom_name='Doomscrolling', current_streak=0,
        ),
    ]


@pytest.fixture
def scenario_events(now):
    """
    Ten events spread over the last week; eight overcome.

    Five carry the "stress" trigger and four of those were overcome.
    """
    layout = [
        # (days back, overcome, trigger)
        (0.5, True, 'stress'),
        (1.0, True, 'stress'),
        (1.5, False, 'stress'),
        (2.0, True, 'stress'),
        (2.5, True, 'stress'),
        (3.0, True, 'boredom'),
        (3.5, False, 'boredom'),
        (4.0, True, None),
        (5.0, True, 'loneliness'),
        (6.0, True, None),
    ]
    return [
        UrgeEventFactory.create(
            timestamp=now - timedelta(days=back), overcome=overcome, trigger=trigger,
        )
        for back, overcome, trigger in layout
    ]


@pytest.fixture
def all_overcome_events():
    return create_event_series([True] * 8)


@pytest.fixture
def all_failed_events():
    return create_event_series([False] * 6)

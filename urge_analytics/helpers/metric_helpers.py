"""
Metric helper functions for urge analytics.
Implements streak detection, guarded rates and score clamping.

All statistical methods use pure numpy - NO heavy dependencies.
"""
import numpy as np
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from urge_analytics.models import UrgeEvent
from urge_analytics.utils.constants import DEFAULT_SUCCESS_RATE, SCORE_MAX, SCORE_MIN


def detect_streaks_numpy(outcomes: Sequence[bool]) -> Dict[str, int]:
    """
    Detects current and longest runs of True using NumPy run-length encoding.

    Args:
        outcomes: Booleans in chronological order, True = overcome

    Returns:
        {
            'current_streak': int,
            'longest_streak': int,
            'total': int
        }
    """
    if len(outcomes) == 0:
        return {'current_streak': 0, 'longest_streak': 0, 'total': 0}

    completed = np.asarray(outcomes, dtype=bool)

    # Run-length encoding using diff on a False-padded series
    changes = np.diff(np.concatenate(([False], completed, [False])).astype(int))
    run_starts = np.where(changes == 1)[0]
    run_ends = np.where(changes == -1)[0]

    run_lengths = run_ends - run_starts

    longest_streak = int(run_lengths.max()) if len(run_lengths) > 0 else 0

    # Current streak is the last run if it ends at the last element
    current_streak = 0
    if len(run_lengths) > 0 and run_ends[-1] == len(completed):
        current_streak = int(run_lengths[-1])

    return {
        'current_streak': current_streak,
        'longest_streak': longest_streak,
        'total': len(completed)
    }


def compute_success_rate(events: Sequence[UrgeEvent]) -> float:
    """
    Percentage of events that were overcome.

    With no events there are no failures, so the rate is 100.
    """
    if len(events) == 0:
        return DEFAULT_SUCCESS_RATE
    overcome = sum(1 for e in events if e.overcome)
    return clamp_score(overcome * 100 / len(events))


def compute_mean(values: Sequence[float], default: float = 0.0) -> float:
    if len(values) == 0:
        return default
    return float(np.mean(values))


def compute_mean_interval_hours(timestamps: List[datetime]) -> Optional[float]:
    """
    Mean gap between consecutive timestamps, in hours.

    Timestamps must already be sorted and comparable. Returns None when
    fewer than two are given.
    """
    if len(timestamps) < 2:
        return None
    seconds = np.array([(b - a).total_seconds() for a, b in zip(timestamps, timestamps[1:])])
    return float(np.mean(seconds) / 3600)


def clamp_score(value: float, lower: float = SCORE_MIN, upper: float = SCORE_MAX) -> float:
    """Clamp to [lower, upper]; NaN collapses to the lower bound."""
    value = float(value)
    if np.isnan(value):
        return lower
    return float(min(upper, max(lower, value)))

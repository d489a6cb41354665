"""
Pattern Service

Time-of-day, day-of-week and trigger patterns for urge events.
Surfaces patterns like "most urges arrive around 22:00" or
"stress is your most frequent trigger and you beat it 40% of the time".
"""
from datetime import tzinfo
from typing import Dict, List, Optional, Sequence
import logging

import pandas as pd

from urge_analytics.models import PeakDay, PeakHour, TimeSlotCount, TriggerStat, UrgeEvent
from urge_analytics.utils.constants import (
    DAY_NAMES, TIME_SLOTS, TOP_PEAK_HOURS, TOP_TRIGGERS, TRIGGER_SEPARATOR,
)
from urge_analytics.utils.time_utils import as_utc, get_time_slot

logger = logging.getLogger(__name__)


def _day_index(event: UrgeEvent) -> int:
    # Python weekday() is Monday=0; the week here starts on Sunday
    return (event.timestamp.weekday() + 1) % 7


def _ranked_counts(keys: List[int]) -> pd.Series:
    """
    Count occurrences per key, most frequent first.

    groupby sorts keys ascending and mergesort is stable, so ties keep the
    natural key order.
    """
    counts = pd.DataFrame({'key': keys}).groupby('key').size()
    return counts.sort_values(ascending=False, kind='mergesort')


class PatternAnalyzer:
    """
    Builds histograms and trigger statistics from an event list.

    Key capabilities:
    - Hour-of-day peaks (top 5)
    - Day-of-week distribution (every observed day)
    - Part-of-day slot distribution
    - Trigger frequency with per-trigger success rate
    """

    @staticmethod
    def peak_hours(events: Sequence[UrgeEvent], limit: int = TOP_PEAK_HOURS,
                   tz: Optional[tzinfo] = None) -> List[PeakHour]:
        """
        Hours of day (0-23) ranked by urge count.

        Hours are read from each event's own timestamp, or on the clock of
        `tz` when one is given (naive timestamps are taken as UTC then).
        """
        if not events:
            return []
        if tz is None:
            hours = [e.timestamp.hour for e in events]
        else:
            hours = [as_utc(e.timestamp).astimezone(tz).hour for e in events]
        counts = _ranked_counts(hours)
        return [PeakHour(hour=int(hour), count=int(count)) for hour, count in counts.head(limit).items()]

    @staticmethod
    def peak_days(events: Sequence[UrgeEvent]) -> List[PeakDay]:
        """Observed days of week ranked by urge count, Sunday first on ties."""
        if not events:
            return []
        counts = _ranked_counts([_day_index(e) for e in events])
        return [PeakDay(day=DAY_NAMES[int(day)], count=int(count)) for day, count in counts.items()]

    @staticmethod
    def time_of_day_distribution(events: Sequence[UrgeEvent]) -> List[TimeSlotCount]:
        if not events:
            return []
        counts = _ranked_counts([TIME_SLOTS.index(get_time_slot(e.timestamp.hour)) for e in events])
        return [TimeSlotCount(slot=TIME_SLOTS[int(slot)], count=int(count)) for slot, count in counts.items()]

    @staticmethod
    def parse_triggers(raw: Optional[str]) -> List[str]:
        """
        Split a trigger field into distinct tags.

        Tokens are comma-separated and trimmed; empty tokens are dropped and a
        tag repeated within one field is kept once. Case is preserved.
        """
        if not raw:
            return []
        tags = []
        for token in raw.split(TRIGGER_SEPARATOR):
            token = token.strip()
            if token and token not in tags:
                tags.append(token)
        return tags

    @staticmethod
    def aggregate_triggers(events: Sequence[UrgeEvent]) -> List[TriggerStat]:
        """
        Every trigger seen, ranked by count (label ascending on ties).

        Only triggers with at least one event appear, so success_rate always
        has a non-zero denominator.
        """
        rows = [
            {'trigger': tag, 'overcome': bool(event.overcome)}
            for event in events
            for tag in PatternAnalyzer.parse_triggers(event.trigger)
        ]
        if not rows:
            return []

        df = pd.DataFrame(rows)
        stats = df.groupby('trigger').agg(
            count=('overcome', 'size'),
            overcome=('overcome', 'sum'),
        )
        stats['success_rate'] = stats['overcome'] * 100 / stats['count']
        stats = stats.sort_values('count', ascending=False, kind='mergesort')

        return [
            TriggerStat(
                trigger=str(trigger),
                count=int(row['count']),
                success_rate=float(row['success_rate']),
            )
            for trigger, row in stats.iterrows()
        ]

    @staticmethod
    def top_triggers(events: Sequence[UrgeEvent], limit: int = TOP_TRIGGERS) -> List[TriggerStat]:
        return PatternAnalyzer.aggregate_triggers(events)[:limit]

    @staticmethod
    def trigger_success_rates(trigger_stats: Sequence[TriggerStat]) -> Dict[str, float]:
        return {stat.trigger: stat.success_rate for stat in trigger_stats}

"""
Marshmallow schemas for the engine boundary.

Raw records coming from the tracking store are validated and turned into model
instances here, before the engine sees them. The snapshot schema handles the
opposite direction for the rendering layer.
"""
import logging
from typing import Iterable, List

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, validate

from urge_analytics.exceptions import InvalidRecordError
from urge_analytics.models import (
    Habit, HabitCategory, Severity, UrgeEvent,
)

logger = logging.getLogger(__name__)


class HabitSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    habit_id = fields.Str(required=True)
    category = fields.Str(required=True, validate=validate.OneOf([c.value for c in HabitCategory]))
    custom_name = fields.Str(load_default=None, allow_none=True)
    quit_date = fields.DateTime(required=True)
    current_streak = fields.Int(load_default=0, validate=validate.Range(min=0))
    longest_streak = fields.Int(load_default=0, validate=validate.Range(min=0))
    total_relapses = fields.Int(load_default=0, validate=validate.Range(min=0))
    severity = fields.Str(load_default="moderate", validate=validate.OneOf([s.value for s in Severity]))

    @post_load
    def make_habit(self, data, **kwargs):
        data['category'] = HabitCategory(data['category'])
        data['severity'] = Severity(data['severity'])
        return Habit(**data)


class UrgeEventSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    event_id = fields.Str(required=True)
    habit_id = fields.Str(required=True)
    timestamp = fields.DateTime(required=True)
    intensity = fields.Int(required=True, validate=validate.Range(min=1, max=10))
    overcome = fields.Bool(required=True)
    trigger = fields.Str(load_default=None, allow_none=True)
    notes = fields.Str(load_default=None, allow_none=True)
    techniques = fields.List(fields.Str(), load_default=list)

    @post_load
    def make_event(self, data, **kwargs):
        data['techniques'] = tuple(data['techniques'])
        return UrgeEvent(**data)


def _load_records(schema: Schema, record_type: str, records: Iterable[dict]) -> List:
    loaded = []
    for index, record in enumerate(records):
        try:
            loaded.append(schema.load(record))
        except ValidationError as e:
            logger.warning(f"Rejected {record_type} record {index}: {e.messages}")
            raise InvalidRecordError(record_type, index, e.messages) from e
    return loaded


def load_habits(records: Iterable[dict]) -> List[Habit]:
    """Validate raw habit dicts and build Habit instances."""
    return _load_records(HabitSchema(), 'habit', records)


def load_events(records: Iterable[dict]) -> List[UrgeEvent]:
    """Validate raw urge event dicts and build UrgeEvent instances."""
    return _load_records(UrgeEventSchema(), 'urge event', records)


# =============================================================================
# SNAPSHOT SERIALIZATION
# =============================================================================

class PeakHourSchema(Schema):
    hour = fields.Int()
    count = fields.Int()


class PeakDaySchema(Schema):
    day = fields.Str()
    count = fields.Int()


class TimeSlotCountSchema(Schema):
    slot = fields.Str()
    count = fields.Int()


class TriggerStatSchema(Schema):
    trigger = fields.Str()
    count = fields.Int()
    success_rate = fields.Float()


class WeeklyComparisonSchema(Schema):
    this_week = fields.Int()
    last_week = fields.Int()
    change = fields.Int()
    percent_change = fields.Float()


class RiskPeriodSchema(Schema):
    start = fields.DateTime()
    end = fields.DateTime()


class InsightSchema(Schema):
    insight_id = fields.Str()
    kind = fields.Function(lambda insight: insight.kind.value)
    title = fields.Str()
    message = fields.Str()
    icon = fields.Str()
    priority = fields.Int()


class AnalyticsSnapshotSchema(Schema):
    computed_at = fields.DateTime()
    total_events = fields.Int()

    peak_urge_hours = fields.List(fields.Nested(PeakHourSchema))
    peak_urge_days = fields.List(fields.Nested(PeakDaySchema))
    time_of_day_distribution = fields.List(fields.Nested(TimeSlotCountSchema))
    urge_frequency_trend = fields.Function(lambda snap: snap.urge_frequency_trend.value)

    top_triggers = fields.List(fields.Nested(TriggerStatSchema))
    trigger_success_rates = fields.Dict(keys=fields.Str(), values=fields.Float())

    overall_success_rate = fields.Float()
    weekly_success_rate = fields.Float()
    monthly_success_rate = fields.Float()
    longest_success_streak = fields.Int()
    current_success_streak = fields.Int()

    improvement_score = fields.Float()
    improvement_trend = fields.Function(lambda snap: snap.improvement_trend.value)
    weekly_comparison = fields.Nested(WeeklyComparisonSchema)

    risk_score = fields.Float()
    risk_level = fields.Function(lambda snap: snap.risk_level.value)
    risk_breakdown = fields.Dict(keys=fields.Str(), values=fields.Float())
    risk_factors = fields.List(fields.Str())
    protective_factors = fields.List(fields.Str())

    next_likely_urge_time = fields.DateTime(allow_none=True)
    high_risk_periods = fields.List(fields.Nested(RiskPeriodSchema))
    average_interval_hours = fields.Float(allow_none=True)

    insights = fields.List(fields.Nested(InsightSchema))
    recommendations = fields.List(fields.Str())

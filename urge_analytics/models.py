"""
Value types shared across the analytics engine.

Inputs (Habit, UrgeEvent) are owned by the external tracking store and are
only ever read here. The output (AnalyticsSnapshot) is a pure value built fresh
on every invocation.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple


class HabitCategory(str, Enum):
    """Predefined habit categories"""
    PORNOGRAPHY = "pornography"
    SMOKING = "smoking"
    ALCOHOL = "alcohol"
    GAMING = "gaming"
    SOCIAL_MEDIA = "social_media"
    JUNK_FOOD = "junk_food"
    GAMBLING = "gambling"
    SHOPPING = "shopping"
    PROCRASTINATION = "procrastination"
    CUSTOM = "custom"


class Severity(str, Enum):
    """User-assessed habit severity"""
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class FrequencyTrend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class ImprovementTrend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class InsightKind(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"
    ACHIEVEMENT = "achievement"


# =============================================================================
# INPUT RECORDS
# =============================================================================

@dataclass(frozen=True)
class Habit:
    """
    A tracked behavior the user is abstaining from.

    Attributes:
        habit_id: Unique habit ID
        category: Predefined category, or CUSTOM
        quit_date: When the current streak began
        current_streak: Current streak in days
        longest_streak: Longest streak in days
        total_relapses: Number of logged relapses
        severity: User-assessed severity
        custom_name: Display name for custom habits
    """
    habit_id: str
    category: HabitCategory
    quit_date: datetime
    current_streak: int = 0
    longest_streak: int = 0
    total_relapses: int = 0
    severity: Severity = Severity.MODERATE
    custom_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.custom_name or self.category.value


@dataclass(frozen=True)
class UrgeEvent:
    """
    One logged craving.

    `trigger` may hold several comma-separated labels; see
    PatternAnalyzer.parse_triggers for how they are split.
    """
    event_id: str
    habit_id: str
    timestamp: datetime
    intensity: int
    overcome: bool
    trigger: Optional[str] = None
    notes: Optional[str] = None
    techniques: Tuple[str, ...] = ()


# =============================================================================
# DERIVED VALUES
# =============================================================================

@dataclass(frozen=True)
class PeakHour:
    hour: int
    count: int


@dataclass(frozen=True)
class PeakDay:
    day: str
    count: int


@dataclass(frozen=True)
class TimeSlotCount:
    slot: str
    count: int


@dataclass(frozen=True)
class TriggerStat:
    trigger: str
    count: int
    success_rate: float


@dataclass(frozen=True)
class WeeklyComparison:
    this_week: int
    last_week: int
    change: int
    percent_change: float


@dataclass(frozen=True)
class RiskPeriod:
    start: datetime
    end: datetime


@dataclass(frozen=True)
class Insight:
    """
    A short user-facing observation.

    Lower priority numbers are shown first.
    """
    insight_id: str
    kind: InsightKind
    title: str
    message: str
    icon: str
    priority: int


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """
    Everything the engine derives from one (habits, events) snapshot.

    All rates and scores are within [0, 100].
    """
    computed_at: datetime
    total_events: int

    # Time-based patterns
    peak_urge_hours: List[PeakHour]
    peak_urge_days: List[PeakDay]
    time_of_day_distribution: List[TimeSlotCount]
    urge_frequency_trend: FrequencyTrend

    # Trigger analysis
    top_triggers: List[TriggerStat]
    trigger_success_rates: Dict[str, float]

    # Success metrics
    overall_success_rate: float
    weekly_success_rate: float
    monthly_success_rate: float
    longest_success_streak: int
    current_success_streak: int

    # Improvement tracking
    improvement_score: float
    improvement_trend: ImprovementTrend
    weekly_comparison: WeeklyComparison

    # Risk assessment
    risk_score: float
    risk_level: RiskLevel
    risk_breakdown: Dict[str, float]
    risk_factors: List[str]
    protective_factors: List[str]

    # Predictions
    next_likely_urge_time: Optional[datetime]
    high_risk_periods: List[RiskPeriod]
    average_interval_hours: Optional[float]

    # Insights
    insights: List[Insight] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """JSON-ready representation for the rendering layer."""
        from urge_analytics.schemas import AnalyticsSnapshotSchema
        return AnalyticsSnapshotSchema().dump(self)

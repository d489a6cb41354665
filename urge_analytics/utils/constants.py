# urge_analytics/utils/constants.py
"""
Central tuning constants for the analytics engine.
Every threshold and weight used by the scoring and classification rules lives
here so the rules read by name instead of by magic number.
"""

# ============================================
# TIME WINDOWS (days back from the reference instant)
# ============================================
WEEK_WINDOW_DAYS = 7
PREVIOUS_WEEK_WINDOW_DAYS = 14
MONTH_WINDOW_DAYS = 30

# ============================================
# PATTERN ANALYSIS
# ============================================
TOP_PEAK_HOURS = 5
TOP_TRIGGERS = 5
TRIGGER_SEPARATOR = ','

# Week starts on Sunday for display and tie-breaking
DAY_NAMES = [
    'Sunday',
    'Monday',
    'Tuesday',
    'Wednesday',
    'Thursday',
    'Friday',
    'Saturday',
]

TIME_SLOT_MORNING = 'Morning (5am-12pm)'
TIME_SLOT_AFTERNOON = 'Afternoon (12pm-5pm)'
TIME_SLOT_EVENING = 'Evening (5pm-9pm)'
TIME_SLOT_NIGHT = 'Night (9pm-5am)'

TIME_SLOTS = [
    TIME_SLOT_MORNING,
    TIME_SLOT_AFTERNOON,
    TIME_SLOT_EVENING,
    TIME_SLOT_NIGHT,
]

# ============================================
# TREND CLASSIFICATION
# ============================================
MIN_EVENTS_FOR_FREQUENCY_TREND = 14
FREQUENCY_INCREASE_RATIO = 1.2
FREQUENCY_DECREASE_RATIO = 0.8
IMPROVEMENT_TREND_MARGIN = 10.0

# ============================================
# RISK SCORE WEIGHTS
# ============================================
RISK_RECENT_EVENT_WEIGHT = 4
RISK_RECENT_EVENT_CAP = 30
RISK_FAILURE_RATE_WEIGHT = 0.3
RISK_INTENSITY_WEIGHT = 6
RISK_STREAK_BASELINE = 20

RISK_LEVEL_HIGH_ABOVE = 70
RISK_LEVEL_MEDIUM_ABOVE = 40

# ============================================
# IMPROVEMENT SCORE WEIGHTS
# ============================================
IMPROVEMENT_BASELINE = 50
IMPROVEMENT_SUCCESS_WEIGHT = 30
IMPROVEMENT_TREND_BONUS = {
    'decreasing': 20,
    'stable': 10,
    'increasing': 0,
}
IMPROVEMENT_STREAK_DIVISOR = 5
IMPROVEMENT_STREAK_CAP = 20
IMPROVEMENT_RECENT_EVENTS = 10
IMPROVEMENT_RECENT_WEIGHT = 30

# ============================================
# FACTOR / INSIGHT THRESHOLDS
# ============================================
HIGH_WEEKLY_FREQUENCY_ABOVE = 5
LOW_SUCCESS_RATE_BELOW = 50
HIGH_SUCCESS_RATE_ABOVE = 80
PEAK_HOUR_SIGNIFICANT_ABOVE = 3
STRONG_STREAK_DAYS_ABOVE = 30
WEAK_STREAK_DAYS_BELOW = 3
CONSISTENCY_STREAK_DAYS_BELOW = 7
TRIGGER_STRUGGLE_RATE_BELOW = 50

# ============================================
# PREDICTION
# ============================================
MIN_EVENTS_FOR_PREDICTION = 5
HIGH_RISK_PERIOD_COUNT = 3
HIGH_RISK_PERIOD_HOURS = 2

# ============================================
# SCORE BOUNDS
# ============================================
SCORE_MIN = 0.0
SCORE_MAX = 100.0
DEFAULT_SUCCESS_RATE = 100.0
MAX_RECOMMENDATIONS = 5

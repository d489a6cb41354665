"""
Runtime settings for the analytics engine.

Values are read once from the environment at import time. Tuning thresholds
are not settings; see urge_analytics.utils.constants.
"""
import os

LOG_LEVEL = os.environ.get('URGE_ANALYTICS_LOG_LEVEL', 'WARNING').upper()

# 'json' for StructuredFormatter output, 'plain' for the stdlib format
LOG_FORMAT = os.environ.get('URGE_ANALYTICS_LOG_FORMAT', 'json').lower()

# IANA name used for "now" when the caller omits it and events are tz-aware
DEFAULT_TIMEZONE = os.environ.get('URGE_ANALYTICS_TIMEZONE', 'UTC')

"""
Helpers package for Urge Analytics.

Helper functions for specific domains:
- metric_helpers: Streaks, guarded rates and score clamping
"""

"""
Utilities package for Urge Analytics.

Common utility functions:
- time_utils: Reference instant and relative time windows
- constants: Tuning thresholds and weights
- logging_utils: Structured logging and timing
"""

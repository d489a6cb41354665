"""
Services package for Urge Analytics.

Stateless analysis services, leaf-first:
- pattern_service: Peak hours/days, time-of-day slots, trigger statistics
- streak_service: Success streaks over the event log
- trend_service: Frequency and improvement trends, weekly comparison
- risk_service: Risk and improvement scores, risk/protective factors
- forecast_service: Next likely urge and high-risk windows
"""

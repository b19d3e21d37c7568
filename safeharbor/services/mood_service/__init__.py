"""Mood Service: risk trends from mood-log history.

Independent of the questionnaire pipeline. Its warning signals can feed
the prevention plan generator as risk factors.

Usage:
    from safeharbor.services.mood_service import analyze_mood_risk
    trend = analyze_mood_risk(entries, window_days=7)
"""

from .analyzer import analyze_mood_risk, filter_window, mood_decline
from .config import MoodAnalysisConfig, NO_DATA_SIGNAL

__all__ = [
    "analyze_mood_risk",
    "filter_window",
    "mood_decline",
    "MoodAnalysisConfig",
    "NO_DATA_SIGNAL",
]

"""Mood-history analysis thresholds."""
from dataclasses import dataclass


@dataclass(frozen=True)
class MoodAnalysisConfig:
    """Thresholds for mood-history warning signals.

    Mood is on a 1-10 scale; stress, anxiety and social interaction on
    0-10; sleep in hours.
    """
    window_days: int = 7

    # Trend detection needs at least this many entries in the window
    min_entries_for_trend: int = 3
    decline_delta: float = 1.5
    rapid_decline_delta: float = 3.0

    low_mood_max: float = 3.0
    high_stress_min: float = 7.0
    high_anxiety_min: float = 7.0
    isolation_max: float = 2.0
    sleep_disruption_below: float = 5.0

    positive_mood_min: float = 7.0

    def __post_init__(self):
        if self.window_days <= 0:
            raise ValueError(f"Window must be positive, got {self.window_days} days")


NO_DATA_SIGNAL = "No recent mood data available"
DECLINE_SIGNAL = "Significant mood decline detected"
RAPID_DECLINE_SIGNAL = "Rapid mood deterioration"
LOW_MOOD_SIGNAL = "Persistently low mood"
HIGH_STRESS_SIGNAL = "High stress levels"
HIGH_ANXIETY_SIGNAL = "High anxiety levels"
ISOLATION_SIGNAL = "Social isolation detected"
SLEEP_SIGNAL = "Severe sleep disruption"

DECLINING_TREND = "declining"
POSITIVE_MOOD_TREND = "positive mood"
EXERCISE_TREND = "regular exercise"

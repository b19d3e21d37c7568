"""Mood-history risk analyzer.

Scans a rolling window of mood-log entries for decline trends,
sustained negative states, isolation and sleep disruption. Independent
of the questionnaire pipeline.
"""
import statistics
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, List, Optional, Sequence, Union

from safeharbor.shared.exceptions import InvalidMoodEntry, ResponseTypeError
from safeharbor.shared.models import (
    MoodEntry,
    RiskTrendLevel,
    RiskTrendResult,
    parse_timestamp,
)
from .config import (
    DECLINE_SIGNAL,
    DECLINING_TREND,
    EXERCISE_TREND,
    HIGH_ANXIETY_SIGNAL,
    HIGH_STRESS_SIGNAL,
    ISOLATION_SIGNAL,
    LOW_MOOD_SIGNAL,
    NO_DATA_SIGNAL,
    POSITIVE_MOOD_TREND,
    RAPID_DECLINE_SIGNAL,
    SLEEP_SIGNAL,
    MoodAnalysisConfig,
)

EntryLike = Union[MoodEntry, dict]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _coerce_entries(entries: Iterable[EntryLike]) -> List[MoodEntry]:
    if entries is None:
        return []
    if isinstance(entries, (str, bytes, dict)):
        raise ResponseTypeError("entries", entries, "list of mood entries")
    coerced = []
    for entry in entries:
        if isinstance(entry, MoodEntry):
            coerced.append(entry)
        elif isinstance(entry, dict):
            coerced.append(MoodEntry.from_dict(entry))
        else:
            raise ResponseTypeError("entries", entry, "mood entry")
    return coerced


def filter_window(
    entries: Sequence[MoodEntry],
    window_days: int,
    reference_time: datetime,
) -> List[MoodEntry]:
    """Entries within [reference_time - window_days, reference_time],
    in chronological order. Future-dated entries are excluded."""
    cutoff = reference_time - timedelta(days=window_days)
    recent = [e for e in entries if cutoff <= e.timestamp <= reference_time]
    return sorted(recent, key=lambda e: e.timestamp)


def mood_decline(entries: Sequence[MoodEntry]) -> float:
    """First-half mean mood minus second-half mean mood.

    Entries must be chronological. The first half holds floor(n/2)
    entries; positive values mean mood went down.
    """
    midpoint = len(entries) // 2
    first_half = [e.mood_score for e in entries[:midpoint]]
    second_half = [e.mood_score for e in entries[midpoint:]]
    if not first_half or not second_half:
        return 0.0
    return statistics.mean(first_half) - statistics.mean(second_half)


def _mean_reported(values: Iterable[Optional[float]]) -> Optional[float]:
    reported = [v for v in values if v is not None]
    if not reported:
        return None
    return statistics.mean(reported)


def analyze_mood_risk(
    entries: Iterable[EntryLike],
    window_days: Optional[int] = None,
    reference_time: Optional[Any] = None,
    config: Optional[MoodAnalysisConfig] = None,
) -> RiskTrendResult:
    """Derive a coarse risk trend from recent mood history.

    Args:
        entries: Mood entries (MoodEntry or API dicts), any order
        window_days: Lookback window in days; defaults to config.window_days
        reference_time: End of the window; defaults to now (UTC)
        config: Signal thresholds

    Returns:
        RiskTrendResult. An empty window yields LOW with an
        explanatory signal rather than an error.

    Raises:
        ResponseTypeError / InvalidMoodEntry: On malformed input fields
    """
    config = config or MoodAnalysisConfig()
    if window_days is None:
        window_days = config.window_days
    if isinstance(window_days, bool) or not isinstance(window_days, int):
        raise ResponseTypeError("window_days", window_days, "int")
    if window_days <= 0:
        raise InvalidMoodEntry("window_days", f"must be positive, got {window_days}", window_days)

    now = _utcnow() if reference_time is None else parse_timestamp(reference_time, "reference_time")
    recent = filter_window(_coerce_entries(entries), window_days, now)

    if not recent:
        return RiskTrendResult(
            risk_level=RiskTrendLevel.LOW,
            warning_signals=[NO_DATA_SIGNAL],
            trends=[],
            entries_analyzed=0,
        )

    warning_signals: List[str] = []
    trends: List[str] = []

    avg_mood = statistics.mean(e.mood_score for e in recent)
    # Missing stress/anxiety readings count as zero
    avg_stress = statistics.mean(e.stress_level or 0 for e in recent)
    avg_anxiety = statistics.mean(e.anxiety_level or 0 for e in recent)

    if len(recent) >= config.min_entries_for_trend:
        decline = mood_decline(recent)
        if decline > config.decline_delta:
            warning_signals.append(DECLINE_SIGNAL)
            trends.append(DECLINING_TREND)
        if decline > config.rapid_decline_delta:
            warning_signals.append(RAPID_DECLINE_SIGNAL)

    if avg_mood <= config.low_mood_max:
        warning_signals.append(LOW_MOOD_SIGNAL)
    if avg_stress >= config.high_stress_min:
        warning_signals.append(HIGH_STRESS_SIGNAL)
    if avg_anxiety >= config.high_anxiety_min:
        warning_signals.append(HIGH_ANXIETY_SIGNAL)

    avg_social = _mean_reported(e.social_interaction_score for e in recent)
    if avg_social is not None and avg_social <= config.isolation_max:
        warning_signals.append(ISOLATION_SIGNAL)

    avg_sleep = _mean_reported(e.sleep_hours for e in recent)
    if avg_sleep is not None and avg_sleep < config.sleep_disruption_below:
        warning_signals.append(SLEEP_SIGNAL)

    if avg_mood >= config.positive_mood_min:
        trends.append(POSITIVE_MOOD_TREND)
    if any(e.exercise for e in recent):
        trends.append(EXERCISE_TREND)

    return RiskTrendResult(
        risk_level=RiskTrendLevel.from_signal_count(len(warning_signals)),
        warning_signals=warning_signals,
        trends=trends,
        entries_analyzed=len(recent),
    )

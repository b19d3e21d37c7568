"""Mood history, crisis history and prevention plan models."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from safeharbor.shared.exceptions import InvalidMoodEntry, ResponseTypeError
from .risk import RiskTrendLevel


def parse_timestamp(value: Any, field_name: str = "timestamp") -> datetime:
    """Parse an ISO-8601 string or datetime into a naive UTC datetime.

    Aware datetimes are converted to UTC; naive ones are assumed UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise InvalidMoodEntry(field_name, f"invalid ISO-8601 timestamp {value!r}", value)
    else:
        raise ResponseTypeError(field_name, value, "ISO-8601 string or datetime")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _check_number(name: str, value: Any, low: float, high: float, required: bool = False):
    if value is None:
        if required:
            raise InvalidMoodEntry(name, "required field missing")
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ResponseTypeError(name, value, "number")
    if not low <= value <= high:
        raise InvalidMoodEntry(name, f"value {value!r} outside {low:g}-{high:g}", value)


@dataclass(frozen=True)
class MoodEntry:
    """A single mood-log sample.

    Only timestamp and mood_score are required; the remaining signals are
    optional and analyzed only over entries that report them.
    """
    timestamp: datetime
    mood_score: float                               # 1-10
    stress_level: Optional[float] = None            # 0-10
    anxiety_level: Optional[float] = None           # 0-10
    sleep_hours: Optional[float] = None             # 0-24
    social_interaction_score: Optional[float] = None  # 0-10
    exercise: bool = False

    def __post_init__(self):
        if not isinstance(self.timestamp, datetime):
            raise ResponseTypeError("timestamp", self.timestamp, "datetime")
        # Frozen: normalize to naive UTC so windows compare consistently
        object.__setattr__(self, "timestamp", parse_timestamp(self.timestamp))
        _check_number("mood_score", self.mood_score, 1, 10, required=True)
        _check_number("stress_level", self.stress_level, 0, 10)
        _check_number("anxiety_level", self.anxiety_level, 0, 10)
        _check_number("sleep_hours", self.sleep_hours, 0, 24)
        _check_number("social_interaction_score", self.social_interaction_score, 0, 10)
        if not isinstance(self.exercise, bool):
            raise ResponseTypeError("exercise", self.exercise, "bool")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MoodEntry":
        """Build an entry from an API payload (snake_case keys)."""
        if not isinstance(data, dict):
            raise ResponseTypeError("entry", data, "object")
        if "timestamp" not in data:
            raise InvalidMoodEntry("timestamp", "required field missing")
        return cls(
            timestamp=parse_timestamp(data["timestamp"]),
            mood_score=data.get("mood_score"),
            stress_level=data.get("stress_level"),
            anxiety_level=data.get("anxiety_level"),
            sleep_hours=data.get("sleep_hours"),
            social_interaction_score=data.get("social_interaction_score"),
            exercise=data.get("exercise", False),
        )


@dataclass(frozen=True)
class RiskTrendResult:
    """Risk trend derived from a window of mood entries."""
    risk_level: RiskTrendLevel
    warning_signals: List[str] = field(default_factory=list)
    trends: List[str] = field(default_factory=list)
    entries_analyzed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "risk_level": self.risk_level.value,
            "warning_signals": list(self.warning_signals),
            "trends": list(self.trends),
            "entries_analyzed": self.entries_analyzed,
        }


@dataclass(frozen=True)
class CrisisEvent:
    """A past crisis supplied by the persistence layer."""
    severity: str
    timestamp: datetime
    coping_strategies_used: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CrisisEvent":
        if not isinstance(data, dict):
            raise ResponseTypeError("prior_events", data, "object")
        strategies = data.get("coping_strategies_used", [])
        if not isinstance(strategies, list):
            raise ResponseTypeError("coping_strategies_used", strategies, "list")
        return cls(
            severity=str(data.get("severity", "")),
            timestamp=parse_timestamp(data.get("timestamp"), "prior_events.timestamp"),
            coping_strategies_used=list(strategies),
        )


@dataclass(frozen=True)
class PreventionPlan:
    """Personalized four-part crisis prevention plan."""
    warning_signals: List[str] = field(default_factory=list)
    coping_strategies: List[str] = field(default_factory=list)
    support_contacts: List[str] = field(default_factory=list)
    preventive_actions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "warning_signals": list(self.warning_signals),
            "coping_strategies": list(self.coping_strategies),
            "support_contacts": list(self.support_contacts),
            "preventive_actions": list(self.preventive_actions),
        }

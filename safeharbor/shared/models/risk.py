"""Severity and risk-trend levels.

Both enums are ordered: callers compare tiers directly
(``SeverityLevel.HIGH > SeverityLevel.MEDIUM``) instead of matching strings.
"""
from enum import Enum


class SeverityLevel(Enum):
    """Severity tier produced by a crisis assessment.

    critical and high require immediate intervention; medium needs urgent
    but non-emergency follow-up; low is routine self-care.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)

    @property
    def requires_immediate(self) -> bool:
        """True for the tiers that trigger emergency workflows."""
        return self in (SeverityLevel.HIGH, SeverityLevel.CRITICAL)

    def __lt__(self, other):
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, SeverityLevel):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_ORDER = (
    SeverityLevel.LOW,
    SeverityLevel.MEDIUM,
    SeverityLevel.HIGH,
    SeverityLevel.CRITICAL,
)


class RiskTrendLevel(Enum):
    """Coarse risk level derived from mood history."""
    LOW = "low"             # No warning signals
    MODERATE = "moderate"   # 1 signal
    ELEVATED = "elevated"   # 2-3 signals
    HIGH = "high"           # 4+ signals

    @classmethod
    def from_signal_count(cls, count: int) -> "RiskTrendLevel":
        if count <= 0:
            return cls.LOW
        if count == 1:
            return cls.MODERATE
        if count <= 3:
            return cls.ELEVATED
        return cls.HIGH

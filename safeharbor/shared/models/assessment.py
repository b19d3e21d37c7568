"""Questionnaire and assessment result domain models.

Catalog entries and results are immutable: a result is computed once
from a response set and never modified afterwards.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .risk import SeverityLevel


class QuestionKind(Enum):
    """Answer format of a catalog question."""
    SCALE = "scale"     # 1-5
    BINARY = "binary"   # 0/1

    @property
    def min_value(self) -> int:
        return 1 if self is QuestionKind.SCALE else 0

    @property
    def max_value(self) -> int:
        return 5 if self is QuestionKind.SCALE else 1

    def allows(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value


@dataclass(frozen=True)
class AssessmentQuestion:
    """A single assessable item in the question catalog.

    Attributes:
        id: Stable key used in response sets
        prompt: Question text shown to the user
        kind: Scale (1-5) or binary (0/1)
        weight: Positive scoring weight
        inverse: Higher answers are protective; contribution is mirrored
        critical_threshold: Answer value marking an independent danger signal
        depends_on: Parent question id; scored only when the parent is non-zero
    """
    id: str
    prompt: str
    kind: QuestionKind
    weight: int
    inverse: bool = False
    critical_threshold: Optional[int] = None
    depends_on: Optional[str] = None
    option_labels: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.weight <= 0:
            raise ValueError(f"Weight must be positive, got {self.weight} for {self.id}")
        if self.option_labels and len(self.option_labels) != (
            self.kind.max_value - self.kind.min_value + 1
        ):
            raise ValueError(f"Option labels do not match {self.kind.value} range for {self.id}")

    @property
    def max_contribution(self) -> int:
        return self.weight * self.kind.max_value

    def risk_value(self, response: int) -> int:
        """Response mapped onto the risk direction.

        Inverse items mirror within their range: 6 - r for scale items,
        1 - r for binary items.
        """
        if self.inverse:
            return self.kind.min_value + self.kind.max_value - response
        return response

    def is_critical(self, response: int) -> bool:
        """Whether a response hits this question's critical threshold.

        Inverse items are critical at or below the threshold (a low
        safety rating is the danger signal).
        """
        if self.critical_threshold is None:
            return False
        if self.inverse:
            return response <= self.critical_threshold
        return response >= self.critical_threshold

    def to_dict(self) -> Dict[str, Any]:
        options = [
            {"value": self.kind.min_value + index, "label": label}
            for index, label in enumerate(self.option_labels)
        ]
        return {
            "id": self.id,
            "prompt": self.prompt,
            "kind": self.kind.value,
            "weight": self.weight,
            "inverse": self.inverse,
            "critical_threshold": self.critical_threshold,
            "depends_on": self.depends_on,
            "options": options,
        }


@dataclass(frozen=True)
class ScoringResult:
    """Output of the weighted scorer, before risk-pattern escalation."""
    raw_score: float
    max_possible_score: int
    severity_percentage: float
    critical_factor_count: int
    risk_factors: Tuple[str, ...] = ()
    protective_factors: Tuple[str, ...] = ()
    applied_multipliers: Tuple[Tuple[str, float], ...] = ()

    def __post_init__(self):
        if self.raw_score < 0:
            raise ValueError(f"Raw score must be non-negative, got {self.raw_score}")
        if not 0.0 <= self.severity_percentage <= 100.0:
            raise ValueError(f"Severity percentage must be 0-100, got {self.severity_percentage}")


@dataclass(frozen=True)
class PatternMatch:
    """A named multi-question risk pattern that matched a response set."""
    pattern_id: str
    label: str
    multiplier: float

    def __post_init__(self):
        if self.multiplier < 1.0:
            raise ValueError(f"Pattern multiplier must be >= 1.0, got {self.multiplier}")


@dataclass(frozen=True)
class CrisisAssessmentResult:
    """Final result of a crisis assessment.

    requires_immediate is derived from the severity tier and is never
    set independently.
    """
    severity: SeverityLevel
    score: float
    risk_factors: List[str] = field(default_factory=list)
    protective_factors: List[str] = field(default_factory=list)
    recommended_actions: List[str] = field(default_factory=list)
    confidence: int = 0
    severity_percentage: float = 0.0
    critical_factor_count: int = 0
    patterns: List[PatternMatch] = field(default_factory=list)
    catalog_version: str = ""

    def __post_init__(self):
        if self.score < 0:
            raise ValueError(f"Score must be non-negative, got {self.score}")
        if not 0 <= self.confidence <= 100:
            raise ValueError(f"Confidence must be 0-100, got {self.confidence}")

    @property
    def requires_immediate(self) -> bool:
        return self.severity.requires_immediate

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "severity": self.severity.value,
            "score": round(self.score, 3),
            "risk_factors": list(self.risk_factors),
            "protective_factors": list(self.protective_factors),
            "recommended_actions": list(self.recommended_actions),
            "requires_immediate": self.requires_immediate,
            "confidence": self.confidence,
            "severity_percentage": round(self.severity_percentage, 2),
            "critical_factor_count": self.critical_factor_count,
            "patterns": [p.pattern_id for p in self.patterns],
            "catalog_version": self.catalog_version,
        }

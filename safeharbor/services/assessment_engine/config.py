"""Question catalog and scoring configuration.

The catalog table is the single source of truth for weights, thresholds
and dependencies. Ordering matters: scorer multipliers are applied in
catalog order.
"""
from dataclasses import dataclass, field
from typing import Dict, Mapping, Tuple

from safeharbor.shared.models import AssessmentQuestion, QuestionKind

CATALOG_VERSION = "2026.10.01"

_YES_NO = ("No", "Yes")

QUESTION_CATALOG: Tuple[AssessmentQuestion, ...] = (
    AssessmentQuestion(
        id="safety",
        prompt="Do you feel safe right now?",
        kind=QuestionKind.SCALE,
        weight=3,
        inverse=True,
        critical_threshold=2,
        option_labels=(
            "Not at all safe",
            "Somewhat unsafe",
            "Neutral",
            "Mostly safe",
            "Completely safe",
        ),
    ),
    AssessmentQuestion(
        id="self-harm-thoughts",
        prompt="Are you having thoughts of harming yourself?",
        kind=QuestionKind.BINARY,
        weight=5,
        critical_threshold=1,
        option_labels=_YES_NO,
    ),
    AssessmentQuestion(
        id="self-harm-plan",
        prompt="Do you have a specific plan to harm yourself?",
        kind=QuestionKind.BINARY,
        weight=10,
        critical_threshold=1,
        depends_on="self-harm-thoughts",
        option_labels=_YES_NO,
    ),
    AssessmentQuestion(
        id="self-harm-means",
        prompt="Do you have access to means to carry out this plan?",
        kind=QuestionKind.BINARY,
        weight=15,
        critical_threshold=1,
        depends_on="self-harm-plan",
        option_labels=_YES_NO,
    ),
    AssessmentQuestion(
        id="support-available",
        prompt="Do you have someone you can talk to right now?",
        kind=QuestionKind.BINARY,
        weight=2,
        inverse=True,
        option_labels=_YES_NO,
    ),
    AssessmentQuestion(
        id="overwhelm-level",
        prompt="How overwhelmed do you feel?",
        kind=QuestionKind.SCALE,
        weight=2,
        option_labels=("Slightly", "Moderately", "Very", "Extremely", "Unbearably"),
    ),
    AssessmentQuestion(
        id="hopelessness",
        prompt="How hopeless do you feel about the future?",
        kind=QuestionKind.SCALE,
        weight=3,
        critical_threshold=4,
        option_labels=("Slightly", "Moderately", "Very", "Extremely", "Completely"),
    ),
    AssessmentQuestion(
        id="substance-use",
        prompt="Have you used alcohol or drugs today to cope?",
        kind=QuestionKind.BINARY,
        weight=2,
        option_labels=_YES_NO,
    ),
    AssessmentQuestion(
        id="previous-attempts",
        prompt="Have you attempted to harm yourself before?",
        kind=QuestionKind.BINARY,
        weight=3,
        option_labels=_YES_NO,
    ),
    AssessmentQuestion(
        id="impulsivity",
        prompt="Do you feel like you might act on these feelings without thinking?",
        kind=QuestionKind.BINARY,
        weight=4,
        critical_threshold=1,
        depends_on="self-harm-thoughts",
        option_labels=_YES_NO,
    ),
)

QUESTIONS_BY_ID: Dict[str, AssessmentQuestion] = {q.id: q for q in QUESTION_CATALOG}

# Questions whose completeness weighs extra in the confidence estimate
SAFETY_CRITICAL_QUESTIONS: Tuple[str, ...] = (
    "self-harm-thoughts",
    "self-harm-plan",
    "self-harm-means",
    "safety",
)

# Fixed labels reported for each critical-threshold hit
CRITICAL_FACTOR_LABELS: Dict[str, str] = {
    "safety": "Does not feel safe right now",
    "self-harm-thoughts": "Active suicidal ideation - HIGH RISK",
    "self-harm-plan": "Specific suicide plan - CRITICAL RISK",
    "self-harm-means": "Access to lethal means - CRITICAL RISK",
    "hopelessness": "Severe hopelessness",
    "impulsivity": "High impulsivity risk",
}

SUPPORT_PROTECTIVE_LABEL = "Social support available"
SAFETY_PROTECTIVE_LABEL = "Currently feels safe"


def _default_escalation() -> Dict[str, float]:
    return {
        "self-harm-thoughts": 2.5,
        "self-harm-plan": 2.5 * 1.5,
        "self-harm-means": 2.5 * 2,
        "hopelessness": 1.5,
        "impulsivity": 1.5,
    }


@dataclass(frozen=True)
class TierThresholds:
    """Severity-percentage cut-offs for the decision tree."""
    CRITICAL_MIN: float = 95.0
    HIGH_MIN: float = 80.0
    MEDIUM_MIN: float = 60.0
    LOW_ELEVATED_MIN: float = 30.0   # low tier, stronger self-care wording


@dataclass(frozen=True)
class ScoringConfig:
    """Multipliers and weights used by the scorer and confidence estimator."""

    # Multiplier applied to the running score on a critical hit
    escalation_multipliers: Mapping[str, float] = field(default_factory=_default_escalation)

    # Multiplier applied on each protective signal
    protective_multiplier: float = 0.7

    # A safety rating at or above this is protective
    safe_rating_min: int = 4

    # confidence = completeness * w1 + critical completeness * w2
    completeness_weight: float = 0.6
    critical_completeness_weight: float = 0.4

    catalog_version: str = CATALOG_VERSION

    def __post_init__(self):
        for question_id, multiplier in self.escalation_multipliers.items():
            if multiplier < 1.0:
                raise ValueError(
                    f"Escalation multiplier must be >= 1.0, got {multiplier} for {question_id}"
                )

    def escalation_for(self, question_id: str) -> float:
        return self.escalation_multipliers.get(question_id, 1.0)

"""Weighted scorer.

Walks the catalog in order. Each scored question adds
``weight * risk_value`` to the running score, then the scoring rules run
against that question and may multiply the running score:

- critical rule: threshold hit -> escalation multiplier (>= 1.0)
- protective rule: support available or feels safe -> 0.7

Multipliers compound in catalog order and are never re-normalized.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from safeharbor.shared.models import AssessmentQuestion, ScoringResult
from .config import (
    CRITICAL_FACTOR_LABELS,
    QUESTION_CATALOG,
    SAFETY_PROTECTIVE_LABEL,
    SUPPORT_PROTECTIVE_LABEL,
    ScoringConfig,
)
from .validator import ValidatedResponses


@dataclass(frozen=True)
class ScoringStep:
    """Effect of one scoring rule on the running score."""
    question_id: str
    label: str
    multiplier: float
    critical: bool = False
    protective: bool = False


ScoringRule = Callable[[AssessmentQuestion, int, ScoringConfig], Optional[ScoringStep]]


def critical_threshold_rule(
    question: AssessmentQuestion,
    response: int,
    config: ScoringConfig,
) -> Optional[ScoringStep]:
    """Escalate on a critical-threshold hit."""
    if not question.is_critical(response):
        return None
    return ScoringStep(
        question_id=question.id,
        label=CRITICAL_FACTOR_LABELS.get(question.id, f"Critical response: {question.id}"),
        multiplier=config.escalation_for(question.id),
        critical=True,
    )


def protective_signal_rule(
    question: AssessmentQuestion,
    response: int,
    config: ScoringConfig,
) -> Optional[ScoringStep]:
    """Dampen on support available or a high safety rating."""
    if question.id == "support-available" and response == 1:
        label = SUPPORT_PROTECTIVE_LABEL
    elif question.id == "safety" and response >= config.safe_rating_min:
        label = SAFETY_PROTECTIVE_LABEL
    else:
        return None
    return ScoringStep(
        question_id=question.id,
        label=label,
        multiplier=config.protective_multiplier,
        protective=True,
    )


DEFAULT_SCORING_RULES: Sequence[ScoringRule] = (
    critical_threshold_rule,
    protective_signal_rule,
)


def contribution(question: AssessmentQuestion, response: int) -> int:
    """Base weighted contribution of a single answer."""
    return question.weight * question.risk_value(response)


def score_responses(
    validated: ValidatedResponses,
    config: Optional[ScoringConfig] = None,
    catalog: Sequence[AssessmentQuestion] = QUESTION_CATALOG,
    rules: Sequence[ScoringRule] = DEFAULT_SCORING_RULES,
) -> ScoringResult:
    """Compute the weighted score for a validated response set.

    Args:
        validated: Output of validate_responses()
        config: Multipliers; defaults to ScoringConfig()
        catalog: Question catalog in application order
        rules: Scoring rules run after each scored question

    Returns:
        ScoringResult with raw score, percentage and factor labels
    """
    config = config or ScoringConfig()

    raw_score = 0.0
    max_possible = 0
    critical_count = 0
    risk_factors: List[str] = []
    protective_factors: List[str] = []
    applied: List[tuple] = []

    for question in catalog:
        if not validated.is_eligible(question.id):
            continue
        max_possible += question.max_contribution

        if question.id not in validated.responses:
            continue
        response = validated.responses[question.id]
        raw_score += contribution(question, response)

        for rule in rules:
            step = rule(question, response, config)
            if step is None:
                continue
            raw_score *= step.multiplier
            applied.append((step.question_id, step.multiplier))
            if step.critical:
                critical_count += 1
                risk_factors.append(step.label)
            if step.protective:
                protective_factors.append(step.label)

    percentage = severity_percentage(raw_score, max_possible)

    return ScoringResult(
        raw_score=raw_score,
        max_possible_score=max_possible,
        severity_percentage=percentage,
        critical_factor_count=critical_count,
        risk_factors=tuple(risk_factors),
        protective_factors=tuple(protective_factors),
        applied_multipliers=tuple(applied),
    )


def severity_percentage(score: float, max_possible: int) -> float:
    """Score as a percentage of the maximum, capped at 100."""
    if max_possible <= 0:
        return 0.0
    return min(100.0, score / max_possible * 100.0)

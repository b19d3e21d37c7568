"""Confidence estimate from answer completeness."""
from typing import Optional, Sequence

from .config import SAFETY_CRITICAL_QUESTIONS, ScoringConfig
from .validator import ValidatedResponses


def completeness(validated: ValidatedResponses) -> float:
    """Percentage of eligible questions that were answered."""
    eligible = len(validated.eligible_ids)
    if eligible == 0:
        return 0.0
    return validated.answered_eligible_count / eligible * 100.0


def critical_completeness(
    validated: ValidatedResponses,
    critical_ids: Sequence[str] = SAFETY_CRITICAL_QUESTIONS,
) -> float:
    """Percentage of safety-critical questions answered.

    Ignored answers (parent chain unsatisfied) do not count.
    """
    if not critical_ids:
        return 0.0
    answered = sum(1 for question_id in critical_ids if validated.scored(question_id))
    return answered / len(critical_ids) * 100.0


def estimate_confidence(
    validated: ValidatedResponses,
    config: Optional[ScoringConfig] = None,
) -> int:
    """Weighted completeness score, 0-100."""
    config = config or ScoringConfig()
    value = (
        completeness(validated) * config.completeness_weight
        + critical_completeness(validated) * config.critical_completeness_weight
    )
    return int(min(100, max(0, round(value))))

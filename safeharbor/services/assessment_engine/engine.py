"""Crisis assessment pipeline.

    responses -> validate -> score + detect patterns -> classify
              -> estimate confidence -> CrisisAssessmentResult

Pure and deterministic: no I/O, no logging, no shared mutable state.
The catalog is read-only, so concurrent callers need no coordination.
Logging and audit belong to the calling service layer.
"""
from typing import Any, Mapping, Optional

from safeharbor.shared.models import CrisisAssessmentResult
from .classifier import ClassificationInput, classify
from .confidence import estimate_confidence
from .config import ScoringConfig, TierThresholds
from .patterns import combined_multiplier, detect_patterns
from .scorer import score_responses, severity_percentage
from .validator import validate_responses


def assess_crisis_severity(
    responses: Mapping[str, Any],
    config: Optional[ScoringConfig] = None,
    thresholds: Optional[TierThresholds] = None,
) -> CrisisAssessmentResult:
    """Assess crisis severity from a questionnaire response set.

    Args:
        responses: Question id to int response; unanswered ids are absent
        config: Scoring multipliers and confidence weights
        thresholds: Severity-percentage tier cut-offs

    Returns:
        CrisisAssessmentResult

    Raises:
        ResponseTypeError: If a value has the wrong type
        InvalidResponseValue: If a value is outside its question's range
    """
    config = config or ScoringConfig()
    thresholds = thresholds or TierThresholds()

    validated = validate_responses(responses)
    scoring = score_responses(validated, config)
    patterns = detect_patterns(validated.responses)

    final_score = scoring.raw_score * combined_multiplier(patterns)
    adjusted_percentage = severity_percentage(final_score, scoring.max_possible_score)

    classification = classify(
        ClassificationInput(
            responses=validated.responses,
            critical_factor_count=scoring.critical_factor_count,
            severity_percentage=adjusted_percentage,
        ),
        thresholds,
    )

    risk_factors = list(scoring.risk_factors)
    risk_factors.extend(p.label for p in patterns)
    risk_factors.extend(classification.contextual_factors)
    risk_factors.extend(classification.general_factors)

    return CrisisAssessmentResult(
        severity=classification.severity,
        score=final_score,
        risk_factors=risk_factors,
        protective_factors=list(scoring.protective_factors),
        recommended_actions=list(classification.recommended_actions),
        confidence=estimate_confidence(validated, config),
        severity_percentage=adjusted_percentage,
        critical_factor_count=scoring.critical_factor_count,
        patterns=patterns,
        catalog_version=config.catalog_version,
    )

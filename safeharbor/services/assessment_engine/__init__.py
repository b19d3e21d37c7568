"""Assessment Engine: questionnaire-based crisis severity triage.

Deterministic rule engine - no training, no probabilistic inference.
Converts a questionnaire response set into a severity tier, recommended
actions and a confidence estimate.

Components:
- config.py: Question catalog (static table) and scoring multipliers
- validator.py: Range checks and dependency eligibility
- scorer.py: Weighted score with ordered escalation/protective rules
- patterns.py: Named multi-factor risk patterns
- classifier.py: Four-tier decision tree and contextual risk factors
- confidence.py: Completeness-based confidence estimate
- engine.py: assess_crisis_severity() pipeline

Usage:
    from safeharbor.services.assessment_engine import assess_crisis_severity
    result = assess_crisis_severity({"self-harm-thoughts": 1, "hopelessness": 4})
    result.severity, result.requires_immediate
"""

from .engine import assess_crisis_severity
from .config import (
    CATALOG_VERSION,
    QUESTION_CATALOG,
    QUESTIONS_BY_ID,
    ScoringConfig,
    TierThresholds,
)
from .validator import ValidatedResponses, validate_responses
from .scorer import score_responses
from .patterns import RISK_PATTERNS, detect_patterns
from .classifier import ClassificationInput, classify
from .confidence import estimate_confidence

__all__ = [
    "assess_crisis_severity",
    "CATALOG_VERSION",
    "QUESTION_CATALOG",
    "QUESTIONS_BY_ID",
    "ScoringConfig",
    "TierThresholds",
    "ValidatedResponses",
    "validate_responses",
    "score_responses",
    "RISK_PATTERNS",
    "detect_patterns",
    "ClassificationInput",
    "classify",
    "estimate_confidence",
]

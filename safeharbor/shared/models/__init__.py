"""Shared domain models for the SafeHarbor triage engine."""
from .risk import SeverityLevel, RiskTrendLevel
from .assessment import (
    QuestionKind,
    AssessmentQuestion,
    ScoringResult,
    PatternMatch,
    CrisisAssessmentResult,
)
from .mood import (
    MoodEntry,
    RiskTrendResult,
    CrisisEvent,
    PreventionPlan,
    parse_timestamp,
)

__all__ = [
    "SeverityLevel",
    "RiskTrendLevel",
    "QuestionKind",
    "AssessmentQuestion",
    "ScoringResult",
    "PatternMatch",
    "CrisisAssessmentResult",
    "MoodEntry",
    "RiskTrendResult",
    "CrisisEvent",
    "PreventionPlan",
    "parse_timestamp",
]

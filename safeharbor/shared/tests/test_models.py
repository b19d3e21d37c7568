"""Tests for shared domain models."""
from datetime import datetime, timedelta, timezone

import pytest

from safeharbor.shared.exceptions import (
    InvalidMoodEntry,
    InvalidResponseValue,
    ResponseTypeError,
    SafeHarborValidationError,
)
from safeharbor.shared.models import (
    AssessmentQuestion,
    CrisisAssessmentResult,
    MoodEntry,
    PatternMatch,
    QuestionKind,
    RiskTrendLevel,
    SeverityLevel,
    parse_timestamp,
)


class TestSeverityLevel:
    def test_ordering(self):
        assert SeverityLevel.LOW < SeverityLevel.MEDIUM < SeverityLevel.HIGH < SeverityLevel.CRITICAL
        assert max([SeverityLevel.MEDIUM, SeverityLevel.CRITICAL, SeverityLevel.LOW]) == SeverityLevel.CRITICAL

    @pytest.mark.parametrize("level,expected", [
        (SeverityLevel.LOW, False),
        (SeverityLevel.MEDIUM, False),
        (SeverityLevel.HIGH, True),
        (SeverityLevel.CRITICAL, True),
    ])
    def test_requires_immediate(self, level, expected):
        assert level.requires_immediate is expected

    def test_comparison_with_other_type_fails(self):
        with pytest.raises(TypeError):
            SeverityLevel.LOW < "high"


class TestRiskTrendLevel:
    @pytest.mark.parametrize("count,expected", [
        (0, RiskTrendLevel.LOW),
        (1, RiskTrendLevel.MODERATE),
        (2, RiskTrendLevel.ELEVATED),
        (3, RiskTrendLevel.ELEVATED),
        (4, RiskTrendLevel.HIGH),
        (9, RiskTrendLevel.HIGH),
    ])
    def test_from_signal_count(self, count, expected):
        assert RiskTrendLevel.from_signal_count(count) == expected


class TestAssessmentQuestion:
    def test_inverse_scale_risk_value(self):
        question = AssessmentQuestion("q", "?", QuestionKind.SCALE, weight=3, inverse=True)
        assert [question.risk_value(r) for r in range(1, 6)] == [5, 4, 3, 2, 1]

    def test_inverse_binary_risk_value(self):
        question = AssessmentQuestion("q", "?", QuestionKind.BINARY, weight=2, inverse=True)
        assert question.risk_value(0) == 1
        assert question.risk_value(1) == 0

    def test_inverse_critical_is_at_or_below(self):
        question = AssessmentQuestion(
            "q", "?", QuestionKind.SCALE, weight=3, inverse=True, critical_threshold=2
        )
        assert question.is_critical(1)
        assert question.is_critical(2)
        assert not question.is_critical(3)

    def test_rejects_non_positive_weight(self):
        with pytest.raises(ValueError):
            AssessmentQuestion("q", "?", QuestionKind.BINARY, weight=0)

    def test_rejects_mismatched_labels(self):
        with pytest.raises(ValueError):
            AssessmentQuestion("q", "?", QuestionKind.BINARY, weight=1, option_labels=("a",))

    def test_to_dict_options(self):
        question = AssessmentQuestion(
            "q", "?", QuestionKind.BINARY, weight=1, option_labels=("No", "Yes")
        )
        assert question.to_dict()["options"] == [
            {"value": 0, "label": "No"},
            {"value": 1, "label": "Yes"},
        ]


class TestCrisisAssessmentResult:
    def test_requires_immediate_follows_severity(self):
        result = CrisisAssessmentResult(severity=SeverityLevel.HIGH, score=40.0)
        assert result.requires_immediate is True
        assert result.to_dict()["requires_immediate"] is True

    def test_rejects_confidence_out_of_range(self):
        with pytest.raises(ValueError):
            CrisisAssessmentResult(severity=SeverityLevel.LOW, score=0, confidence=101)

    def test_pattern_multiplier_never_dampens(self):
        with pytest.raises(ValueError):
            PatternMatch("p", "label", 0.9)


class TestParseTimestamp:
    def test_z_suffix(self):
        assert parse_timestamp("2026-10-10T12:00:00Z") == datetime(2026, 10, 10, 12, 0)

    def test_offset_converted_to_utc(self):
        assert parse_timestamp("2026-10-10T14:00:00+02:00") == datetime(2026, 10, 10, 12, 0)

    def test_aware_datetime(self):
        value = datetime(2026, 10, 10, 7, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert parse_timestamp(value) == datetime(2026, 10, 10, 12, 0)

    def test_invalid_string(self):
        with pytest.raises(InvalidMoodEntry) as exc:
            parse_timestamp("yesterday")
        assert exc.value.field == "timestamp"

    def test_wrong_type(self):
        with pytest.raises(ResponseTypeError):
            parse_timestamp(1700000000, "reference_time")


class TestMoodEntry:
    def test_minimal_entry(self):
        entry = MoodEntry(timestamp=datetime(2026, 10, 1), mood_score=5)
        assert entry.exercise is False
        assert entry.sleep_hours is None

    @pytest.mark.parametrize("field,value", [
        ("mood_score", 0),
        ("stress_level", 11),
        ("anxiety_level", -1),
        ("sleep_hours", 25),
        ("social_interaction_score", 10.5),
    ])
    def test_out_of_range_names_field(self, field, value):
        kwargs = {"timestamp": datetime(2026, 10, 1), "mood_score": 5, field: value}
        with pytest.raises(InvalidMoodEntry) as exc:
            MoodEntry(**kwargs)
        assert exc.value.field == field

    def test_non_numeric(self):
        with pytest.raises(ResponseTypeError) as exc:
            MoodEntry(timestamp=datetime(2026, 10, 1), mood_score="great")
        assert exc.value.field == "mood_score"

    def test_from_dict_normalizes_timestamp(self):
        entry = MoodEntry.from_dict({"timestamp": "2026-10-01T09:00:00-03:00", "mood_score": 6})
        assert entry.timestamp == datetime(2026, 10, 1, 12, 0)


class TestExceptions:
    def test_to_dict_names_field(self):
        error = InvalidResponseValue("safety", 9, "1-5")
        assert error.to_dict() == {
            "error": "safety: response 9 out of range (allowed: 1-5)",
            "field": "safety",
        }

    def test_hierarchy(self):
        assert issubclass(InvalidResponseValue, ValueError)
        assert issubclass(ResponseTypeError, TypeError)
        assert issubclass(InvalidMoodEntry, SafeHarborValidationError)

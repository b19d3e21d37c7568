"""Tests for response validation and dependency eligibility."""
import pytest

from safeharbor.shared.exceptions import InvalidResponseValue, ResponseTypeError
from safeharbor.services.assessment_engine.validator import (
    eligible_question_ids,
    validate_responses,
)

INDEPENDENT_IDS = {
    "safety",
    "self-harm-thoughts",
    "support-available",
    "overwhelm-level",
    "hopelessness",
    "substance-use",
    "previous-attempts",
}


class TestRangeValidation:
    """Out-of-range values are rejected, never clamped."""

    @pytest.mark.parametrize("value", [0, 6, -1])
    def test_scale_out_of_range_rejected(self, value):
        with pytest.raises(InvalidResponseValue) as exc:
            validate_responses({"hopelessness": value})
        assert exc.value.field == "hopelessness"

    @pytest.mark.parametrize("value", [2, -1])
    def test_binary_out_of_range_rejected(self, value):
        with pytest.raises(InvalidResponseValue) as exc:
            validate_responses({"self-harm-thoughts": value})
        assert exc.value.field == "self-harm-thoughts"

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_responses({"safety": 9})

    def test_valid_values_accepted(self):
        validated = validate_responses({"safety": 1, "self-harm-thoughts": 0, "hopelessness": 5})
        assert validated.responses == {"safety": 1, "self-harm-thoughts": 0, "hopelessness": 5}


class TestTypeValidation:
    """Wrong types produce an error naming the field."""

    def test_string_value_rejected(self):
        with pytest.raises(ResponseTypeError) as exc:
            validate_responses({"safety": "3"})
        assert exc.value.field == "safety"
        assert "safety" in str(exc.value)

    def test_float_value_rejected(self):
        with pytest.raises(ResponseTypeError) as exc:
            validate_responses({"hopelessness": 4.0})
        assert exc.value.field == "hopelessness"

    def test_non_mapping_rejected(self):
        with pytest.raises(ResponseTypeError) as exc:
            validate_responses([("safety", 3)])
        assert exc.value.field == "responses"

    def test_type_error_is_also_type_error(self):
        with pytest.raises(TypeError):
            validate_responses({"safety": None})

    def test_bool_accepted_as_binary(self):
        validated = validate_responses({"self-harm-thoughts": True, "substance-use": False})
        assert validated.responses == {"self-harm-thoughts": 1, "substance-use": 0}


class TestUnknownIds:
    def test_unknown_ids_reported_not_scored(self):
        validated = validate_responses({"favorite-color": 3, "safety": 4})
        assert validated.unknown_ids == ("favorite-color",)
        assert "favorite-color" not in validated.responses


class TestEligibility:
    """Dependent questions need their full parent chain satisfied."""

    def test_empty_responses_only_independent_eligible(self):
        assert set(eligible_question_ids({})) == INDEPENDENT_IDS

    def test_thoughts_yes_unlocks_plan_and_impulsivity(self):
        eligible = set(eligible_question_ids({"self-harm-thoughts": 1}))
        assert "self-harm-plan" in eligible
        assert "impulsivity" in eligible
        assert "self-harm-means" not in eligible

    def test_means_needs_plan_and_thoughts(self):
        eligible = eligible_question_ids({"self-harm-thoughts": 1, "self-harm-plan": 1})
        assert "self-harm-means" in eligible

    def test_plan_yes_without_thoughts_does_not_unlock_means(self):
        eligible = eligible_question_ids({"self-harm-plan": 1})
        assert "self-harm-plan" not in eligible
        assert "self-harm-means" not in eligible

    def test_plan_yes_with_thoughts_no_does_not_unlock_means(self):
        eligible = eligible_question_ids({"self-harm-thoughts": 0, "self-harm-plan": 1})
        assert "self-harm-means" not in eligible

    def test_ignored_ids_recorded(self):
        validated = validate_responses({"self-harm-plan": 1, "self-harm-means": 1})
        assert validated.ignored_ids == ("self-harm-plan", "self-harm-means")
        assert not validated.scored("self-harm-plan")

    def test_eligible_ids_in_catalog_order(self):
        validated = validate_responses({"self-harm-thoughts": 1})
        assert validated.eligible_ids[0] == "safety"
        assert validated.eligible_ids[-1] == "impulsivity"

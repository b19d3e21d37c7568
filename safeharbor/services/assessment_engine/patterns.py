"""Named multi-factor risk patterns.

Patterns are evaluated over raw responses, independent of the weighted
score. Each match contributes a multiplier applied on top of the
scorer's raw score.

A historical-trend pattern (comparison against a prior assessment) is
not part of this table; it needs prior-assessment context the engine
does not receive.
"""
from dataclasses import dataclass
from typing import Callable, List, Mapping, Sequence

from safeharbor.shared.models import PatternMatch

Responses = Mapping[str, int]


def _is(responses: Responses, question_id: str, value: int) -> bool:
    return responses.get(question_id) == value


def _at_least(responses: Responses, question_id: str, value: int) -> bool:
    answer = responses.get(question_id)
    return answer is not None and answer >= value


def _at_most(responses: Responses, question_id: str, value: int) -> bool:
    answer = responses.get(question_id)
    return answer is not None and answer <= value


@dataclass(frozen=True)
class RiskPattern:
    """A predicate over raw responses with its label and multiplier."""
    pattern_id: str
    label: str
    multiplier: float
    predicate: Callable[[Responses], bool]

    def evaluate(self, responses: Responses) -> bool:
        return bool(self.predicate(responses))

    def to_match(self) -> PatternMatch:
        return PatternMatch(
            pattern_id=self.pattern_id,
            label=self.label,
            multiplier=self.multiplier,
        )


RISK_PATTERNS: Sequence[RiskPattern] = (
    RiskPattern(
        pattern_id="suicide_triad",
        label="CRITICAL: Complete suicide triad detected",
        multiplier=3.0,
        predicate=lambda r: (
            _is(r, "self-harm-thoughts", 1)
            and _is(r, "self-harm-plan", 1)
            and _is(r, "self-harm-means", 1)
        ),
    ),
    RiskPattern(
        pattern_id="isolated_hopelessness_substance",
        label="HIGH RISK: Severe hopelessness, no support and substance use",
        multiplier=2.2,
        predicate=lambda r: (
            _at_least(r, "hopelessness", 4)
            and _is(r, "support-available", 0)
            and _is(r, "substance-use", 1)
        ),
    ),
    RiskPattern(
        pattern_id="impulsive_ideation_with_history",
        label="HIGH RISK: Impulsive ideation with previous attempts",
        multiplier=2.5,
        predicate=lambda r: (
            _is(r, "impulsivity", 1)
            and _is(r, "previous-attempts", 1)
            and _is(r, "self-harm-thoughts", 1)
        ),
    ),
    RiskPattern(
        pattern_id="overwhelmed_unsafe_unsupported",
        label="ELEVATED RISK: Overwhelmed and unsafe without support",
        multiplier=1.8,
        predicate=lambda r: (
            _at_least(r, "overwhelm-level", 4)
            and _at_most(r, "safety", 2)
            and _is(r, "support-available", 0)
        ),
    ),
)


def detect_patterns(
    responses: Responses,
    patterns: Sequence[RiskPattern] = RISK_PATTERNS,
) -> List[PatternMatch]:
    """Return every matching pattern, in table order."""
    return [p.to_match() for p in patterns if p.evaluate(responses)]


def combined_multiplier(matches: Sequence[PatternMatch]) -> float:
    """Product of all matched multipliers (1.0 when nothing matched)."""
    result = 1.0
    for match in matches:
        result *= match.multiplier
    return result

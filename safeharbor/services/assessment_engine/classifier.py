"""Severity classifier - four-tier decision tree.

Tiers are evaluated top-down and the first tier with a matching rule
wins. Override rules read raw responses without dependency gating:
answering yes to lethal means is critical no matter what was answered
before it.

Contextual and general risk factors are appended after tier selection
and never change the tier. Unlike the overrides, they only read a
dependent answer when its parent chain is satisfied.
"""
from dataclasses import dataclass
from typing import Callable, List, Mapping, Sequence, Tuple

from safeharbor.shared.models import SeverityLevel
from .config import TierThresholds


@dataclass(frozen=True)
class ClassificationInput:
    """Everything the decision tree looks at."""
    responses: Mapping[str, int]
    critical_factor_count: int
    severity_percentage: float

    def yes(self, question_id: str) -> bool:
        return self.responses.get(question_id) == 1

    def no(self, question_id: str) -> bool:
        return self.responses.get(question_id) == 0

    def at_least(self, question_id: str, value: int) -> bool:
        answer = self.responses.get(question_id)
        return answer is not None and answer >= value

    def at_most(self, question_id: str, value: int) -> bool:
        answer = self.responses.get(question_id)
        return answer is not None and answer <= value


TierRule = Callable[[ClassificationInput, TierThresholds], bool]


@dataclass(frozen=True)
class SeverityTier:
    severity: SeverityLevel
    rules: Tuple[TierRule, ...]
    actions: Tuple[str, ...]

    def matches(self, data: ClassificationInput, thresholds: TierThresholds) -> bool:
        return any(rule(data, thresholds) for rule in self.rules)


@dataclass(frozen=True)
class ContextualRule:
    label: str
    predicate: Callable[[ClassificationInput], bool]


@dataclass(frozen=True)
class Classification:
    severity: SeverityLevel
    recommended_actions: Tuple[str, ...]
    contextual_factors: Tuple[str, ...]
    general_factors: Tuple[str, ...] = ()

    @property
    def requires_immediate(self) -> bool:
        return self.severity.requires_immediate


CRITICAL_ACTIONS = (
    "Call 988 or 911 immediately",
    "Remove all access to means of self-harm",
    "Do not stay alone - ensure continuous supervision",
    "Contact your emergency support network now",
)

HIGH_ACTIONS = (
    "Contact the 988 Suicide & Crisis Lifeline immediately",
    "Go to the nearest emergency room or call 911 if you feel unsafe",
    "Reach out to a trusted support person right now",
    "Create an immediate safety plan",
)

MEDIUM_ACTIONS = (
    "Call or text 988, or text HOME to 741741 (Crisis Text Line)",
    "Activate your safety plan",
    "Schedule an urgent counseling appointment",
    "Let a trusted contact know how you are feeling",
)

LOW_ELEVATED_ACTIONS = (
    "Practice your coping strategies",
    "Reach out to your support network",
    "Schedule a routine therapy appointment",
    "Monitor mood changes over the next few days",
)

LOW_ACTIONS = (
    "Continue self-care practices",
    "Use healthy coping strategies when stress builds",
    "Keep up routine therapy check-ins",
    "Monitor mood changes",
)


SEVERITY_TIERS: Sequence[SeverityTier] = (
    SeverityTier(
        severity=SeverityLevel.CRITICAL,
        rules=(
            lambda d, t: d.yes("self-harm-means"),
            lambda d, t: d.yes("self-harm-plan") and d.yes("self-harm-thoughts"),
            lambda d, t: d.yes("impulsivity") and d.yes("self-harm-thoughts"),
            lambda d, t: d.at_most("safety", 1) and d.yes("self-harm-thoughts"),
            lambda d, t: d.critical_factor_count >= 3,
            lambda d, t: d.severity_percentage >= t.CRITICAL_MIN,
        ),
        actions=CRITICAL_ACTIONS,
    ),
    SeverityTier(
        severity=SeverityLevel.HIGH,
        rules=(
            lambda d, t: d.yes("self-harm-thoughts") and d.at_least("hopelessness", 4),
            lambda d, t: d.yes("previous-attempts") and d.yes("self-harm-thoughts"),
            lambda d, t: d.yes("substance-use") and d.yes("self-harm-thoughts"),
            lambda d, t: d.at_least("overwhelm-level", 5) and d.no("support-available"),
            lambda d, t: d.severity_percentage >= t.HIGH_MIN,
        ),
        actions=HIGH_ACTIONS,
    ),
    SeverityTier(
        severity=SeverityLevel.MEDIUM,
        rules=(
            lambda d, t: d.yes("self-harm-thoughts"),
            lambda d, t: d.at_least("hopelessness", 4),
            lambda d, t: d.at_least("overwhelm-level", 4) and d.at_most("safety", 2),
            lambda d, t: d.yes("previous-attempts") and d.at_least("overwhelm-level", 3),
            lambda d, t: d.severity_percentage >= t.MEDIUM_MIN,
        ),
        actions=MEDIUM_ACTIONS,
    ),
)


CONTEXTUAL_RULES: Sequence[ContextualRule] = (
    ContextualRule(
        label="Substance use with suicidal ideation - compounds risk",
        predicate=lambda d: d.yes("substance-use") and d.yes("self-harm-thoughts"),
    ),
    ContextualRule(
        label="Previous attempts with current suicidal ideation - strongest predictor",
        predicate=lambda d: d.yes("previous-attempts") and d.yes("self-harm-thoughts"),
    ),
    ContextualRule(
        label="Extreme overwhelm without support - social isolation risk",
        predicate=lambda d: d.at_least("overwhelm-level", 4) and d.no("support-available"),
    ),
    ContextualRule(
        label="Feels unsafe with no one to talk to - isolation compounds risk",
        predicate=lambda d: d.at_most("safety", 2) and d.no("support-available"),
    ),
    ContextualRule(
        label="Severe hopelessness with suicidal ideation - compounds risk",
        predicate=lambda d: d.at_least("hopelessness", 4) and d.yes("self-harm-thoughts"),
    ),
    ContextualRule(
        label="Impulsivity with substance use - lowers barrier to acting",
        predicate=lambda d: (
            d.yes("self-harm-thoughts")
            and d.yes("impulsivity")
            and d.yes("substance-use")
        ),
    ),
)

# Single-answer factors reported regardless of ideation
GENERAL_RULES: Sequence[ContextualRule] = (
    ContextualRule(
        label="Substance use present",
        predicate=lambda d: d.yes("substance-use"),
    ),
    ContextualRule(
        label="History of previous attempts",
        predicate=lambda d: d.yes("previous-attempts"),
    ),
    ContextualRule(
        label="Extreme overwhelm",
        predicate=lambda d: d.at_least("overwhelm-level", 4),
    ),
)


def select_tier(
    data: ClassificationInput,
    thresholds: TierThresholds,
    tiers: Sequence[SeverityTier] = SEVERITY_TIERS,
) -> Tuple[SeverityLevel, Tuple[str, ...]]:
    for tier in tiers:
        if tier.matches(data, thresholds):
            return tier.severity, tier.actions
    if data.severity_percentage >= thresholds.LOW_ELEVATED_MIN:
        return SeverityLevel.LOW, LOW_ELEVATED_ACTIONS
    return SeverityLevel.LOW, LOW_ACTIONS


def contextual_factors(
    data: ClassificationInput,
    rules: Sequence[ContextualRule] = CONTEXTUAL_RULES,
) -> List[str]:
    return [rule.label for rule in rules if rule.predicate(data)]


def classify(
    data: ClassificationInput,
    thresholds: TierThresholds = TierThresholds(),
) -> Classification:
    """Run the decision tree, then the contextual and general rules."""
    severity, actions = select_tier(data, thresholds)
    return Classification(
        severity=severity,
        recommended_actions=tuple(actions),
        contextual_factors=tuple(contextual_factors(data)),
        general_factors=tuple(contextual_factors(data, GENERAL_RULES)),
    )

"""Personalized crisis prevention plan generator.

Risk-factor labels from either pipeline (questionnaire or mood history)
are matched by case-insensitive substring against targeted strategies.
Strategies that worked in past crises are surfaced first.
"""
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from safeharbor.shared.exceptions import ResponseTypeError
from safeharbor.shared.models import CrisisEvent, PreventionPlan


@dataclass(frozen=True)
class TargetedStrategy:
    """Plan additions triggered when any keyword appears in a label."""
    keywords: Tuple[str, ...]
    preventive_actions: Tuple[str, ...] = ()
    coping_strategies: Tuple[str, ...] = ()
    support_contacts: Tuple[str, ...] = ()

    def matches(self, labels: Sequence[str]) -> bool:
        return any(k in label for label in labels for k in self.keywords)


RISK_STRATEGIES: Sequence[TargetedStrategy] = (
    TargetedStrategy(
        keywords=("isolation",),
        preventive_actions=("Schedule regular check-ins with friends or family",),
        coping_strategies=("Join online or local support groups",),
    ),
    TargetedStrategy(
        keywords=("substance use",),
        preventive_actions=("Connect with a substance use counselor",),
        support_contacts=("SAMHSA National Helpline: 1-800-662-4357",),
    ),
    TargetedStrategy(
        keywords=("sleep disruption",),
        preventive_actions=("Establish a consistent sleep schedule",),
        coping_strategies=("Practice sleep hygiene techniques",),
    ),
    TargetedStrategy(
        keywords=("lethal means",),
        preventive_actions=("Secure or remove access to lethal means with a trusted person",),
    ),
    TargetedStrategy(
        keywords=("hopelessness",),
        preventive_actions=("Write a list of reasons for living and keep it accessible",),
        coping_strategies=("Revisit your reasons-for-living list",),
    ),
    TargetedStrategy(
        keywords=("previous attempts",),
        preventive_actions=("Review your safety plan with your therapist regularly",),
    ),
    TargetedStrategy(
        keywords=("stress", "anxiety", "overwhelm"),
        preventive_actions=("Identify and reduce your main stressors this week",),
        coping_strategies=("Box breathing (4-4-4-4) when anxiety rises",),
    ),
    TargetedStrategy(
        keywords=("mood decline", "mood deterioration", "low mood"),
        preventive_actions=("Book a check-in with your care provider about recent mood changes",),
    ),
)

PROTECTIVE_STRATEGIES: Sequence[TargetedStrategy] = (
    TargetedStrategy(
        keywords=("social support",),
        preventive_actions=("Keep regular contact with the people who support you",),
    ),
    TargetedStrategy(
        keywords=("feels safe",),
        preventive_actions=("Note what helps you feel safe and add it to your safety plan",),
    ),
)

UNIVERSAL_COPING_STRATEGIES = (
    "Deep breathing exercises (4-7-8 technique)",
    "Progressive muscle relaxation",
    "Grounding techniques (5-4-3-2-1 sensory)",
    "Listen to calming music",
    "Take a warm shower or bath",
    "Go for a walk in nature",
    "Practice mindfulness meditation",
    "Journal your thoughts and feelings",
)

UNIVERSAL_WARNING_SIGNALS = (
    "Feeling overwhelmed for multiple days",
    "Thoughts of self-harm",
    "Increased substance use",
    "Withdrawing from others",
    "Significant changes in sleep or appetite",
    "Feeling hopeless about the future",
    "Unable to complete daily tasks",
)

UNIVERSAL_SUPPORT_CONTACTS = (
    "988 Suicide & Crisis Lifeline",
    "Crisis Text Line: Text HOME to 741741",
    "Your therapist or counselor",
    "Trusted friend or family member",
    "Local crisis center",
)


def _dedupe(items: Iterable[str]) -> List[str]:
    """Remove duplicates, keeping first occurrence order."""
    return list(dict.fromkeys(items))


def _string_list(name: str, value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ResponseTypeError(name, value, "list of strings")
    for item in value:
        if not isinstance(item, str):
            raise ResponseTypeError(name, item, "str")
    return list(value)


def proven_strategies(prior_events: Sequence[CrisisEvent]) -> List[str]:
    """Coping strategies from past crises, first-seen order, deduplicated."""
    strategies = []
    for event in prior_events:
        for strategy in event.coping_strategies_used:
            if isinstance(strategy, str) and strategy.strip():
                strategies.append(strategy.strip())
    return _dedupe(strategies)


def generate_prevention_plan(
    risk_factors: Optional[Sequence[str]],
    protective_factors: Optional[Sequence[str]],
    prior_events: Optional[Sequence[Any]] = None,
) -> PreventionPlan:
    """Build a personalized prevention plan.

    Args:
        risk_factors: Risk labels from an assessment or mood analysis
        protective_factors: Protective labels from an assessment
        prior_events: Past CrisisEvent records (or API dicts)

    Returns:
        PreventionPlan; identical inputs always give identical ordering
    """
    risks = [label.lower() for label in _string_list("risk_factors", risk_factors)]
    protections = [label.lower() for label in _string_list("protective_factors", protective_factors)]
    events = [
        e if isinstance(e, CrisisEvent) else CrisisEvent.from_dict(e)
        for e in (prior_events or [])
    ]

    preventive_actions: List[str] = []
    targeted_coping: List[str] = []
    targeted_contacts: List[str] = []

    for strategy in RISK_STRATEGIES:
        if strategy.matches(risks):
            preventive_actions.extend(strategy.preventive_actions)
            targeted_coping.extend(strategy.coping_strategies)
            targeted_contacts.extend(strategy.support_contacts)

    for strategy in PROTECTIVE_STRATEGIES:
        if strategy.matches(protections):
            preventive_actions.extend(strategy.preventive_actions)

    coping = proven_strategies(events) + targeted_coping + list(UNIVERSAL_COPING_STRATEGIES)

    return PreventionPlan(
        warning_signals=list(UNIVERSAL_WARNING_SIGNALS),
        coping_strategies=_dedupe(coping),
        support_contacts=_dedupe(targeted_contacts + list(UNIVERSAL_SUPPORT_CONTACTS)),
        preventive_actions=_dedupe(preventive_actions),
    )

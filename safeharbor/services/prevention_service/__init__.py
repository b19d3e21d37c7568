"""Prevention Service: personalized crisis prevention plans.

Consumes risk/protective factors from the assessment engine or the mood
service, plus past crisis events from the persistence layer.
"""

from .planner import (
    generate_prevention_plan,
    proven_strategies,
    UNIVERSAL_COPING_STRATEGIES,
    UNIVERSAL_SUPPORT_CONTACTS,
    UNIVERSAL_WARNING_SIGNALS,
)

__all__ = [
    "generate_prevention_plan",
    "proven_strategies",
    "UNIVERSAL_COPING_STRATEGIES",
    "UNIVERSAL_SUPPORT_CONTACTS",
    "UNIVERSAL_WARNING_SIGNALS",
]

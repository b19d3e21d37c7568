"""Clinical scenario evaluation for the assessment engine.

Usage:
    python -m safeharbor.evaluation.cli run
"""

from .scenarios import CRISIS_SCENARIOS, CrisisScenario, run_scenario, run_scenarios

__all__ = ["CRISIS_SCENARIOS", "CrisisScenario", "run_scenario", "run_scenarios"]

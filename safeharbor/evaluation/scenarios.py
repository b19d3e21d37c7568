"""Clinical scenario suite for the assessment engine.

Each scenario is a realistic response set with the outcome a clinician
would expect. Running the suite verifies the decision policy end to end
after any change to the catalog, multipliers or tier rules.
"""
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from safeharbor.shared.models import SeverityLevel
from safeharbor.services.assessment_engine import assess_crisis_severity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrisisScenario:
    """A response set and its expected outcome."""
    scenario_id: str
    name: str
    description: str
    responses: Dict[str, int]
    expected_severity: SeverityLevel
    expected_immediate: bool
    min_risk_factors: int = 0
    expected_patterns: tuple = ()
    expected_actions: tuple = ()


@dataclass
class ScenarioResult:
    """Outcome of running one scenario."""
    scenario_id: str
    passed: bool
    actual_severity: str
    actual_immediate: bool
    risk_factor_count: int
    duration_ms: float
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scenario_id": self.scenario_id,
            "passed": self.passed,
            "actual_severity": self.actual_severity,
            "actual_immediate": self.actual_immediate,
            "risk_factor_count": self.risk_factor_count,
            "duration_ms": round(self.duration_ms, 3),
            "errors": self.errors,
        }


@dataclass
class SuiteReport:
    started_at: datetime
    completed_at: datetime
    results: List[ScenarioResult]

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return len(self.results) - self.passed

    @property
    def all_passed(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat(),
            "total": len(self.results),
            "passed": self.passed,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }


CRISIS_SCENARIOS: Sequence[CrisisScenario] = (
    CrisisScenario(
        scenario_id="critical-suicide-triad",
        name="Critical: Complete Suicide Triad",
        description="Ideation, plan and means with no support",
        responses={
            "safety": 1,
            "self-harm-thoughts": 1,
            "self-harm-plan": 1,
            "self-harm-means": 1,
            "support-available": 0,
            "overwhelm-level": 5,
            "hopelessness": 5,
            "impulsivity": 1,
        },
        expected_severity=SeverityLevel.CRITICAL,
        expected_immediate=True,
        min_risk_factors=4,
        expected_patterns=("suicide_triad",),
        expected_actions=("Call 988 or 911 immediately",),
    ),
    CrisisScenario(
        scenario_id="high-risk-ideation-history",
        name="High Risk: Ideation with History",
        description="Current ideation without a plan, previous attempt, some support",
        responses={
            "safety": 3,
            "self-harm-thoughts": 1,
            "self-harm-plan": 0,
            "support-available": 1,
            "overwhelm-level": 3,
            "hopelessness": 3,
            "previous-attempts": 1,
        },
        expected_severity=SeverityLevel.HIGH,
        expected_immediate=True,
        min_risk_factors=2,
    ),
    CrisisScenario(
        scenario_id="medium-risk-ideation-supported",
        name="Medium Risk: Passive Ideation with Support",
        description="Ideation without plan or impulsivity, feels mostly safe, has support",
        responses={
            "safety": 4,
            "self-harm-thoughts": 1,
            "self-harm-plan": 0,
            "support-available": 1,
            "overwhelm-level": 2,
            "hopelessness": 2,
            "substance-use": 0,
            "previous-attempts": 0,
            "impulsivity": 0,
        },
        expected_severity=SeverityLevel.MEDIUM,
        expected_immediate=False,
        min_risk_factors=1,
    ),
    CrisisScenario(
        scenario_id="severe-overwhelm-unsupported",
        name="High Risk: Severe Overwhelm Without Support",
        description="No ideation, unbearable overwhelm and no one to talk to",
        responses={
            "safety": 3,
            "self-harm-thoughts": 0,
            "support-available": 0,
            "overwhelm-level": 5,
            "hopelessness": 3,
        },
        expected_severity=SeverityLevel.HIGH,
        expected_immediate=True,
        min_risk_factors=1,
    ),
    CrisisScenario(
        scenario_id="low-risk-stress",
        name="Low Risk: General Stress",
        description="Stress without ideation, feels safe, has support",
        responses={
            "safety": 4,
            "self-harm-thoughts": 0,
            "support-available": 1,
            "overwhelm-level": 3,
            "hopelessness": 2,
        },
        expected_severity=SeverityLevel.LOW,
        expected_immediate=False,
        expected_actions=("Continue self-care practices",),
    ),
    CrisisScenario(
        scenario_id="impulsive-high-risk",
        name="Critical: Impulsive High Risk",
        description="Impulsive ideation with substance use and attempt history",
        responses={
            "safety": 1,
            "self-harm-thoughts": 1,
            "impulsivity": 1,
            "substance-use": 1,
            "overwhelm-level": 5,
            "previous-attempts": 1,
        },
        expected_severity=SeverityLevel.CRITICAL,
        expected_immediate=True,
        min_risk_factors=3,
        expected_patterns=("impulsive_ideation_with_history",),
    ),
    CrisisScenario(
        scenario_id="isolated-hopeless",
        name="Critical: Isolation with Hopelessness",
        description="No ideation reported, but compounded hopelessness, isolation and substance use",
        responses={
            "safety": 2,
            "self-harm-thoughts": 0,
            "support-available": 0,
            "overwhelm-level": 4,
            "hopelessness": 5,
            "substance-use": 1,
        },
        expected_severity=SeverityLevel.CRITICAL,
        expected_immediate=True,
        min_risk_factors=3,
        expected_patterns=(
            "isolated_hopelessness_substance",
            "overwhelmed_unsafe_unsupported",
        ),
    ),
    CrisisScenario(
        scenario_id="means-only",
        name="Critical: Access to Means Reported Alone",
        description="Only the lethal-means question answered yes",
        responses={"self-harm-means": 1},
        expected_severity=SeverityLevel.CRITICAL,
        expected_immediate=True,
    ),
    CrisisScenario(
        scenario_id="empty-submission",
        name="Low: Empty Submission",
        description="Nothing answered; must classify low without raising",
        responses={},
        expected_severity=SeverityLevel.LOW,
        expected_immediate=False,
    ),
)


def run_scenario(scenario: CrisisScenario) -> ScenarioResult:
    """Run a single scenario and compare against its expectations."""
    start = time.perf_counter()
    errors: List[str] = []

    result = assess_crisis_severity(scenario.responses)
    duration_ms = (time.perf_counter() - start) * 1000

    if result.severity != scenario.expected_severity:
        errors.append(
            f"severity {result.severity.value} != expected {scenario.expected_severity.value}"
        )
    if result.requires_immediate != scenario.expected_immediate:
        errors.append(
            f"requires_immediate {result.requires_immediate} != expected {scenario.expected_immediate}"
        )
    if len(result.risk_factors) < scenario.min_risk_factors:
        errors.append(
            f"{len(result.risk_factors)} risk factors < minimum {scenario.min_risk_factors}"
        )
    matched = {p.pattern_id for p in result.patterns}
    for pattern_id in scenario.expected_patterns:
        if pattern_id not in matched:
            errors.append(f"pattern {pattern_id} not detected")
    for action in scenario.expected_actions:
        if action not in result.recommended_actions:
            errors.append(f"action {action!r} not recommended")

    return ScenarioResult(
        scenario_id=scenario.scenario_id,
        passed=not errors,
        actual_severity=result.severity.value,
        actual_immediate=result.requires_immediate,
        risk_factor_count=len(result.risk_factors),
        duration_ms=duration_ms,
        errors=errors,
    )


def run_scenarios(
    scenario_ids: Optional[Sequence[str]] = None,
    scenarios: Sequence[CrisisScenario] = CRISIS_SCENARIOS,
) -> SuiteReport:
    """Run all scenarios, or only those named in scenario_ids.

    Raises:
        KeyError: If a requested scenario id does not exist
    """
    by_id = {s.scenario_id: s for s in scenarios}
    if scenario_ids:
        missing = [sid for sid in scenario_ids if sid not in by_id]
        if missing:
            raise KeyError(f"Unknown scenario(s): {', '.join(missing)}")
        selected = [by_id[sid] for sid in scenario_ids]
    else:
        selected = list(scenarios)

    started_at = datetime.now(timezone.utc)
    results = []
    for scenario in selected:
        outcome = run_scenario(scenario)
        if not outcome.passed:
            logger.error(
                "SCENARIO_FAILED",
                extra={"scenario_id": scenario.scenario_id, "errors": outcome.errors},
            )
        results.append(outcome)

    report = SuiteReport(
        started_at=started_at,
        completed_at=datetime.now(timezone.utc),
        results=results,
    )
    logger.info(
        "SCENARIO_SUITE_COMPLETED",
        extra={"total": len(results), "passed": report.passed, "failed": report.failed},
    )
    return report

"""Tests for the clinical scenario suite and its CLI."""
import json

import pytest

from safeharbor.shared.models import SeverityLevel
from safeharbor.evaluation import CRISIS_SCENARIOS, CrisisScenario, run_scenario, run_scenarios
from safeharbor.evaluation.cli import main


class TestScenarioSuite:
    def test_all_scenarios_pass(self):
        report = run_scenarios()
        failures = {r.scenario_id: r.errors for r in report.results if not r.passed}
        assert failures == {}
        assert report.all_passed
        assert len(report.results) == len(CRISIS_SCENARIOS)

    def test_scenario_ids_unique(self):
        ids = [s.scenario_id for s in CRISIS_SCENARIOS]
        assert len(ids) == len(set(ids))

    def test_select_subset(self):
        report = run_scenarios(["means-only", "empty-submission"])
        assert [r.scenario_id for r in report.results] == ["means-only", "empty-submission"]

    def test_unknown_scenario(self):
        with pytest.raises(KeyError):
            run_scenarios(["does-not-exist"])

    def test_failing_expectation_reported(self):
        scenario = CrisisScenario(
            scenario_id="wrong-expectation",
            name="Wrong",
            description="Empty submission wrongly expected as critical",
            responses={},
            expected_severity=SeverityLevel.CRITICAL,
            expected_immediate=True,
        )
        result = run_scenario(scenario)
        assert result.passed is False
        assert len(result.errors) == 2

    def test_report_to_dict(self):
        data = run_scenarios(["means-only"]).to_dict()
        assert data["total"] == 1
        assert data["passed"] == 1
        assert data["results"][0]["actual_severity"] == "critical"


class TestCli:
    def test_list(self, capsys):
        assert main(["list"]) == 0
        assert "critical-suicide-triad" in capsys.readouterr().out

    def test_run_all(self, capsys):
        assert main(["run"]) == 0
        assert f"{len(CRISIS_SCENARIOS)}/{len(CRISIS_SCENARIOS)} scenarios passed" in capsys.readouterr().out

    def test_run_writes_report(self, tmp_path):
        output = tmp_path / "reports" / "results.json"
        assert main(["run", "--scenarios", "low-risk-stress", "--output", str(output)]) == 0
        assert json.loads(output.read_text())["passed"] == 1

    def test_unknown_scenario_exit_code(self):
        assert main(["run", "--scenarios", "nope"]) == 2

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

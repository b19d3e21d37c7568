#!/usr/bin/env python3
"""Command-line interface for the clinical scenario suite.

Usage:
    python -m safeharbor.evaluation.cli --help
    python -m safeharbor.evaluation.cli run
    python -m safeharbor.evaluation.cli run --scenarios critical-suicide-triad means-only
    python -m safeharbor.evaluation.cli run --output results.json
    python -m safeharbor.evaluation.cli list
"""
import argparse
import json
import logging
import sys
from pathlib import Path

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """Set up argument parser."""
    parser = argparse.ArgumentParser(
        description="SafeHarbor clinical scenario CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    run_parser = subparsers.add_parser("run", help="Run clinical scenarios")
    run_parser.add_argument(
        "--scenarios", nargs="+",
        help="Scenario ids to run (default: all)"
    )
    run_parser.add_argument(
        "--output", type=str,
        help="Write the JSON report to this path"
    )

    subparsers.add_parser("list", help="List available scenarios")

    return parser


def cmd_run(args) -> int:
    """Run scenarios; exit code 1 if any failed."""
    from .scenarios import run_scenarios

    try:
        report = run_scenarios(args.scenarios)
    except KeyError as e:
        logger.error("Unknown scenario: %s", e)
        return 2

    for result in report.results:
        status = "PASS" if result.passed else "FAIL"
        print(f"[{status}] {result.scenario_id}: {result.actual_severity}")
        for error in result.errors:
            print(f"       - {error}")
    print(f"\n{report.passed}/{len(report.results)} scenarios passed")

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(report.to_dict(), indent=2))
        logger.info("Report written to %s", output_path)

    return 0 if report.all_passed else 1


def cmd_list(args) -> int:
    """List scenarios."""
    from .scenarios import CRISIS_SCENARIOS

    for scenario in CRISIS_SCENARIOS:
        print(f"{scenario.scenario_id:32} {scenario.expected_severity.value:9} {scenario.name}")
    return 0


def main(argv=None) -> int:
    parser = setup_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        return cmd_run(args)
    if args.command == "list":
        return cmd_list(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())

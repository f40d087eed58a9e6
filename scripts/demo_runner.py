"""Replay a canned call through the compliance evaluator.

Simulates a live call by feeding scripted utterances one at a time to the
evaluator and printing the alerts and suggested next lines raised after
each one.

Usage:
    python scripts/demo_runner.py dnc-request
    python scripts/demo_runner.py --list
"""

import argparse
import sys
import time

from ww_common.config import get_settings
from ww_common.logging import configure_logging
from ww_common.models import EvaluationResult, Speaker

from compliance.evaluator import ComplianceEvaluator
from compliance.rule_library import RuleLibrary, RuleLibraryError
from compliance.scenarios import DEFAULT_SCENARIO, SCENARIOS, Scenario, replay

MAX_PAUSE_S = 2.0
RULE = "-" * 75


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for the demo runner."""
    parser = argparse.ArgumentParser(description="Replay a Whisperwire demo call")
    parser.add_argument(
        "scenario",
        nargs="?",
        default=DEFAULT_SCENARIO,
        help=f"Scenario to replay (default: {DEFAULT_SCENARIO})",
    )
    parser.add_argument("--list", action="store_true", help="List available scenarios and exit")
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Pause between utterances (capped at 2 s)",
    )
    parser.add_argument("--rules", type=str, default="", help="JSON rule-set file to load")
    parser.add_argument("--verbose", action="store_true", help="Show service log output")
    return parser.parse_args(argv)


def _format_time(ms: int) -> str:
    seconds = ms // 1000
    return f"{seconds // 60}:{seconds % 60:02d}"


def print_scenarios() -> None:
    print("\nAvailable scenarios:\n")
    for key, scenario in SCENARIOS.items():
        print(f"  {key:<20} - {scenario.name}")
        print(f"  {'':<20}   {scenario.description}\n")


def print_result(result: EvaluationResult) -> None:
    for alert in result.alerts:
        print(f"  >> ALERT [{alert.rule_id}] {alert.title} ({alert.severity.value}, {alert.confidence}%)")
        print(f"     evidence: \"{alert.evidence.quote}\"")
    for line in result.suggested_next_lines:
        print(f"  -> suggest ({line.confidence}%): {line.text}")


def run(scenario: Scenario, library: RuleLibrary, realtime: bool = False) -> int:
    """Replay *scenario* and print each step; return the number of alerts."""
    meta = scenario.metadata
    print(f"\n{RULE}\n  SCENARIO: {scenario.name}\n  {scenario.description}\n{RULE}\n")
    print("Call Metadata:")
    print(f"  Agent: {meta.agent_name} ({meta.agent_id})")
    print(f"  Call Type: {meta.call_type}")
    print(f"  DNC Listed: {'YES' if meta.is_dnc_listed else 'No'}")
    print(f"  Prior Consent: {'Yes' if meta.has_prior_consent else 'NO'}")
    print(f"  Prerecorded: {'YES' if meta.is_prerecorded else 'No'}")
    print(f"\n{RULE}\n")

    settings = get_settings()
    evaluator = ComplianceEvaluator(
        library,
        suggestion_limit=settings.suggestion_limit,
        evidence_context_chars=settings.evidence_context_chars,
    )
    total_alerts = 0
    last_ms = 0
    for step in replay(scenario, evaluator):
        segment = step.segment
        if segment is not None:
            if realtime and segment.timestamp_ms > last_ms:
                time.sleep(min((segment.timestamp_ms - last_ms) / 1000.0, MAX_PAUSE_S))
            last_ms = segment.timestamp_ms
            who = "AGENT" if segment.speaker == Speaker.AGENT else "CUSTOMER"
            print(f"[{_format_time(segment.timestamp_ms)}] {who}:")
            print(f"         {segment.text}")
        else:
            print("[call start]")
        print_result(step.result)
        print()
        total_alerts += len(step.result.alerts)

    print(f"{RULE}\n  {total_alerts} alert(s) raised\n  {library.rule_set.disclaimer}\n")
    return total_alerts


def main(argv: list[str] | None = None) -> int:
    """Run the demo runner."""
    args = parse_args(argv)
    if args.list:
        print_scenarios()
        return 0

    scenario = SCENARIOS.get(args.scenario)
    if scenario is None:
        print(f"Unknown scenario: {args.scenario}", file=sys.stderr)
        print_scenarios()
        return 1

    configure_logging("demo-runner", level="INFO" if args.verbose else "WARNING", json=False)
    try:
        library = RuleLibrary.from_file(args.rules) if args.rules else RuleLibrary.default()
    except RuleLibraryError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    run(scenario, library, realtime=args.realtime)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Entry point for rendering an artifact's gating states.

Loads merged gating states from a YAML/JSON file and writes an HTML page
and/or a YAML summary.  ``--focus`` seeds the expanded row the same way a
dashboard deep link does, and ``--waive`` emits the waiver request command
for one test case as a JSON line on stdout.  ``--save-config`` writes the
effective dashboard settings back to ``--config-file``.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import yaml

from gatingboard.config import DashboardConfig
from gatingboard.gating.commands import ClickEvent, Command, WaiveAction
from gatingboard.loader import load_states
from gatingboard.reporting.html_reporter import generate_html_report, write_html_report
from gatingboard.reporting.reporter import GatingReporter
from gatingboard.view.expansion import seed_expanded_id


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render per-test CI gating status for an artifact"
    )
    parser.add_argument(
        "--states",
        required=True,
        type=Path,
        help="Path to the YAML/JSON file with merged gating states",
    )
    parser.add_argument(
        "--config-file",
        type=Path,
        default=None,
        help="Path to the dashboard JSON config file",
    )
    parser.add_argument(
        "--dashboard-url",
        type=str,
        default=None,
        help="Base dashboard URL for per-test links (overrides config)",
    )
    parser.add_argument(
        "--title",
        type=str,
        default=None,
        help="HTML page title (overrides config)",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Persist --dashboard-url and --title into --config-file",
    )
    parser.add_argument(
        "--focus",
        type=str,
        default=None,
        help="Expand a test case: tc:<test-case-name> or id:<result-id>",
    )
    parser.add_argument(
        "--html-output",
        type=Path,
        default=None,
        help="Path to write the HTML page",
    )
    parser.add_argument(
        "--yaml-output",
        type=Path,
        default=None,
        help="Path to write the YAML summary report",
    )
    parser.add_argument(
        "--waive",
        type=str,
        default=None,
        metavar="TESTCASE",
        help="Emit a waiver request for TESTCASE on stdout",
    )
    return parser.parse_args(argv)


def _print_command(command: Command) -> None:
    # YAML loads unquoted timestamps as datetime objects.
    print(json.dumps(command.to_dict(), sort_keys=True, default=str))


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    config = DashboardConfig.load(args.config_file).with_overrides(
        dashboard_url=args.dashboard_url, report_title=args.title
    )

    if args.save_config:
        if args.config_file is None:
            print("Error: --save-config requires --config-file", file=sys.stderr)
            return 1
        try:
            config.save(args.config_file)
        except OSError as e:
            print(f"Error: Cannot write config file: {e}", file=sys.stderr)
            return 1
        print(f"gatingboard: config saved to {args.config_file}", file=sys.stderr)

    try:
        artifact, states = load_states(args.states)
    except FileNotFoundError:
        print(f"Error: States file not found: {args.states}", file=sys.stderr)
        return 1
    except yaml.YAMLError as e:
        print(f"Error: Invalid YAML in states file: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"gatingboard: loaded {len(states)} gating states", file=sys.stderr)

    if args.waive is not None:
        state = next((s for s in states if s.testcase == args.waive), None)
        if state is None:
            print(f"Error: Unknown test case: {args.waive}", file=sys.stderr)
            return 1
        command = WaiveAction(artifact, state, _print_command).activate(ClickEvent())
        if command is None:
            print(
                f"Error: {args.waive} has no gating requirement and cannot be waived",
                file=sys.stderr,
            )
            return 1

    expanded_id = seed_expanded_id(args.focus, states)
    if args.focus and not expanded_id:
        print(f"gatingboard: focus {args.focus!r} matched no test case", file=sys.stderr)

    if args.html_output:
        content = generate_html_report(
            artifact,
            states,
            expanded_id=expanded_id,
            dashboard_url=config.dashboard_url,
            title=config.report_title,
            linkify_values=config.linkify_values,
            human_timestamps=config.human_timestamps,
        )
        write_html_report(content, args.html_output)
        print(f"gatingboard: HTML report written to {args.html_output}", file=sys.stderr)

    if args.yaml_output:
        reporter = GatingReporter(artifact)
        reporter.set_dashboard_url(config.dashboard_url)
        reporter.add_states(states)
        reporter.write_yaml(args.yaml_output)
        print(f"gatingboard: YAML report written to {args.yaml_output}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""probeharness CLI — run the bundled optimizer probes.

Usage::

    python -m probeharness [options]

With no options every registered scenario is run in registry order.

Options::

    --scenario NAME       Run only this scenario (repeatable)
    --argument N          Sample argument passed to every probe (default 10)
    --json-output PATH    Also write the combined report as JSON
    --verbose / -v        Enable verbose logging and allocation tracing
"""

import argparse
import json
import logging
import sys
import tracemalloc
from pathlib import Path

from probeharness.config import HarnessConfig
from probeharness.harness import Harness
from probeharness.reporter import ResultReporter
from probeharness.scenarios import SCENARIOS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="probeharness",
        description=(
            "Discover, order and run optimizer conformance probes, "
            "printing one result block per probe method."
        ),
    )
    parser.add_argument(
        "--scenario",
        action="append",
        default=None,
        metavar="NAME",
        help=f"Scenario to run (repeatable). Known: {', '.join(SCENARIOS)}",
    )
    parser.add_argument(
        "--argument",
        type=int,
        default=10,
        help="Integer argument passed to every probe method (default: 10)",
    )
    parser.add_argument(
        "--json-output",
        type=Path,
        default=None,
        metavar="PATH",
        help="Write the combined report as JSON to PATH",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="Enable verbose logging and tracemalloc allocation tracing",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.  Returns 0 after a run, whatever the probes did."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    # Stress workloads log their traced peak allocation when tracing is on.
    started_tracing = args.verbose and not tracemalloc.is_tracing()
    if started_tracing:
        tracemalloc.start()
    try:
        return _run(args)
    finally:
        if started_tracing:
            tracemalloc.stop()


def _run(args: argparse.Namespace) -> int:
    """Run the selected scenarios through the harness."""
    names = args.scenario or list(SCENARIOS)
    unknown = [n for n in names if n not in SCENARIOS]
    if unknown:
        print(f"Error: Unknown scenario(s): {', '.join(unknown)}", file=sys.stderr)
        return 1

    config = HarnessConfig(sample_argument=args.argument)
    reporter = ResultReporter()
    runs: dict[str, dict] = {}

    for name in names:
        try:
            report = Harness(SCENARIOS[name], config, reporter).run()
        except Exception as exc:
            logger.error("Scenario '%s' could not run: %s", name, exc)
            runs[name] = {"error": f"{type(exc).__name__}: {exc}"}
            continue
        runs[name] = report.as_dict()

    if args.json_output:
        try:
            args.json_output.write_text(
                json.dumps(runs, indent=2, default=str) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            print(
                f"Warning: Could not write JSON report: {exc}",
                file=sys.stderr,
            )

    return 0

"""Command-line entry point: generate a trace population and dump it as JSON."""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from agent_traces.analysis.summary import compute_dashboard_metrics
from agent_traces.config import load_settings
from agent_traces.exceptions import ConfigurationError
from agent_traces.synthetic.generator import generate_sample_trace_data
from agent_traces.telemetry import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agent-traces",
        description="Generate synthetic multi-agent AI traces for the dashboard",
    )
    parser.add_argument(
        "--sessions",
        type=int,
        help=(
            "Number of sessions to generate "
            "(default: AGENT_TRACES_SESSION_COUNT or 150)"
        ),
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="RNG seed for reproducible output (default: AGENT_TRACES_SEED)",
    )
    parser.add_argument(
        "--summary-only",
        action="store_true",
        help="Print the summary and overview metrics instead of the full payload",
    )
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    try:
        settings = load_settings()
    except ConfigurationError as e:
        sys.stderr.write(f"Invalid configuration: {e.message}\n")
        return 1

    session_count = (
        args.sessions if args.sessions is not None else settings.session_count
    )
    seed = args.seed if args.seed is not None else settings.seed

    data = generate_sample_trace_data(
        session_count, seed=seed, window_days=settings.window_days
    )

    if args.summary_only:
        payload = {
            "summary": data.summary.model_dump(mode="json", by_alias=True),
            "metrics": compute_dashboard_metrics(data).model_dump(
                mode="json", by_alias=True
            ),
        }
    else:
        payload = data.to_wire()

    text = json.dumps(payload, indent=2)
    if args.output:
        args.output.write_text(text + "\n")
        logger.info(f"Wrote trace data to {args.output}")
    else:
        sys.stdout.write(text + "\n")
    return 0

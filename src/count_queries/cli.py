"""Command-line interface for the query counter."""

import argparse
import logging
import os
import sys

from count_queries.partition.types import DEFAULT_MAX_LINE_LENGTH
from count_queries.solver.profiling import memory_profile
from count_queries.solver.solve import DEFAULT_LIMIT, CountOptions, count_queries

logger = logging.getLogger(__name__)

# Environment variable overriding the default line buffer cap.
CQ_MAX_LINE_LENGTH_ENV = "CQ_MAX_LINE_LENGTH"

MIN_LIMIT = 150
MAX_LIMIT = 950


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging to write to stderr."""
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="count-queries",
        description="Count occurrences of each distinct line in a large file.",
    )

    parser.add_argument(
        "--input",
        required=True,
        help="Path to the input file (one query per line)",
    )

    parser.add_argument(
        "--output",
        required=True,
        help="Path to the resulting file (tab-delimited: query, count)",
    )

    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_LIMIT,
        help=(
            f"Distinct queries held in memory per part, from {MIN_LIMIT} "
            f"to {MAX_LIMIT} (default: {DEFAULT_LIMIT})"
        ),
    )

    parser.add_argument(
        "--max-line-length",
        type=int,
        default=os.environ.get(CQ_MAX_LINE_LENGTH_ENV) or DEFAULT_MAX_LINE_LENGTH,
        help=(
            f"Longest accepted input line in bytes (default: ${CQ_MAX_LINE_LENGTH_ENV} "
            f"or {DEFAULT_MAX_LINE_LENGTH})"
        ),
    )

    parser.add_argument(
        "--tmp-dir",
        default=None,
        help="Directory for intermediate part files (default: system temp dir)",
    )

    parser.add_argument(
        "--memprofile",
        default=None,
        help="Directory to write a memory profile snapshot to",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    return parser


def validate_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    """Reject arguments the counter cannot run with; exits via parser.error."""
    if not args.input.strip() or not args.output.strip():
        parser.error("both --input and --output must be non-empty paths")
    if not MIN_LIMIT <= args.limit <= MAX_LIMIT:
        parser.error(f"--limit must be between {MIN_LIMIT} and {MAX_LIMIT}, got {args.limit}")
    if args.max_line_length <= 0:
        parser.error(f"--max-line-length must be positive, got {args.max_line_length}")


def main(argv: list[str] | None = None) -> int:
    """Entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging based on --log-level
    log_level = getattr(logging, args.log_level)
    configure_logging(log_level)

    validate_args(parser, args)

    options = CountOptions(
        limit=args.limit,
        max_line_length=args.max_line_length,
        tmp_dir=args.tmp_dir,
    )

    try:
        with memory_profile(args.memprofile):
            count_queries(args.input, args.output, options)
    except (OSError, ValueError) as exc:
        logger.error("count failed: %s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "numpy>=1.26",
#     "pydantic>=2.0",
# ]
# ///
"""Estimate how often baseball games go to extra innings, and for how long.

Usage:
    uv run extra_innings.py
    uv run extra_innings.py --num-games 100000 --extra-innings-score-percent 30
    uv run extra_innings.py --skip-first-nine-innings --disable-parallel --seed 42
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from game_state import GameInvariantError
from models import (
    DEFAULT_NUM_GAMES,
    DEFAULT_SCORE_PERCENT,
    MAX_SCORE_PERCENT,
    MIN_SCORE_PERCENT,
    SimulationConfig,
)
from report import format_inning_counts
from simulation import simulate_inning_counts

EXIT_OK = 0
EXIT_BAD_REGULAR_PERCENT = 1
EXIT_BAD_EXTRA_PERCENT = 2
EXIT_BAD_CONFIG = 3
EXIT_SIMULATION_FAILED = 4

# Checked in this order; the first invalid field decides the exit code.
_FIELD_EXIT_CODES = {
    "regular_score_percent": (EXIT_BAD_REGULAR_PERCENT, "--regular-score-percent"),
    "extra_innings_score_percent": (EXIT_BAD_EXTRA_PERCENT, "--extra-innings-score-percent"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate baseball games and count how many innings extra-inning games last."
    )
    parser.add_argument(
        "-n", "--num-games", type=int, default=DEFAULT_NUM_GAMES,
        help="How many games to simulate (default: %(default)s).",
    )
    parser.add_argument(
        "-r", "--regular-score-percent", type=int, default=DEFAULT_SCORE_PERCENT,
        help="The geometric factor for a chance to score in a non-extra inning.",
    )
    parser.add_argument(
        "-e", "--extra-innings-score-percent", type=int, default=DEFAULT_SCORE_PERCENT,
        help="The geometric factor for a chance to score in an extra inning.",
    )
    parser.add_argument(
        "-s", "--skip-first-nine-innings", action="store_true",
        help="Skip the first nine innings and assume all games go to extra innings.",
    )
    parser.add_argument(
        "-d", "--disable-parallel", action="store_true",
        help="Disable simulating games in parallel.",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for a replayable run (random if omitted).",
    )
    parser.add_argument(
        "--workers", type=int, default=None, metavar="N",
        help="Worker processes for a parallel run (default: CPU count).",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the summary as JSON instead of a table.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log run progress.",
    )
    return parser


def config_error_exit_code(exc: ValidationError) -> tuple[int, str]:
    """Map a configuration validation error to an exit code and message."""
    failed = {str(err["loc"][0]) for err in exc.errors() if err.get("loc")}
    for field_name, (code, flag) in _FIELD_EXIT_CODES.items():
        if field_name in failed:
            return code, (
                f"{flag} must be between {MIN_SCORE_PERCENT} and "
                f"{MAX_SCORE_PERCENT} (inclusive)"
            )
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return EXIT_BAD_CONFIG, f"invalid configuration: {details}"


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        config = SimulationConfig(
            num_games=args.num_games,
            regular_score_percent=args.regular_score_percent,
            extra_innings_score_percent=args.extra_innings_score_percent,
            skip_first_nine_innings=args.skip_first_nine_innings,
            disable_parallel=args.disable_parallel,
            seed=args.seed,
            workers=args.workers,
        )
    except ValidationError as e:
        code, message = config_error_exit_code(e)
        print(f"Error: {message}", file=sys.stderr)
        return code

    try:
        summary = simulate_inning_counts(config)
    except GameInvariantError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_SIMULATION_FAILED

    if args.json:
        print(summary.model_dump_json(indent=2))
    else:
        print(format_inning_counts(summary))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

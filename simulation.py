# /// script
# requires-python = ">=3.12"
# dependencies = ["numpy>=1.26", "pydantic>=2.0"]
# ///
"""Extra-innings Monte Carlo engine.

Plays many independent games under the half-inning scoring model and
tallies how long every extra-inning game lasted.

Games run either sequentially from one seeded stream, or in parallel
across a process pool. In parallel mode the game range is cut into
chunks, every chunk draws from its own generator seeded from a
``numpy.random.SeedSequence`` spawn, and every chunk fills a private
histogram that is merged once the pool returns. Nothing is shared between
workers, so no locking is needed.

A run is replayable for a fixed seed and worker count.
"""

from __future__ import annotations

import logging
import random
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from config import get_max_workers
from game_state import (
    MAX_INNINGS,
    REGULATION_INNINGS,
    FinalScore,
    GameInvariantError,
    GameState,
    InningOverflowError,
)
from models import SimulationConfig, SimulationSummary
from scoring import ScoringModel, expected_runs

logger = logging.getLogger(__name__)

# Chunks handed to the pool per worker, so a slow chunk does not idle the rest.
CHUNKS_PER_WORKER = 4

FIRST_EXTRA_INNING = REGULATION_INNINGS + 1


# ---------------------------------------------------------------------------
# Game driver
# ---------------------------------------------------------------------------

class Game:
    """Drives one game from first pitch to final score."""

    def __init__(self, scoring: ScoringModel, rng: random.Random,
                 skip_first_nine_innings: bool = False):
        self.state = GameState()
        if skip_first_nine_innings:
            self.state.skip_regulation()
        self.scoring = scoring
        self.rng = rng

    def complete(self) -> FinalScore:
        while not self.state.is_over():
            self.state.step(self.scoring.runs(self.state, self.rng))
        return self.state.final_score()


def simulate_game(scoring: ScoringModel, rng: random.Random,
                  skip_first_nine_innings: bool = False) -> FinalScore:
    """Play a single game and return its final score."""
    return Game(scoring, rng, skip_first_nine_innings).complete()


# ---------------------------------------------------------------------------
# Extra-inning histogram
# ---------------------------------------------------------------------------

class InningHistogram:
    """Count of games per extra-inning length (10th through MAX_INNINGS)."""

    def __init__(self, counts: np.ndarray | None = None):
        if counts is None:
            counts = np.zeros(MAX_INNINGS - REGULATION_INNINGS, dtype=np.int64)
        self.counts = counts

    def _index(self, inning: int) -> int:
        if inning > MAX_INNINGS:
            raise InningOverflowError(inning)
        if inning < FIRST_EXTRA_INNING:
            raise ValueError(f"Inning {inning} is not an extra inning")
        return inning - FIRST_EXTRA_INNING

    def record(self, inning: int) -> None:
        self.counts[self._index(inning)] += 1

    def merge(self, other: InningHistogram) -> None:
        self.counts += other.counts

    def total(self) -> int:
        return int(self.counts.sum())

    def items(self) -> Iterator[tuple[int, int]]:
        """Yield ``(inning, count)`` for every observed length, ascending."""
        for index in np.flatnonzero(self.counts):
            yield int(index) + FIRST_EXTRA_INNING, int(self.counts[index])

    def to_dict(self) -> dict[int, int]:
        return dict(self.items())


@dataclass
class ChunkResult:
    games_played: int = 0
    histogram: InningHistogram = field(default_factory=InningHistogram)

    def merge(self, other: ChunkResult) -> None:
        self.games_played += other.games_played
        self.histogram.merge(other.histogram)


# ---------------------------------------------------------------------------
# Game loops
# ---------------------------------------------------------------------------

def _simulate_games(count: int, scoring: ScoringModel, rng: random.Random,
                    skip_first_nine_innings: bool) -> ChunkResult:
    result = ChunkResult()
    for _ in range(count):
        final = simulate_game(scoring, rng, skip_first_nine_innings)
        result.games_played += 1
        if final.is_extra_innings:
            result.histogram.record(final.inning)
    return result


def _simulate_chunk(task: tuple[int, int, ScoringModel, bool]) -> ChunkResult:
    count, seed, scoring, skip_first_nine_innings = task
    start = time.time()
    result = _simulate_games(count, scoring, random.Random(seed), skip_first_nine_innings)
    logger.debug("Chunk of %d games (seed %d) done in %.0f ms",
                 count, seed, (time.time() - start) * 1000)
    return result


def _chunk_sizes(num_games: int, num_chunks: int) -> list[int]:
    num_chunks = max(1, min(num_chunks, num_games))
    base, extra = divmod(num_games, num_chunks)
    sizes = [base + (1 if i < extra else 0) for i in range(num_chunks)]
    return [size for size in sizes if size > 0]


def _simulate_parallel(num_games: int, scoring: ScoringModel,
                       skip_first_nine_innings: bool, seed: int,
                       workers: int) -> ChunkResult:
    sizes = _chunk_sizes(num_games, workers * CHUNKS_PER_WORKER)
    child_seeds = np.random.SeedSequence(seed).spawn(len(sizes))
    tasks = [
        (size, int(child.generate_state(1)[0]), scoring, skip_first_nine_innings)
        for size, child in zip(sizes, child_seeds)
    ]

    total = ChunkResult()
    if workers == 1:
        for task in tasks:
            total.merge(_simulate_chunk(task))
        return total

    with ProcessPoolExecutor(max_workers=workers) as pool:
        for result in pool.map(_simulate_chunk, tasks):
            total.merge(result)
    return total


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def resolve_seed(seed: int | None) -> int:
    if seed is None:
        seed = random.randint(0, 2**31 - 1)
    return seed


def simulate_inning_counts(config: SimulationConfig) -> SimulationSummary:
    """Simulate ``config.num_games`` games and tally the extra-inning lengths."""
    seed = resolve_seed(config.seed)
    scoring = ScoringModel(
        regular_score_percent=config.regular_score_percent,
        extra_innings_score_percent=config.extra_innings_score_percent,
    )

    if config.disable_parallel:
        workers = 1
    else:
        workers = max(1, min(config.workers or get_max_workers(), config.num_games))

    logger.info(
        "Simulating %d games (regular %d%%, extra %d%%, skip regulation: %s) "
        "with seed %d on %d worker(s)",
        config.num_games, config.regular_score_percent,
        config.extra_innings_score_percent, config.skip_first_nine_innings,
        seed, workers,
    )
    logger.info(
        "Expected runs per half-inning: %.2f regular, %.2f extra",
        expected_runs(config.regular_score_percent),
        expected_runs(config.extra_innings_score_percent),
    )

    start = time.time()
    if config.disable_parallel:
        result = _simulate_games(
            config.num_games, scoring, random.Random(seed),
            config.skip_first_nine_innings,
        )
    else:
        result = _simulate_parallel(
            config.num_games, scoring, config.skip_first_nine_innings,
            seed, workers,
        )
    elapsed = time.time() - start

    if result.games_played != config.num_games:
        raise GameInvariantError(
            f"Played {result.games_played} games, expected {config.num_games}"
        )

    summary = SimulationSummary(
        total_games=result.games_played,
        extra_inning_games=result.histogram.total(),
        inning_counts=result.histogram.to_dict(),
        seed=seed,
        workers=workers,
    )
    logger.info("Finished in %.2fs: %d of %d games went to extra innings (%.2f%%)",
                elapsed, summary.extra_inning_games, summary.total_games,
                summary.extra_inning_fraction * 100)
    return summary

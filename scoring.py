# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Half-inning scoring model.

Runs are drawn from a geometric process: roll a uniform integer in
[1, 100]; every roll below the configured percentage is a run and earns
another roll. The first roll at or above the percentage ends the
half-inning. A percentage of 1 can therefore never score.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from game_state import REGULATION_INNINGS, GameState
from models import MAX_SCORE_PERCENT, MIN_SCORE_PERCENT


def geometric_runs(percent: int, rng: random.Random) -> int:
    """Return the runs scored in one half-inning for ``percent``."""
    runs = 0
    while rng.randint(1, 100) < percent:
        runs += 1
    return runs


def expected_runs(percent: int) -> float:
    """Mean runs per half-inning for ``percent``."""
    p = (percent - 1) / 100
    return p / (1 - p)


@dataclass(frozen=True)
class ScoringModel:
    """Scoring percentages for regulation and extra innings."""
    regular_score_percent: int
    extra_innings_score_percent: int

    def __post_init__(self) -> None:
        for name in ("regular_score_percent", "extra_innings_score_percent"):
            value = getattr(self, name)
            if not MIN_SCORE_PERCENT <= value <= MAX_SCORE_PERCENT:
                raise ValueError(
                    f"{name} must be between {MIN_SCORE_PERCENT} and "
                    f"{MAX_SCORE_PERCENT} (inclusive), got {value}"
                )

    def percent_for(self, state: GameState) -> int:
        # Decided on the state before the half-inning is stepped, so the top
        # of the 10th still uses the regular percentage.
        if state.inning > REGULATION_INNINGS:
            return self.extra_innings_score_percent
        return self.regular_score_percent

    def runs(self, state: GameState, rng: random.Random) -> int:
        return geometric_runs(self.percent_for(state), rng)

# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Data models for the extra-innings simulator."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Half(str, Enum):
    TOP = "TOP"  # away bats
    BOTTOM = "BOTTOM"  # home bats

    def flipped(self) -> Half:
        return Half.BOTTOM if self is Half.TOP else Half.TOP


class Team(str, Enum):
    HOME = "HOME"
    AWAY = "AWAY"


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------

DEFAULT_NUM_GAMES = 1_000_000
DEFAULT_SCORE_PERCENT = 40
MIN_SCORE_PERCENT = 1
MAX_SCORE_PERCENT = 99


class SimulationConfig(BaseModel):
    """Validated configuration for one simulation run.

    Both scoring percentages are geometric factors: each draw of a uniform
    integer in [1, 100] that falls below the percentage adds a run.
    """
    model_config = ConfigDict(frozen=True)

    num_games: int = Field(default=DEFAULT_NUM_GAMES, ge=1, description="How many games to simulate.")
    regular_score_percent: int = Field(
        default=DEFAULT_SCORE_PERCENT, ge=MIN_SCORE_PERCENT, le=MAX_SCORE_PERCENT,
        description="Geometric factor for a chance to score in a non-extra inning.",
    )
    extra_innings_score_percent: int = Field(
        default=DEFAULT_SCORE_PERCENT, ge=MIN_SCORE_PERCENT, le=MAX_SCORE_PERCENT,
        description="Geometric factor for a chance to score in an extra inning.",
    )
    skip_first_nine_innings: bool = Field(
        default=False, description="Start every game tied at the end of regulation.",
    )
    disable_parallel: bool = Field(default=False, description="Simulate games one at a time.")
    seed: Optional[int] = Field(default=None, ge=0, description="Seed for a replayable run.")
    workers: Optional[int] = Field(default=None, ge=1, description="Worker process count.")


# ---------------------------------------------------------------------------
# Run results
# ---------------------------------------------------------------------------

class SimulationSummary(BaseModel):
    """Aggregate result of a simulation run."""
    total_games: int
    extra_inning_games: int
    inning_counts: dict[int, int] = Field(
        default_factory=dict,
        description="Games per extra-inning length, ascending, non-zero only.",
    )
    seed: int
    workers: int = 1

    @property
    def extra_inning_fraction(self) -> float:
        if self.total_games == 0:
            return 0.0
        return self.extra_inning_games / self.total_games

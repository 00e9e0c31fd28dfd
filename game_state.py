# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Per-game state machine.

A game is reduced to two run totals, an inning counter and a half-inning
marker. The only transition is ``step``, which plays one half-inning with a
run count decided elsewhere. The termination rule covers both the walk-off
and the "home team does not bat when already ahead" cases:

- top of the regulation inning with the home team leading, or
- bottom of any inning at or past regulation with the scores unequal.
"""

from __future__ import annotations

from dataclasses import dataclass

from models import Half, Team

REGULATION_INNINGS = 9

# Highest inning the extra-inning tally can represent.
MAX_INNINGS = 255


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class GameInvariantError(Exception):
    """Raised when a game reaches a state the rules make impossible."""


class InningOverflowError(GameInvariantError):
    """Raised when a game runs past the highest representable inning."""

    def __init__(self, inning: int, max_innings: int = MAX_INNINGS):
        self.inning = inning
        self.max_innings = max_innings
        # Both values stay in args so the error survives pickling out of a worker.
        super().__init__(inning, max_innings)

    def __str__(self) -> str:
        return (f"Inning {self.inning} exceeds the maximum representable "
                f"inning ({self.max_innings})")


# ---------------------------------------------------------------------------
# Final score
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FinalScore:
    home_runs: int
    away_runs: int
    inning: int

    @property
    def is_extra_innings(self) -> bool:
        return self.inning > REGULATION_INNINGS

    def winner(self) -> Team:
        if self.home_runs > self.away_runs:
            return Team.HOME
        if self.away_runs > self.home_runs:
            return Team.AWAY
        raise GameInvariantError(
            f"Completed game ended tied {self.home_runs}-{self.away_runs} "
            f"in inning {self.inning}"
        )


# ---------------------------------------------------------------------------
# Game state
# ---------------------------------------------------------------------------

@dataclass
class GameState:
    """Mutable state for a single game.

    A fresh state sits at the bottom of inning 0, so the first ``step``
    opens the top of the 1st.
    """
    home_runs: int = 0
    away_runs: int = 0
    inning: int = 0
    half: Half = Half.BOTTOM

    def skip_regulation(self) -> None:
        """Start the game as if regulation ended in a tie."""
        self.inning = REGULATION_INNINGS

    def is_over(self) -> bool:
        if (self.inning == REGULATION_INNINGS
                and self.half == Half.TOP
                and self.home_runs > self.away_runs):
            return True
        return (self.inning >= REGULATION_INNINGS
                and self.half == Half.BOTTOM
                and self.home_runs != self.away_runs)

    def step(self, runs_scored: int) -> None:
        """Play the next half-inning, crediting ``runs_scored`` to the batting team.

        Does nothing once the game is over.
        """
        if runs_scored < 0:
            raise ValueError(f"runs_scored must be non-negative, got {runs_scored}")
        if self.is_over():
            return

        next_half = self.half.flipped()
        if next_half == Half.TOP and self.inning >= MAX_INNINGS:
            raise InningOverflowError(self.inning + 1)

        self.half = next_half
        if self.half == Half.TOP:
            self.inning += 1

        if runs_scored > 0:
            if self.half == Half.TOP:
                self.away_runs += runs_scored
            else:
                self.home_runs += runs_scored

    def final_score(self) -> FinalScore:
        if not self.is_over():
            raise GameInvariantError(
                f"Game is not over (inning {self.inning}, {self.half.value})"
            )
        return FinalScore(
            home_runs=self.home_runs,
            away_runs=self.away_runs,
            inning=self.inning,
        )

# /// script
# requires-python = ">=3.12"
# dependencies = ["pytest>=7.0", "pydantic>=2.0"]
# ///
"""Tests for the per-game state machine.

Verifies:
1. Top of the 9th ends the game only when the home team leads
2. Bottom of the 9th and later ends the game whenever the score is unequal
3. No game ends before regulation, whatever the score
4. step() advances half-innings and innings in lockstep
5. step() is a no-op once the game is over
6. Runs go to the batting team
7. Innings past the representable range fail loudly
8. A tied final score has no winner
"""

import sys
from pathlib import Path

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from game_state import (
    MAX_INNINGS,
    REGULATION_INNINGS,
    FinalScore,
    GameInvariantError,
    GameState,
    InningOverflowError,
)
from models import Half, Team


def make_state(half, inning, home_runs, away_runs):
    return GameState(home_runs=home_runs, away_runs=away_runs, inning=inning, half=half)


# ===========================================================================
# Test: termination rule
# ===========================================================================

class TestIsOver:

    def test_top_nine_away_winning(self):
        assert not make_state(Half.TOP, 9, 0, 1).is_over()

    def test_top_nine_home_winning(self):
        assert make_state(Half.TOP, 9, 1, 0).is_over()

    def test_top_nine_tied(self):
        assert not make_state(Half.TOP, 9, 0, 0).is_over()

    def test_bottom_nine_away_winning(self):
        assert make_state(Half.BOTTOM, 9, 0, 1).is_over()

    def test_bottom_nine_home_winning(self):
        assert make_state(Half.BOTTOM, 9, 1, 0).is_over()

    def test_bottom_nine_tied(self):
        assert not make_state(Half.BOTTOM, 9, 0, 0).is_over()

    def test_top_tenth_away_winning(self):
        assert not make_state(Half.TOP, 10, 0, 1).is_over()

    def test_top_tenth_home_winning_is_not_over(self):
        # Only the top of the regulation inning can end with the home side ahead.
        assert not make_state(Half.TOP, 10, 2, 1).is_over()

    @pytest.mark.parametrize("inning", [9, 10, 11, 25, MAX_INNINGS])
    def test_bottom_unequal_at_or_past_regulation(self, inning):
        assert make_state(Half.BOTTOM, inning, 3, 2).is_over()
        assert make_state(Half.BOTTOM, inning, 2, 3).is_over()
        assert not make_state(Half.BOTTOM, inning, 4, 4).is_over()

    @pytest.mark.parametrize("inning", range(0, REGULATION_INNINGS))
    @pytest.mark.parametrize("half", [Half.TOP, Half.BOTTOM])
    def test_never_over_before_regulation(self, inning, half):
        assert not make_state(half, inning, 10, 0).is_over()
        assert not make_state(half, inning, 0, 10).is_over()
        assert not make_state(half, inning, 0, 0).is_over()


# ===========================================================================
# Test: transitions
# ===========================================================================

class TestStep:

    def test_fresh_state(self):
        state = GameState()
        assert state.inning == 0
        assert state.half == Half.BOTTOM
        assert state.home_runs == 0
        assert state.away_runs == 0

    def test_inning_changes(self):
        state = GameState()
        expected = [
            (1, Half.TOP), (1, Half.BOTTOM),
            (2, Half.TOP), (2, Half.BOTTOM),
            (3, Half.TOP),
        ]
        for inning, half in expected:
            state.step(0)
            assert (state.inning, state.half) == (inning, half)

    def test_runs_credited_to_batting_team(self):
        state = GameState()
        state.step(2)  # top 1
        assert (state.away_runs, state.home_runs) == (2, 0)
        state.step(3)  # bottom 1
        assert (state.away_runs, state.home_runs) == (2, 3)
        state.step(0)  # top 2
        assert (state.away_runs, state.home_runs) == (2, 3)

    def test_step_is_noop_once_over(self):
        state = make_state(Half.BOTTOM, 9, 0, 1)
        for runs in (0, 1, 5):
            state.step(runs)
        assert state == make_state(Half.BOTTOM, 9, 0, 1)

    def test_home_team_leading_skips_bottom_nine(self):
        state = make_state(Half.BOTTOM, 8, 1, 0)
        state.step(0)  # top 9, away fails to score
        assert state.is_over()
        assert state.final_score() == FinalScore(home_runs=1, away_runs=0, inning=9)

    def test_tied_game_goes_to_tenth(self):
        state = make_state(Half.TOP, 9, 0, 0)
        state.step(0)  # bottom 9
        assert not state.is_over()
        state.step(1)  # top 10
        assert (state.inning, state.half) == (10, Half.TOP)
        assert not state.is_over()
        state.step(0)  # bottom 10
        assert state.is_over()
        assert state.final_score().winner() == Team.AWAY

    def test_skip_regulation_opens_top_of_tenth(self):
        state = GameState()
        state.skip_regulation()
        state.step(0)
        assert (state.inning, state.half) == (REGULATION_INNINGS + 1, Half.TOP)

    def test_negative_runs_rejected(self):
        with pytest.raises(ValueError):
            GameState().step(-1)

    def test_overflow_past_max_innings(self):
        state = make_state(Half.BOTTOM, MAX_INNINGS, 0, 0)
        with pytest.raises(InningOverflowError) as exc_info:
            state.step(0)
        assert exc_info.value.inning == MAX_INNINGS + 1
        assert str(MAX_INNINGS) in str(exc_info.value)
        assert (state.inning, state.half) == (MAX_INNINGS, Half.BOTTOM)

    def test_max_inning_is_reachable(self):
        state = make_state(Half.BOTTOM, MAX_INNINGS - 1, 0, 0)
        state.step(0)
        assert state.inning == MAX_INNINGS

    def test_overflow_error_is_invariant_error(self):
        assert issubclass(InningOverflowError, GameInvariantError)

    def test_public_interface(self):
        methods = {
            name for name, value in vars(GameState).items()
            if callable(value) and not name.startswith("_")
        }
        assert methods == {"skip_regulation", "is_over", "step", "final_score"}


# ===========================================================================
# Test: final score
# ===========================================================================

class TestFinalScore:

    def test_home_winner(self):
        assert FinalScore(home_runs=4, away_runs=3, inning=9).winner() == Team.HOME

    def test_away_winner(self):
        assert FinalScore(home_runs=3, away_runs=4, inning=12).winner() == Team.AWAY

    def test_tie_fails_loudly(self):
        with pytest.raises(GameInvariantError):
            FinalScore(home_runs=2, away_runs=2, inning=9).winner()

    def test_extra_innings_flag(self):
        assert not FinalScore(home_runs=1, away_runs=0, inning=9).is_extra_innings
        assert FinalScore(home_runs=1, away_runs=0, inning=10).is_extra_innings

    def test_final_score_requires_finished_game(self):
        with pytest.raises(GameInvariantError):
            GameState().final_score()

    def test_final_score_is_immutable(self):
        final = FinalScore(home_runs=1, away_runs=0, inning=9)
        with pytest.raises(AttributeError):
            final.inning = 10

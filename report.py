# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Console report for a simulation run.

Produces the summary table printed by the command-line tool:

    Total games played: 1,000,000
    Number of extra inning games: 101,370

    Number of games with <n> innings:
      10 innings:    52,861
      11 innings:    25,127
"""

from __future__ import annotations

from models import SimulationSummary


def format_count(number: int) -> str:
    """Format an integer with comma thousands separators."""
    return f"{number:,}"


def format_inning_counts(summary: SimulationSummary) -> str:
    total_display = format_count(summary.total_games)
    width = len(total_display)

    lines = [
        f"Total games played: {total_display}",
        f"Number of extra inning games: {format_count(summary.extra_inning_games)}",
        "",
        "Number of games with <n> innings:",
    ]
    for inning, count in sorted(summary.inning_counts.items()):
        if count > 0:
            lines.append(f"  {inning} innings: {format_count(count):>{width}}")
    return "\n".join(lines)

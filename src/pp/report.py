"""
Report Formatter

Renders the reconciled ranking and the rank-change summary as plain text.
"""

import math
import sys
from typing import Iterable, Optional, TextIO

from src.config import EXCLUDED_AUTHOR_LABEL, TOP_PLAYER_LIMIT
from src.pp.reconciler import RankedEntry


def format_rank_change(delta: int) -> str:
    """Marker for a rank delta: ↑N when improved, ↓N when dropped, = otherwise."""
    if delta > 0:
        return f"↑{delta}"
    elif delta < 0:
        return f"↓{-delta}"
    return "="


def percent_lost(pp_difference: float, official_pp: float) -> Optional[float]:
    """
    PP lost to the exclusion as a percentage of official PP.

    Returns None when official PP is zero or the result is not finite.
    """
    if official_pp == 0:
        return None
    value = pp_difference / official_pp * 100
    if not math.isfinite(value):
        return None
    return value


def format_percent(value: Optional[float]) -> str:
    return "n/a" if value is None else f"{value:.2f}%"


def render_ranking(entries: Iterable[RankedEntry]) -> str:
    lines = [f"NEW TOP {TOP_PLAYER_LIMIT} RANKING (Based on PP without {EXCLUDED_AUTHOR_LABEL} Maps):"]
    for e in entries:
        lost = percent_lost(e.result.pp_difference, e.player.pp)
        lines.extend([
            "",
            f"#{e.new_rank}: {e.player.name} ({format_rank_change(e.rank_delta)})",
            f"    Original Rank: #{e.original_rank}",
            f"    Official PP: {e.player.pp:.2f}",
            f"    PP without {EXCLUDED_AUTHOR_LABEL}: {e.result.total_pp:.4f}",
            f"    PP Lost to {EXCLUDED_AUTHOR_LABEL}: {e.result.pp_difference:.4f} ({format_percent(lost)})",
            f"    {EXCLUDED_AUTHOR_LABEL} Scores: {e.result.excluded_scores}/{e.result.total_scores}",
        ])
    return "\n".join(lines)


def render_summary(entries: Iterable[RankedEntry]) -> str:
    lines = ["RANKING CHANGES SUMMARY:"]
    for e in entries:
        if e.rank_delta == 0:
            lines.append(f"{e.player.name}: #{e.original_rank} (no change)")
        else:
            direction = "up" if e.rank_delta > 0 else "down"
            lines.append(
                f"{e.player.name}: #{e.original_rank} → #{e.new_rank} "
                f"(moved {direction} {abs(e.rank_delta)} positions)"
            )
    return "\n".join(lines)


def print_report(entries: list[RankedEntry], stream: Optional[TextIO] = None) -> None:
    """
    Print the ranking followed by the change summary.

    Args:
        entries: Reconciled ranking
        stream: Output stream (default: sys.stdout)
    """
    out = stream or sys.stdout
    print(render_ranking(entries), file=out)
    print(file=out)
    print(render_summary(entries), file=out)
    print("\nAnalysis complete!", file=out)

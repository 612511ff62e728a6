"""
Ranking Reconciler

Orders players by their recomputed PP and works out how far each one
moved compared to the official leaderboard.

Rank delta convention: original_rank - new_rank, so a positive delta is
an improvement and a negative delta a drop.
"""

from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from src.ingestion.models import PlayerSnapshot
from src.pp.aggregator import AggregationResult


@dataclass(frozen=True)
class RankedEntry:
    player: PlayerSnapshot
    result: AggregationResult
    new_rank: int
    rank_delta: int

    @property
    def original_rank(self) -> int:
        return self.player.rank


def reconcile(pairs: Iterable[tuple[PlayerSnapshot, AggregationResult]]) -> list[RankedEntry]:
    """
    Re-rank players by recomputed PP, highest first.

    Exact ties on recomputed PP keep official-rank order, so the output is
    deterministic regardless of input order.

    Args:
        pairs: (player, aggregation result) for every successfully aggregated player

    Returns:
        RankedEntry list with contiguous 1-based new ranks
    """
    ordered = sorted(pairs, key=lambda pair: (-pair[1].total_pp, pair[0].rank))
    entries = []
    for position, (player, result) in enumerate(ordered, start=1):
        entries.append(RankedEntry(
            player=player,
            result=result,
            new_rank=position,
            rank_delta=player.rank - position,
        ))
    return entries


def ranking_to_frame(entries: Iterable[RankedEntry]) -> pd.DataFrame:
    """
    Tabulate a reconciled ranking.

    Returns:
        DataFrame with one row per entry, in new-rank order
    """
    columns = [
        'new_rank', 'player_name', 'original_rank', 'rank_delta',
        'official_pp', 'recomputed_pp', 'pp_lost', 'excluded_scores', 'total_scores',
    ]
    rows = [{
        'new_rank': e.new_rank,
        'player_name': e.player.name,
        'original_rank': e.original_rank,
        'rank_delta': e.rank_delta,
        'official_pp': round(e.player.pp, 2),
        'recomputed_pp': round(e.result.total_pp, 4),
        'pp_lost': round(e.result.pp_difference, 4),
        'excluded_scores': e.result.excluded_scores,
        'total_scores': e.result.total_scores,
    } for e in entries]
    return pd.DataFrame(rows, columns=columns)

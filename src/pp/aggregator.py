"""
Score Aggregator

Recomputes a player's weighted PP total from their top scores while
leaving out every score set on a map whose level author matches the
excluded mapper.

Each score contributes ``pp * weight`` using the weight reported by the
API; scores are summed in the order they were fetched.
"""

from dataclasses import dataclass
from typing import Iterable

from src.config import EXCLUDED_AUTHOR_TOKEN, SCORES_PER_PLAYER
from src.ingestion.models import PlayerSnapshot, ScoreRecord
from src.ingestion.scoresaber import ScoreSaberClient
from src.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)


@dataclass(frozen=True)
class AggregationResult:
    """Recomputed PP for one player. valid_scores + excluded_scores == total_scores."""
    total_pp: float
    total_scores: int
    excluded_scores: int
    valid_scores: int
    pp_difference: float


def is_excluded(score: ScoreRecord) -> bool:
    """True if the score's map author contains the excluded token (case-insensitive)."""
    return EXCLUDED_AUTHOR_TOKEN in score.level_author_name.lower()


def aggregate_scores(scores: Iterable[ScoreRecord], official_pp: float) -> AggregationResult:
    """
    Sum weighted PP over the non-excluded scores.

    Args:
        scores: Score records in fetch order
        official_pp: The player's official PP from the leaderboard

    Returns:
        AggregationResult with the recomputed total and score counts
    """
    total_pp = 0.0
    total_scores = 0
    excluded_scores = 0

    for score in scores:
        total_scores += 1
        if is_excluded(score):
            excluded_scores += 1
            continue
        total_pp += score.pp * score.weight

    return AggregationResult(
        total_pp=total_pp,
        total_scores=total_scores,
        excluded_scores=excluded_scores,
        valid_scores=total_scores - excluded_scores,
        pp_difference=official_pp - total_pp,
    )


def aggregate_player(client: ScoreSaberClient, player: PlayerSnapshot) -> AggregationResult:
    """
    Fetch a player's top scores and recompute their PP.

    Raises:
        FetchError: If the scores cannot be fetched or decoded; no partial
            result is produced
    """
    scores = client.get_player_scores(player.id, limit=SCORES_PER_PLAYER)
    result = aggregate_scores(scores, player.pp)
    logger.debug(
        f"{player.name}: {result.valid_scores}/{result.total_scores} scores kept, "
        f"{result.total_pp:.4f}pp"
    )
    return result

"""
PP Re-ranking Engine

Single-pass batch report: fetches the official ScoreSaber top players,
recomputes each player's PP without scores on Aquaflee maps, and prints
the resulting leaderboard with rank changes.

Pipeline:
- Fetch the global leaderboard and snapshot the raw response to disk
- For the top players, fetch their top scores one at a time (rate limited)
- Recompute weighted PP, re-rank, and print the report

Usage:
    python -m src.pp.engine
    OR
    from src.pp.engine import run_report
"""

import sys
from pathlib import Path

# Enable both `python src/pp/engine.py` and `python -m src.pp.engine` execution.
# Required for src.config/src.utils imports to resolve correctly.
_project_root = str(Path(__file__).parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import time
from typing import Callable, Optional

from src.config import (
    EXCLUDED_AUTHOR_LABEL,
    REQUEST_DELAY_SECONDS,
    SCORES_PER_PLAYER,
    SNAPSHOT_FILE,
    SUMMARY_PREVIEW_ROWS,
    TOP_PLAYER_LIMIT,
)
from src.ingestion.models import PlayerSnapshot
from src.ingestion.scoresaber import FetchError, ScoreSaberClient
from src.pp.aggregator import AggregationResult, aggregate_player
from src.pp.reconciler import RankedEntry, ranking_to_frame, reconcile
from src.pp.report import print_report
from src.utils import atomic_write_json, setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

# Fix Windows console encoding for the ↑/↓ rank-change markers
if sys.stdout.encoding != 'utf-8':
    try:
        sys.stdout.reconfigure(encoding='utf-8')  # type: ignore[union-attr]
    except (AttributeError, ValueError):
        pass


def log_player_result(player: PlayerSnapshot, result: AggregationResult) -> None:
    logger.info(f"Rank #{player.rank}: {player.name}")
    logger.info(f"  - Player ID: {player.id}")
    logger.info(f"  - Official PP: {player.pp:.2f}")
    logger.info(f"  - Total Scores: {result.total_scores}")
    logger.info(f"  - {EXCLUDED_AUTHOR_LABEL} Scores Removed: {result.excluded_scores}")
    logger.info(f"  - Valid Scores Used: {result.valid_scores}")
    logger.info(f"  - Calculated Total PP (without {EXCLUDED_AUTHOR_LABEL}): {result.total_pp:.4f}")
    logger.info(f"  - PP Difference: {result.pp_difference:.4f}")


def collect_results(
    client: ScoreSaberClient,
    players: list[PlayerSnapshot],
    limit: int = TOP_PLAYER_LIMIT,
    sleep: Callable[[float], None] = time.sleep,
) -> list[tuple[PlayerSnapshot, AggregationResult]]:
    """
    Aggregate the first ``limit`` players sequentially.

    A player whose scores cannot be fetched is logged and skipped. The
    request delay is applied after every fetch attempt.

    Returns:
        (player, result) pairs for the players that succeeded, in fetch order
    """
    results = []

    for player in players[:limit]:
        logger.info(f"Fetching scores for Rank #{player.rank}: {player.name} (ID: {player.id})...")
        try:
            result = aggregate_player(client, player)
        except FetchError as e:
            logger.warning(f"Error fetching scores for {player.name}: {e}")
        else:
            results.append((player, result))
            log_player_result(player, result)
        sleep(REQUEST_DELAY_SECONDS)

    logger.info(f"Aggregated {len(results)} of {min(limit, len(players))} players")
    return results


def run_report(
    client: Optional[ScoreSaberClient] = None,
    snapshot_path: Path = SNAPSHOT_FILE,
    sleep: Callable[[float], None] = time.sleep,
) -> list[RankedEntry]:
    """
    Run the full pipeline and return the reconciled ranking.

    Raises:
        FetchError: If the global leaderboard cannot be fetched or decoded
        OSError: If the snapshot file cannot be written
    """
    client = client or ScoreSaberClient()

    raw_players, players = client.get_players()
    atomic_write_json(raw_players, snapshot_path)
    logger.info(f"Wrote leaderboard snapshot to {snapshot_path}")

    logger.info(
        f"Top {TOP_PLAYER_LIMIT} Players - Calculated Total PP from {SCORES_PER_PLAYER} Scores "
        f"(Excluding {EXCLUDED_AUTHOR_LABEL} Maps)"
    )
    results = collect_results(client, players, sleep=sleep)
    entries = reconcile(results)

    if entries:
        logger.info(f"Top {SUMMARY_PREVIEW_ROWS} after re-ranking:")
        logger.info("\n" + ranking_to_frame(entries).head(SUMMARY_PREVIEW_ROWS).to_string(index=False))

    return entries


def main() -> int:
    try:
        entries = run_report()
    except FetchError as e:
        logger.error(f"Error fetching players: {e}")
        return 1
    except OSError as e:
        logger.error(f"Error writing players snapshot: {e}")
        return 1

    print_report(entries)
    return 0


if __name__ == "__main__":
    sys.exit(main())

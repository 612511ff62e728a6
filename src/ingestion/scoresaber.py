"""
ScoreSaber API Client

Thin read-only wrapper around the two public ScoreSaber endpoints used by
the report:
- GET /players                          -> official global leaderboard
- GET /player/{id}/scores?limit=N       -> a player's top scores

Every failure (transport error, non-success status, undecodable or
malformed body) is raised as FetchError so callers can decide between
aborting and skipping.

Usage:
    from src.ingestion.scoresaber import ScoreSaberClient
    client = ScoreSaberClient()
    raw, players = client.get_players()
    scores = client.get_player_scores(players[0].id)
"""

from typing import Any, Optional

import requests

from src.config import (
    PLAYER_SCORES_ENDPOINT,
    PLAYERS_ENDPOINT,
    SCORES_PER_PLAYER,
    SCORESABER_API_URL,
)
from src.ingestion.models import PlayerSnapshot, ScoreRecord
from src.utils import setup_logging

# --- Module Logger ---
logger = setup_logging(__name__)

_MALFORMED = (KeyError, TypeError, ValueError, AttributeError)


class FetchError(Exception):
    """Raised when a ScoreSaber request fails or returns an unusable payload"""
    pass


class ScoreSaberClient:
    """
    Blocking ScoreSaber client backed by a requests.Session.

    No timeout or retry policy is configured; requests use the transport
    defaults.
    """

    def __init__(self, session: Optional[requests.Session] = None, base_url: str = SCORESABER_API_URL):
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")

    def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, params=params)
        except requests.RequestException as e:
            raise FetchError(f"Request to {url} failed: {e}") from e

        if resp.status_code != 200:
            raise FetchError(f"API request failed with status: {resp.status_code}")

        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(f"Invalid JSON from {url}: {e}") from e

    def get_players(self) -> tuple[dict, list[PlayerSnapshot]]:
        """
        Fetch the official global leaderboard.

        Returns:
            Tuple of (raw decoded response, parsed players in the order returned)

        Raises:
            FetchError: If the request fails or the payload is malformed
        """
        raw = self._get_json(PLAYERS_ENDPOINT)
        try:
            players = [PlayerSnapshot.from_dict(p) for p in raw["players"]]
        except _MALFORMED as e:
            raise FetchError(f"Malformed players payload: {e!r}") from e

        logger.info(f"Fetched {len(players)} players from the global leaderboard")
        return raw, players

    def get_player_scores(self, player_id: str, limit: int = SCORES_PER_PLAYER) -> list[ScoreRecord]:
        """
        Fetch a player's top scores, preserving the order returned by the API.

        Raises:
            FetchError: If the request fails or the payload is malformed
        """
        path = PLAYER_SCORES_ENDPOINT.format(player_id=player_id)
        raw = self._get_json(path, params={"limit": limit})
        try:
            return [ScoreRecord.from_dict(s) for s in raw["playerScores"]]
        except _MALFORMED as e:
            raise FetchError(f"Malformed scores payload for player {player_id}: {e!r}") from e

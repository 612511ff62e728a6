"""
ScoreSaber data model.

Immutable, typed views over the JSON returned by the ScoreSaber API.
Only the fields the report reads are modelled; the raw players payload
is kept separately for the snapshot file.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class ScoreStats:
    """Aggregate score statistics shown on a player's profile."""
    total_score: int = 0
    total_ranked_score: int = 0
    average_ranked_accuracy: float = 0.0
    total_play_count: int = 0
    ranked_play_count: int = 0
    replays_watched: int = 0

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> "ScoreStats":
        if not raw:
            return cls()
        return cls(
            total_score=int(raw.get("totalScore") or 0),
            total_ranked_score=int(raw.get("totalRankedScore") or 0),
            average_ranked_accuracy=float(raw.get("averageRankedAccuracy") or 0.0),
            total_play_count=int(raw.get("totalPlayCount") or 0),
            ranked_play_count=int(raw.get("rankedPlayCount") or 0),
            replays_watched=int(raw.get("replaysWatched") or 0),
        )


@dataclass(frozen=True)
class PlayerSnapshot:
    """A player as listed on the official leaderboard."""
    id: str
    name: str
    pp: float
    rank: int
    country: str = ""
    country_rank: int = 0
    profile_picture: str = ""
    bio: Optional[str] = None
    role: Optional[str] = None
    banned: bool = False
    inactive: bool = False
    first_seen: Optional[str] = None
    score_stats: ScoreStats = field(default_factory=ScoreStats)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "PlayerSnapshot":
        """
        Build a snapshot from one entry of ``GET /players``.

        Raises:
            KeyError: If id, name, pp or rank is missing
            TypeError, ValueError: If a numeric field cannot be converted
        """
        return cls(
            id=str(raw["id"]),
            name=str(raw["name"]),
            pp=float(raw["pp"]),
            rank=int(raw["rank"]),
            country=str(raw.get("country") or ""),
            country_rank=int(raw.get("countryRank") or 0),
            profile_picture=str(raw.get("profilePicture") or ""),
            bio=_optional_str(raw.get("bio")),
            role=_optional_str(raw.get("role")),
            banned=bool(raw.get("banned", False)),
            inactive=bool(raw.get("inactive", False)),
            first_seen=_optional_str(raw.get("firstSeen")),
            score_stats=ScoreStats.from_dict(raw.get("scoreStats")),
        )


@dataclass(frozen=True)
class LeaderboardInfo:
    """The map (leaderboard) a score was set on."""
    id: Optional[int] = None
    song_hash: str = ""
    song_name: str = ""
    song_author_name: str = ""
    level_author_name: str = ""
    stars: float = 0.0
    ranked: bool = False

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> "LeaderboardInfo":
        if not raw:
            return cls()
        leaderboard_id = raw.get("id")
        return cls(
            id=None if leaderboard_id is None else int(leaderboard_id),
            song_hash=str(raw.get("songHash") or ""),
            song_name=str(raw.get("songName") or ""),
            song_author_name=str(raw.get("songAuthorName") or ""),
            level_author_name=str(raw.get("levelAuthorName") or ""),
            stars=float(raw.get("stars") or 0.0),
            ranked=bool(raw.get("ranked", False)),
        )


@dataclass(frozen=True)
class ScoreRecord:
    """
    A single play from a player's top scores.

    ``weight`` is the leaderboard's decay factor for this play's position
    in the player's personal best list (roughly 0.965 ** (position - 1)).
    """
    pp: float
    weight: float
    leaderboard: LeaderboardInfo = field(default_factory=LeaderboardInfo)
    id: Optional[int] = None
    rank: int = 0
    base_score: int = 0
    modified_score: int = 0
    modifiers: str = ""
    multiplier: float = 1.0

    @property
    def level_author_name(self) -> str:
        return self.leaderboard.level_author_name

    @property
    def weighted_pp(self) -> float:
        return self.pp * self.weight

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "ScoreRecord":
        """
        Build a record from one ``playerScores`` entry of ``GET /player/{id}/scores``.

        The entry holds a ``score`` object and a ``leaderboard`` object.

        Raises:
            KeyError: If the score object, pp or weight is missing
            TypeError, ValueError: If a numeric field cannot be converted
        """
        score = raw["score"]
        score_id = score.get("id")
        return cls(
            pp=float(score["pp"]),
            weight=float(score["weight"]),
            leaderboard=LeaderboardInfo.from_dict(raw.get("leaderboard")),
            id=None if score_id is None else int(score_id),
            rank=int(score.get("rank") or 0),
            base_score=int(score.get("baseScore") or 0),
            modified_score=int(score.get("modifiedScore") or 0),
            modifiers=str(score.get("modifiers") or ""),
            multiplier=float(score.get("multiplier") or 1.0),
        )

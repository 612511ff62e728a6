"""
End-to-end tests for the re-ranking pipeline.
"""

import json

import pytest

from src.config import REQUEST_DELAY_SECONDS
from src.ingestion.models import LeaderboardInfo, PlayerSnapshot, ScoreRecord
from src.ingestion.scoresaber import FetchError
from src.pp import engine
from src.pp.engine import collect_results, run_report


class FakeClient:
    """Serves canned players and scores; ``failing`` ids raise FetchError."""

    def __init__(self, players, scores, failing=(), players_error=None):
        self.players = players
        self.scores = scores
        self.failing = set(failing)
        self.players_error = players_error
        self.score_requests = []

    def get_players(self):
        if self.players_error:
            raise self.players_error
        raw = {"players": [{"id": p.id, "name": p.name, "pp": p.pp, "rank": p.rank} for p in self.players]}
        return raw, list(self.players)

    def get_player_scores(self, player_id, limit=100):
        self.score_requests.append(player_id)
        if player_id in self.failing:
            raise FetchError("API request failed with status: 500")
        return self.scores[player_id]


def single_score(pp, author="Mapper"):
    return [ScoreRecord(pp=pp, weight=1.0, leaderboard=LeaderboardInfo(level_author_name=author))]


@pytest.fixture
def three_players():
    players = [
        PlayerSnapshot(id="1", name="player1", pp=1000.0, rank=1),
        PlayerSnapshot(id="2", name="player2", pp=900.0, rank=2),
        PlayerSnapshot(id="3", name="player3", pp=800.0, rank=3),
    ]
    scores = {
        "1": single_score(800.0) + single_score(200.0, author="Aquaflee"),
        "2": single_score(900.0),
        "3": single_score(950.0),
    }
    return players, scores


class TestRunReport:
    """Tests for run_report function."""

    def test_three_player_scenario(self, tmp_path, three_players):
        players, scores = three_players
        delays = []
        entries = run_report(FakeClient(players, scores), tmp_path / "top_players.json", sleep=delays.append)

        assert [(e.player.name, e.new_rank, e.rank_delta) for e in entries] == [
            ("player3", 1, 2),
            ("player2", 2, 0),
            ("player1", 3, -2),
        ]
        assert entries[2].result.excluded_scores == 1
        assert delays == [REQUEST_DELAY_SECONDS] * 3

    def test_writes_raw_snapshot(self, tmp_path, three_players):
        players, scores = three_players
        snapshot = tmp_path / "out" / "top_players.json"
        run_report(FakeClient(players, scores), snapshot, sleep=lambda s: None)

        text = snapshot.read_text(encoding="utf-8")
        assert text.startswith('{\n  "players": [')
        assert [p["name"] for p in json.loads(text)["players"]] == ["player1", "player2", "player3"]

    def test_failed_player_is_dropped(self, tmp_path, three_players):
        players, scores = three_players
        delays = []
        client = FakeClient(players, scores, failing={"2"})
        entries = run_report(client, tmp_path / "top_players.json", sleep=delays.append)

        assert [e.player.name for e in entries] == ["player3", "player1"]
        assert [e.new_rank for e in entries] == [1, 2]
        assert client.score_requests == ["1", "2", "3"]
        assert len(delays) == 3

    def test_players_fetch_failure_is_fatal(self, tmp_path):
        client = FakeClient([], {}, players_error=FetchError("API request failed with status: 502"))
        snapshot = tmp_path / "top_players.json"
        with pytest.raises(FetchError):
            run_report(client, snapshot, sleep=lambda s: None)
        assert not snapshot.exists()


class TestCollectResults:
    """Tests for collect_results function."""

    def test_respects_player_limit(self):
        players = [PlayerSnapshot(id=str(i), name=f"p{i}", pp=100.0, rank=i) for i in range(1, 61)]
        scores = {p.id: single_score(50.0) for p in players}
        client = FakeClient(players, scores)
        results = collect_results(client, players, sleep=lambda s: None)
        assert len(results) == 50
        assert client.score_requests == [str(i) for i in range(1, 51)]


class TestMain:
    """Tests for the main entry point."""

    def test_fatal_failure_returns_nonzero(self, monkeypatch, capsys):
        def failing_report():
            raise FetchError("API request failed with status: 500")

        monkeypatch.setattr(engine, "run_report", failing_report)
        assert engine.main() == 1
        assert "RANKING CHANGES SUMMARY" not in capsys.readouterr().out

    def test_snapshot_write_failure_returns_nonzero(self, monkeypatch):
        def failing_report():
            raise PermissionError("read-only file system")

        monkeypatch.setattr(engine, "run_report", failing_report)
        assert engine.main() == 1

    def test_success_prints_report(self, monkeypatch, capsys, three_players, tmp_path):
        players, scores = three_players
        client = FakeClient(players, scores)
        monkeypatch.setattr(
            engine, "run_report",
            lambda: run_report(client, tmp_path / "top_players.json", sleep=lambda s: None),
        )
        assert engine.main() == 0
        out = capsys.readouterr().out
        assert "#1: player3 (↑2)" in out
        assert "player2: #2 (no change)" in out
        assert "player1: #1 → #3 (moved down 2 positions)" in out


class TestPackageExports:
    """Tests for the lazy src.pp exports."""

    def test_lazy_exports(self):
        import src.pp as pp
        from src.pp.aggregator import aggregate_scores
        from src.pp.reconciler import reconcile

        assert pp.aggregate_scores is aggregate_scores
        assert pp.reconcile is reconcile
        assert pp.run_report is run_report

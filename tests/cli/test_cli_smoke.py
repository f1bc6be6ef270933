"""Smoke tests for the highlight reel CLI without network calls."""

import json
from contextlib import asynccontextmanager

from typer.testing import CliRunner

from highlight_reel.cli import app
from highlight_reel.errors import UpstreamStatusError
from highlight_reel.models import Category, ClutchContext, Event, Game
from highlight_reel.pipelines import AggregationReport, AggregationResult

runner = CliRunner()

GAME_ID = "0022500123"


def _event(event_id):
    return Event(
        event_id=event_id,
        game_id=GAME_ID,
        period=4,
        description=f"play {event_id}",
        category=Category.FGA,
        video_url=f"https://videos.nba.com/{event_id}.mp4",
    )


class FakeAggregator:
    """Returns a fixed result without doing real work."""

    def __init__(self):
        self.game_ids = []

    async def run(self, game_id):
        self.game_ids.append(game_id)
        report = AggregationReport(game_id=game_id, full_game_calls=7, total_events=2)
        return AggregationResult(events=[_event(4), _event(9)], report=report)


class FakeCdnClient:
    """Answers schedule and clutch lookups from memory."""

    def __init__(self, client, *args, **kwargs):
        self.client = client

    async def fetch_team_games(self, team_id, team_tricode):
        return [Game(
            game_id="0022500040",
            game_code="20251025/PORDEN",
            game_date="2025-10-25T00:00:00Z",
            matchup=f"{team_tricode} @ DEN",
            is_home=False,
            home_score=101,
            away_score=110,
            result="W",
            points=110,
            opponent_points=101,
        )]

    async def fetch_clutch_context(self, game_id, tracked_player_id, final_period=4, threshold_minutes=5):
        return ClutchContext(clutch_event_ids=frozenset({530, 510}), participant_ids=(201939, 1629028))


class FailingCdnClient(FakeCdnClient):
    async def fetch_team_games(self, team_id, team_tricode):
        raise UpstreamStatusError("https://cdn.nba.com/schedule", 503)


def _patch_aggregator(monkeypatch, aggregator):
    @asynccontextmanager
    async def fake_open_aggregator(settings=None, transport=None):
        yield aggregator

    monkeypatch.setattr("highlight_reel.pipelines.open_aggregator", fake_open_aggregator)


def test_highlights_prints_events(monkeypatch):
    aggregator = FakeAggregator()
    _patch_aggregator(monkeypatch, aggregator)

    result = runner.invoke(app, ["highlights", GAME_ID])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [e["eventId"] for e in payload["events"]] == [4, 9]
    assert payload["events"][0]["videoUrl"] == "https://videos.nba.com/4.mp4"
    assert "report" not in payload
    assert aggregator.game_ids == [GAME_ID]


def test_highlights_with_report(monkeypatch):
    _patch_aggregator(monkeypatch, FakeAggregator())

    result = runner.invoke(app, ["highlights", GAME_ID, "--report"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["report"]["gameId"] == GAME_ID
    assert payload["report"]["fullGameCalls"] == 7


def test_games_lists_completed_games(monkeypatch):
    monkeypatch.setattr("highlight_reel.io_clients.NBACdnClient", FakeCdnClient)

    result = runner.invoke(app, ["games"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["games"][0]["gameId"] == "0022500040"
    assert payload["games"][0]["matchup"] == "POR @ DEN"


def test_games_reports_upstream_failure(monkeypatch):
    monkeypatch.setattr("highlight_reel.io_clients.NBACdnClient", FailingCdnClient)

    result = runner.invoke(app, ["games"])

    assert result.exit_code == 1
    assert "Failed to fetch games" in result.output


def test_clutch_prints_window(monkeypatch):
    monkeypatch.setattr("highlight_reel.io_clients.NBACdnClient", FakeCdnClient)

    result = runner.invoke(app, ["clutch", GAME_ID])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload == {
        "gameId": GAME_ID,
        "clutchEventIds": [510, 530],
        "participantIds": [201939, 1629028],
    }


def test_help_lists_commands():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for command in ("games", "highlights", "clutch"):
        assert command in result.output

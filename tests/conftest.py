"""Test configuration and fixtures for the highlight reel test suite."""

import os
import sys
import pathlib

# Force test-safe defaults before any other imports
os.environ.setdefault('ENV', 'TEST')
os.environ.setdefault('SEASON', '2025-26')
os.environ.setdefault('RETRY_MAX', '1')
os.environ.setdefault('LOG_LEVEL', 'WARNING')

# Ensure tests can import from src/
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from typing import Dict, List, Optional, Tuple

import httpx
import pytest

from highlight_reel.config import TrackingConfig
from highlight_reel.models import Category, ClutchContext, Event

TRACKED_TEAM_ID = 1610612757
TRACKED_PLAYER_ID = 1630166
TEST_GAME_ID = "0022500123"


def _make_event(event_id: int, category: Category = Category.FGA, description: Optional[str] = None,
               **overrides) -> Event:
    """Build an Event with sensible defaults."""
    fields = dict(
        event_id=event_id,
        game_id=TEST_GAME_ID,
        period=4,
        description=description if description is not None else f"play {event_id}",
        category=category,
        video_url=f"https://videos.nba.com/{event_id}_1280x720.mp4",
        thumbnail_url=f"https://videos.nba.com/{event_id}_1280x720.jpg",
        video_duration_ms=9000,
    )
    fields.update(overrides)
    return Event(**fields)


async def _no_sleep(_: float) -> None:
    return None


class FakeVideoSource:
    """In-memory stand-in for NBAStatsClient keyed by (player_id, category)."""

    def __init__(self, responses: Optional[Dict[Tuple[int, Category], List[Event]]] = None):
        self.responses = responses or {}
        self.calls: List[Tuple[str, Category, int, int]] = []

    async def fetch_events(self, game_id, category, player_id, team_id=0):
        self.calls.append((game_id, category, player_id, team_id))
        return list(self.responses.get((player_id, category), []))


class FakeClutchSource:
    """In-memory stand-in for NBACdnClient.fetch_clutch_context."""

    def __init__(self, context: Optional[ClutchContext] = None):
        self.context = context or ClutchContext.empty()
        self.calls: List[Tuple[str, int]] = []

    async def fetch_clutch_context(self, game_id, tracked_player_id, final_period=4, threshold_minutes=5):
        self.calls.append((game_id, tracked_player_id))
        return self.context


@pytest.fixture
def make_event():
    """Factory for Event records with sensible defaults."""
    return _make_event


@pytest.fixture
def video_source_factory():
    """Factory for FakeVideoSource instances."""
    return FakeVideoSource


@pytest.fixture
def clutch_source_factory():
    """Factory for FakeClutchSource instances."""
    return FakeClutchSource


@pytest.fixture
def no_sleep():
    """Sleep replacement so throttled tests run instantly."""
    return _no_sleep


@pytest.fixture
def tracking_config() -> TrackingConfig:
    """Tracking configuration with the production call budget and no delays."""
    return TrackingConfig(
        team_id=TRACKED_TEAM_ID,
        player_id=TRACKED_PLAYER_ID,
        season="2025-26",
        full_game_delay_s=0.0,
        clutch_delay_s=0.0,
    )


@pytest.fixture
def test_game_id() -> str:
    """Standard test game ID for consistent testing."""
    return TEST_GAME_ID


@pytest.fixture
def mock_http_client():
    """Factory for an AsyncClient whose requests are answered by ``handler``."""
    clients: List[httpx.AsyncClient] = []

    def factory(handler) -> httpx.AsyncClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    return factory


@pytest.fixture
def video_payload():
    """A videodetailsasset body with three plays and three assets."""
    return {
        "resource": "videodetailsasset",
        "resultSets": {
            "Meta": {
                "videoUrls": [
                    {"uuid": "a", "lurl": "https://v/1_l.mp4", "murl": "https://v/1_m.mp4",
                     "surl": "https://v/1_s.mp4", "lth": "https://v/1_l.jpg", "ldur": 8000},
                    {"uuid": "b", "lurl": "", "murl": "https://v/2_m.mp4",
                     "surl": "https://v/2_s.mp4", "lth": "https://v/2_l.jpg", "ldur": 7000},
                    {"uuid": "c", "lurl": None, "murl": None,
                     "surl": "https://v/3_s.mp4", "lth": None, "ldur": None},
                ]
            },
            "playlist": [
                {"gi": TEST_GAME_ID, "ei": 7, "y": 2025, "m": "10", "d": "22", "p": 1,
                 "dsc": "Avdija 25' 3PT Jump Shot", "ha": "POR", "va": "GSW"},
                {"gi": TEST_GAME_ID, "ei": 115, "y": 2025, "m": "10", "d": "22", "p": 2,
                 "dsc": "Avdija Driving Layup", "ha": "POR", "va": "GSW"},
                {"gi": TEST_GAME_ID, "ei": 402, "y": 2025, "m": "10", "d": "22", "p": 4,
                 "dsc": "MISS Avdija 12' Pullup", "ha": "POR", "va": "GSW"},
            ],
        },
    }


@pytest.fixture
def pbp_payload():
    """A playbyplay_{gameId}.json body spanning Q3, Q4 and one overtime."""
    return {
        "meta": {"version": 1},
        "game": {
            "gameId": TEST_GAME_ID,
            "actions": [
                {"actionNumber": 300, "period": 3, "clock": "PT01M10.00S", "personId": 201939,
                 "actionType": "2pt", "description": "Curry Layup"},
                {"actionNumber": 500, "period": 4, "clock": "PT06M00.00S", "personId": 201939,
                 "actionType": "3pt", "description": "Curry 3PT"},
                {"actionNumber": 510, "period": 4, "clock": "PT05M59.00S", "personId": 1629028,
                 "actionType": "rebound", "description": "Ayton REBOUND"},
                {"actionNumber": 520, "period": 4, "clock": "PT04M12.30S", "personId": TRACKED_PLAYER_ID,
                 "actionType": "2pt", "description": "Avdija Layup"},
                {"actionNumber": 530, "period": 4, "clock": "PT02M00.00S", "personId": 201939,
                 "actionType": "turnover", "description": "Curry Bad Pass Turnover"},
                {"actionNumber": 540, "period": 4, "clock": "PT00M00.00S", "personId": 0,
                 "actionType": "period", "description": "End of 4th Period"},
                {"actionNumber": 600, "period": 5, "clock": "PT04M40.00S", "personId": 1630703,
                 "actionType": "2pt", "description": "Sharpe Dunk"},
            ],
        },
    }

"""Client for the cdn.nba.com static JSON feeds (schedule and live play-by-play)."""

from typing import List, Optional

import httpx

from ..config import AppSettings, get_settings
from ..errors import UpstreamError, UpstreamTimeout
from ..extractors.play_by_play import (
    extract_actions,
    extract_clutch_context,
)
from ..extractors.schedule import extract_team_games
from ..http import get_json
from ..models.clutch import ClutchContext
from ..models.games import Game
from ..nba_logging import get_logger
from ..utils.clock import CLUTCH_MINUTES_THRESHOLD, FINAL_REGULATION_PERIOD

logger = get_logger(__name__)


class NBACdnClient:
    """Async client for the public NBA CDN."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        pbp_timeout_s: Optional[float] = None,
        schedule_timeout_s: Optional[float] = None,
        base_url: Optional[str] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        settings = settings or get_settings()
        self.client = client
        self.pbp_timeout_s = pbp_timeout_s if pbp_timeout_s is not None else settings.PBP_TIMEOUT_S
        self.schedule_timeout_s = (
            schedule_timeout_s if schedule_timeout_s is not None else settings.SCHEDULE_TIMEOUT_S
        )
        self.base_url = (base_url or settings.CDN_BASE_URL).rstrip('/')
        self.headers = {'User-Agent': settings.USER_AGENT}
        self.max_attempts = settings.RETRY_MAX

    async def fetch_clutch_context(
        self,
        game_id: str,
        tracked_player_id: int,
        final_period: int = FINAL_REGULATION_PERIOD,
        threshold_minutes: int = CLUTCH_MINUTES_THRESHOLD,
    ) -> ClutchContext:
        """Clutch action numbers and participants for a game.

        An unavailable play-by-play log is not fatal: it yields an empty
        context and the caller falls back to full-game highlights only.
        """
        url = f"{self.base_url}/liveData/playbyplay/playbyplay_{game_id}.json"
        logger.info("Fetching play-by-play for clutch window", game_id=game_id)

        try:
            payload = await get_json(
                self.client,
                url,
                timeout_s=self.pbp_timeout_s,
                endpoint="playbyplay",
                headers=self.headers,
                max_attempts=self.max_attempts,
            )
        except UpstreamTimeout as e:
            logger.warning("Play-by-play request timed out", game_id=game_id, timeout_s=e.timeout_s)
            return ClutchContext.empty()
        except UpstreamError as e:
            logger.error("Play-by-play request failed", game_id=game_id, error=str(e))
            return ClutchContext.empty()

        actions = extract_actions(payload)
        context = extract_clutch_context(
            actions,
            tracked_player_id,
            final_period=final_period,
            threshold_minutes=threshold_minutes,
        )
        logger.info("Extracted clutch window",
                    game_id=game_id,
                    actions_count=len(actions),
                    clutch_events=len(context.clutch_event_ids),
                    participants=len(context.participant_ids))
        return context

    async def fetch_team_games(self, team_id: int, team_tricode: str) -> List[Game]:
        """Completed games for a team, newest first.

        Raises:
            UpstreamError: The schedule could not be fetched
        """
        url = f"{self.base_url}/staticData/scheduleLeagueV2.json"
        logger.info("Fetching league schedule", team_id=team_id)

        payload = await get_json(
            self.client,
            url,
            timeout_s=self.schedule_timeout_s,
            endpoint="schedule",
            headers=self.headers,
            max_attempts=self.max_attempts,
        )
        games = extract_team_games(payload, team_id, team_tricode)
        logger.info("Found completed games", team_id=team_id, games_count=len(games))
        return games

"""NBA Stats video asset client."""

from typing import Any, Dict, List, Optional

import httpx

from ..config import AppSettings, get_settings
from ..errors import UpstreamError, UpstreamTimeout
from ..extractors.video import decode_video_assets
from ..http import get_json
from ..models.events import Category, Event
from ..nba_logging import get_logger

logger = get_logger(__name__)

# TeamID value that matches clips from either team
ANY_TEAM = 0

# Headers stats.nba.com expects from a browser session
NBA_STATS_HEADERS = {
    'Accept': 'application/json, text/plain, */*',
    'Accept-Encoding': 'gzip, deflate, br',
    'Accept-Language': 'en-US,en;q=0.9',
    'Connection': 'keep-alive',
    'Host': 'stats.nba.com',
    'Origin': 'https://www.nba.com',
    'Referer': 'https://www.nba.com/',
    'Sec-Fetch-Dest': 'empty',
    'Sec-Fetch-Mode': 'cors',
    'Sec-Fetch-Site': 'same-site',
    'x-nba-stats-origin': 'stats',
    'x-nba-stats-token': 'true',
}

# Placeholders the videodetailsasset schema requires even when unused
_VIDEO_PARAM_DEFAULTS = {
    'AheadBehind': '',
    'CFID': '',
    'CFPARAMS': '',
    'ClutchTime': '',
    'Conference': '',
    'ContextFilter': '',
    'DateFrom': '',
    'DateTo': '',
    'Division': '',
    'EndPeriod': '0',
    'EndRange': '31800',
    'GROUP_ID': '',
    'GameEventID': '',
    'GameSegment': '',
    'GroupID': '',
    'GroupMode': '',
    'GroupQuantity': '5',
    'LastNGames': '0',
    'Location': '',
    'Month': '0',
    'OnOff': '',
    'OppPlayerID': '',
    'OpponentTeamID': '0',
    'Outcome': '',
    'PORound': '0',
    'Period': '0',
    'PlayerID1': '',
    'PlayerID2': '',
    'PlayerID3': '',
    'PlayerID4': '',
    'PlayerID5': '',
    'PlayerPosition': '',
    'PointDiff': '',
    'Position': '',
    'RangeType': '0',
    'RookieYear': '',
    'SeasonSegment': '',
    'ShotClockRange': '',
    'StartPeriod': '0',
    'StartRange': '0',
    'StarterBench': '',
    'VsConference': '',
    'VsDivision': '',
    'VsPlayerID1': '',
    'VsPlayerID2': '',
    'VsPlayerID3': '',
    'VsPlayerID4': '',
    'VsPlayerID5': '',
    'VsTeamID': '',
}


class NBAStatsClient:
    """Async client for the stats.nba.com video asset endpoint."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        season: str,
        season_type: str = 'Regular Season',
        league_id: str = '00',
        timeout_s: Optional[float] = None,
        base_url: Optional[str] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        settings = settings or get_settings()
        self.client = client
        self.season = season
        self.season_type = season_type
        self.league_id = league_id
        self.timeout_s = timeout_s if timeout_s is not None else settings.VIDEO_TIMEOUT_S
        self.base_url = (base_url or settings.NBA_STATS_BASE_URL).rstrip('/')
        self.headers = dict(NBA_STATS_HEADERS, **{'User-Agent': settings.USER_AGENT})
        self.max_attempts = settings.RETRY_MAX

    def build_video_params(
        self,
        game_id: str,
        category: Category,
        player_id: int,
        team_id: int,
    ) -> Dict[str, Any]:
        """Full query string for one (game, category, player, team) lookup."""
        params = dict(_VIDEO_PARAM_DEFAULTS)
        params.update({
            'ContextMeasure': category.value,
            'GameID': game_id,
            'LeagueID': self.league_id,
            'PlayerID': str(player_id),
            'Season': self.season,
            'SeasonType': self.season_type,
            'TeamID': str(team_id),
        })
        return params

    async def fetch_events(
        self,
        game_id: str,
        category: Category,
        player_id: int,
        team_id: int = ANY_TEAM,
    ) -> List[Event]:
        """Fetch one player's clips for one category of a game.

        Never raises for upstream problems: timeouts, error statuses,
        network failures and undecodable bodies all yield an empty list.

        Args:
            game_id: NBA game ID
            category: Context measure to query
            player_id: Player whose clips are wanted
            team_id: Tracked team, or ANY_TEAM to match either side

        Returns:
            Decoded events in upstream order
        """
        url = f"{self.base_url}/videodetailsasset"
        params = self.build_video_params(game_id, category, player_id, team_id)

        try:
            payload = await get_json(
                self.client,
                url,
                timeout_s=self.timeout_s,
                params=params,
                headers=self.headers,
                endpoint="videodetailsasset",
                max_attempts=self.max_attempts,
            )
        except UpstreamTimeout as e:
            logger.warning("Video asset request timed out",
                           game_id=game_id,
                           category=category.value,
                           player_id=player_id,
                           timeout_s=e.timeout_s)
            return []
        except UpstreamError as e:
            logger.error("Video asset request failed",
                         game_id=game_id,
                         category=category.value,
                         player_id=player_id,
                         error=str(e))
            return []

        events = decode_video_assets(payload, category, game_id=game_id)
        logger.info("Fetched video events",
                    game_id=game_id,
                    category=category.value,
                    player_id=player_id,
                    team_id=team_id,
                    events_count=len(events))
        return events

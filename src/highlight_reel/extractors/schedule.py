"""Extract the tracked team's completed games from the league schedule."""

from typing import Any, Dict, List

from ..models.games import Game
from ..utils.coerce import to_int_or_none, to_str_or_none

GAME_STATUS_FINAL = 3


def _team_id(team: Any) -> Any:
    return to_int_or_none(team.get("teamId")) if isinstance(team, dict) else None


def extract_team_games(payload: Any, team_id: int, team_tricode: str) -> List[Game]:
    """Completed games involving ``team_id``, newest first.

    Args:
        payload: scheduleLeagueV2.json body
        team_id: Tracked team identifier
        team_tricode: Label used on the tracked side of the matchup

    Returns:
        Game summaries sorted by date descending
    """
    if not isinstance(payload, dict):
        return []
    league_schedule = payload.get("leagueSchedule")
    if not isinstance(league_schedule, dict):
        return []

    games: List[Game] = []
    for game_date in league_schedule.get("gameDates") or []:
        if not isinstance(game_date, dict) or not isinstance(game_date.get("games"), list):
            continue

        for game in game_date["games"]:
            if not isinstance(game, dict):
                continue
            if to_int_or_none(game.get("gameStatus")) != GAME_STATUS_FINAL:
                continue

            game_id = to_str_or_none(game.get("gameId"))
            if not game_id:
                continue

            home: Dict[str, Any] = game.get("homeTeam") or {}
            away: Dict[str, Any] = game.get("awayTeam") or {}
            if team_id not in (_team_id(home), _team_id(away)):
                continue

            is_home = _team_id(home) == team_id
            ours, opponent = (home, away) if is_home else (away, home)
            opponent_code = to_str_or_none(opponent.get("teamTricode")) or "?"
            points = to_int_or_none(ours.get("score")) or 0
            opponent_points = to_int_or_none(opponent.get("score")) or 0

            games.append(Game(
                game_id=game_id,
                game_code=to_str_or_none(game.get("gameCode")) or "",
                game_date=to_str_or_none(game.get("gameDateEst")) or "",
                matchup=(f"{team_tricode} vs. {opponent_code}" if is_home
                         else f"{team_tricode} @ {opponent_code}"),
                is_home=is_home,
                home_score=to_int_or_none(home.get("score")) or 0,
                away_score=to_int_or_none(away.get("score")) or 0,
                result="W" if points > opponent_points else "L",
                points=points,
                opponent_points=opponent_points,
            ))

    games.sort(key=lambda g: g.game_date, reverse=True)
    return games

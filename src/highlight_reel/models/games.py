"""Completed game summary for the tracked team."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Game(BaseModel):
    """A finished game involving the tracked team, seen from that team's side."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    game_id: str = Field(..., min_length=1, description="NBA game ID")
    game_code: str = Field(default="")
    game_date: str = Field(..., description="Game date as published by the schedule (Eastern)")
    matchup: str = Field(..., description="e.g. 'POR vs. BOS' at home, 'POR @ BOS' away")
    is_home: bool
    home_score: int = 0
    away_score: int = 0
    result: str = Field(..., pattern="^[WL]$")
    points: int = 0
    opponent_points: int = 0

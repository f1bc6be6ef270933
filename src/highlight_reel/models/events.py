"""Highlight event model and the statistical categories used to query clips."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    """Video query context measure.

    Free throws (FTA) are absent: upstream never attaches clips
    to them.
    """

    FGA = "FGA"  # shot attempt
    AST = "AST"
    TOV = "TOV"
    REB = "REB"
    BLK = "BLK"
    STL = "STL"
    PF = "PF"  # personal foul


class Event(BaseModel):
    """One highlight clip as returned by the video asset feed.

    Serialized with camelCase aliases (``eventId``, ``videoUrl``...) for
    callers that render it.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    event_id: int = Field(..., description="Upstream action number, unique within a game")
    game_id: str = Field(..., min_length=1)
    period: int = Field(..., ge=1)
    description: str = Field(default="")
    category: Category
    video_url: Optional[str] = Field(None, description="Largest available resolution")
    thumbnail_url: Optional[str] = None
    video_duration_ms: Optional[int] = None

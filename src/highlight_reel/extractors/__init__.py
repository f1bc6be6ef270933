"""Extractors that turn raw upstream JSON into models."""

from .play_by_play import extract_actions, extract_clutch_context
from .schedule import extract_team_games
from .video import decode_video_assets

__all__ = [
    "decode_video_assets",
    "extract_actions",
    "extract_clutch_context",
    "extract_team_games",
]

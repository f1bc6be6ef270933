"""Pydantic data models for the highlight reel."""

from .clutch import ClutchContext
from .events import Category, Event
from .games import Game

__all__ = [
    "Category",
    "ClutchContext",
    "Event",
    "Game",
]

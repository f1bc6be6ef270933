"""Configuration management for the highlight reel with safe test defaults."""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import List, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models.events import Category
from .utils.season import current_season, is_season_label


class Environment(str, Enum):
    """Application environment types."""
    TEST = "TEST"
    DEV = "DEV"
    PROD = "PROD"


_ENV_ALIASES = {
    'TEST': Environment.TEST,
    'TESTING': Environment.TEST,
    'DEV': Environment.DEV,
    'DEVELOPMENT': Environment.DEV,
    'LOCAL': Environment.DEV,
    'PROD': Environment.PROD,
    'PRODUCTION': Environment.PROD,
}


DEFAULT_CATEGORIES = [
    Category.FGA,
    Category.AST,
    Category.TOV,
    Category.REB,
    Category.BLK,
    Category.STL,
    Category.PF,
]
DEFAULT_CLUTCH_CATEGORIES = [Category.FGA, Category.AST, Category.TOV]


class AppSettings(BaseSettings):
    """Application settings with dotenv support.

    Environment variables can be set directly or via .env file. List values
    (CATEGORIES, CLUTCH_CATEGORIES) are read as JSON arrays, e.g.
    CLUTCH_CATEGORIES='["FGA","AST"]'.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    # ===================
    # Environment
    # ===================
    ENV: Environment = Field(
        default=Environment.TEST,
        description='Application environment: TEST, DEV, or PROD'
    )

    # ===================
    # Tracking
    # ===================
    TEAM_ID: int = Field(default=1610612757, description='Tracked team identifier')
    TEAM_TRICODE: str = Field(default='POR', description='Tracked team tricode used in matchup labels')
    PLAYER_ID: int = Field(default=1630166, description='Tracked player identifier')
    SEASON: Optional[str] = Field(
        default=None,
        description='Season override (e.g. 2025-26). Derived from the calendar when unset.'
    )
    SEASON_TYPE: str = Field(default='Regular Season', description='Season type sent to the video endpoint')
    LEAGUE_ID: str = Field(default='00', description='NBA league identifier')

    # ===================
    # API Endpoints
    # ===================
    NBA_STATS_BASE_URL: str = Field(
        default='https://stats.nba.com/stats',
        description='NBA Stats API base URL'
    )
    CDN_BASE_URL: str = Field(
        default='https://cdn.nba.com/static/json',
        description='NBA static JSON CDN base URL'
    )
    USER_AGENT: str = Field(
        default=(
            'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
            '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
        ),
        description='User agent for HTTP requests'
    )

    # ===================
    # Timeouts
    # ===================
    PBP_TIMEOUT_S: float = Field(default=10.0, description='Play-by-play request timeout in seconds')
    VIDEO_TIMEOUT_S: float = Field(default=15.0, description='Video asset request timeout in seconds')
    SCHEDULE_TIMEOUT_S: float = Field(default=15.0, description='Schedule request timeout in seconds')

    # ===================
    # Rate Limits
    # ===================
    FULL_GAME_DELAY_S: float = Field(
        default=0.5,
        description='Pause between full-game video calls'
    )
    CLUTCH_DELAY_S: float = Field(
        default=0.1,
        description='Pause between clutch fan-out video calls'
    )

    # ===================
    # Retry & Backoff
    # ===================
    RETRY_MAX: int = Field(
        default=2,
        ge=1,
        description='Maximum attempts for a call that fails to connect'
    )

    # ===================
    # Aggregation
    # ===================
    CATEGORIES: List[Category] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORIES),
        description='Ordered categories fetched for the tracked player'
    )
    CLUTCH_CATEGORIES: List[Category] = Field(
        default_factory=lambda: list(DEFAULT_CLUTCH_CATEGORIES),
        description='Categories fetched for each clutch participant'
    )
    MAX_CLUTCH_PARTICIPANTS: int = Field(
        default=8,
        ge=0,
        description='Cap on clutch participants fanned out to'
    )
    CLUTCH_PERIOD: int = Field(default=4, ge=1, description='Final regulation period')
    CLUTCH_MINUTES: int = Field(default=5, ge=0, description='Minutes left in the final period that count as clutch')

    # ===================
    # Logging
    # ===================
    LOG_LEVEL: str = Field(default='INFO', description='Logging level')
    LOG_FORMAT: Optional[str] = Field(
        default=None,
        description='Log format: json or console. Unset means console in DEV, json elsewhere.'
    )

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        v_lower = v.strip().lower()
        if v_lower not in ('json', 'console'):
            raise ValueError("LOG_FORMAT must be one of: json, console")
        return v_lower

    @field_validator('SEASON')
    @classmethod
    def validate_season(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        if not is_season_label(v):
            raise ValueError(f"Invalid season format: {v}. Expected format: '2023-24'")
        return v.strip()

    @field_validator('ENV', mode='before')
    @classmethod
    def validate_env(cls, v) -> Environment:
        """Accept the usual spellings (``production``, ``local``...)."""
        if isinstance(v, Environment):
            return v
        env = _ENV_ALIASES.get(str(v).strip().upper())
        if env is None:
            raise ValueError(f"ENV must be TEST, DEV, or PROD (got: {v})")
        return env

    def resolve_log_format(self) -> str:
        """Configured log format, else console for local development and json otherwise."""
        if self.LOG_FORMAT:
            return self.LOG_FORMAT
        return 'console' if self.ENV == Environment.DEV else 'json'

    def resolve_season(self) -> str:
        """Return the configured season, or the one the calendar implies."""
        return self.SEASON or current_season()


@dataclass(frozen=True)
class TrackingConfig:
    """Read-only configuration handed to the highlight aggregator.

    Built once per process from AppSettings, or directly in tests.
    """

    team_id: int
    player_id: int
    season: str
    team_tricode: str = 'POR'
    season_type: str = 'Regular Season'
    league_id: str = '00'
    categories: Tuple[Category, ...] = tuple(DEFAULT_CATEGORIES)
    clutch_categories: Tuple[Category, ...] = tuple(DEFAULT_CLUTCH_CATEGORIES)
    max_clutch_participants: int = 8
    full_game_delay_s: float = 0.5
    clutch_delay_s: float = 0.1
    clutch_period: int = 4
    clutch_minutes: int = 5

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "TrackingConfig":
        return cls(
            team_id=settings.TEAM_ID,
            player_id=settings.PLAYER_ID,
            season=settings.resolve_season(),
            team_tricode=settings.TEAM_TRICODE,
            season_type=settings.SEASON_TYPE,
            league_id=settings.LEAGUE_ID,
            categories=tuple(settings.CATEGORIES),
            clutch_categories=tuple(settings.CLUTCH_CATEGORIES),
            max_clutch_participants=settings.MAX_CLUTCH_PARTICIPANTS,
            full_game_delay_s=settings.FULL_GAME_DELAY_S,
            clutch_delay_s=settings.CLUTCH_DELAY_S,
            clutch_period=settings.CLUTCH_PERIOD,
            clutch_minutes=settings.CLUTCH_MINUTES,
        )


@lru_cache()
def get_settings() -> AppSettings:
    """Get cached application settings.

    Loads settings from:
    1. Environment variables
    2. .env file (if exists)
    3. Default values

    Returns:
        AppSettings: Cached settings instance
    """
    return AppSettings()

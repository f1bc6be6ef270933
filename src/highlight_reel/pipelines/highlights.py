"""Full-game plus clutch-time highlight aggregation for one game."""

import asyncio
import time
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import AsyncIterator, Awaitable, Callable, Dict, Iterator, List, Optional, Protocol

import httpx

from ..config import AppSettings, TrackingConfig, get_settings
from ..http import build_client
from ..io_clients import ANY_TEAM, NBACdnClient, NBAStatsClient
from ..models.clutch import ClutchContext
from ..models.events import Category, Event
from ..nba_logging import get_logger, metrics
from ..rate_limit import CallSequencer
from ..transformers.events import filter_to_ids, merge_events

logger = get_logger(__name__)


class VideoSource(Protocol):
    async def fetch_events(
        self, game_id: str, category: Category, player_id: int, team_id: int = ANY_TEAM
    ) -> List[Event]: ...


class ClutchSource(Protocol):
    async def fetch_clutch_context(
        self,
        game_id: str,
        tracked_player_id: int,
        final_period: int = ...,
        threshold_minutes: int = ...,
    ) -> ClutchContext: ...


class AggregationStage(str, Enum):
    """Stages of one aggregation, in the only order they run."""

    FETCHING_FULL_GAME = "fetching_full_game"
    FETCHING_CLUTCH_CONTEXT = "fetching_clutch_context"
    FETCHING_CLUTCH_VIDEOS = "fetching_clutch_videos"
    MERGING = "merging"
    DONE = "done"


@dataclass
class AggregationReport:
    """Counts and timings of one aggregation, for diagnosing upstream trouble."""

    game_id: str
    stages: List[AggregationStage] = field(default_factory=list)
    full_game_calls: int = 0
    full_game_events: int = 0
    clutch_event_ids: int = 0
    participants_found: int = 0
    participants_fetched: int = 0
    clutch_calls: int = 0
    clutch_events_kept: int = 0
    clutch_events_discarded: int = 0
    total_events: int = 0
    durations: Dict[str, float] = field(default_factory=dict)
    error: Optional[str] = None

    def as_dict(self) -> Dict[str, object]:
        return {
            "gameId": self.game_id,
            "stages": [stage.value for stage in self.stages],
            "fullGameCalls": self.full_game_calls,
            "fullGameEvents": self.full_game_events,
            "clutchEventIds": self.clutch_event_ids,
            "participantsFound": self.participants_found,
            "participantsFetched": self.participants_fetched,
            "clutchCalls": self.clutch_calls,
            "clutchEventsKept": self.clutch_events_kept,
            "clutchEventsDiscarded": self.clutch_events_discarded,
            "totalEvents": self.total_events,
            "durations": {k: round(v, 3) for k, v in self.durations.items()},
            "error": self.error,
        }


@dataclass
class AggregationResult:
    events: List[Event]
    report: AggregationReport


class HighlightAggregator:
    """Builds the highlight list for the tracked player in one game.

    The tracked player's clips are fetched for every configured category.
    Then the play-by-play log decides which actions fall in clutch time and
    who was involved; those players' clips are fetched for the clutch
    categories and narrowed to clutch action numbers, because the video
    endpoint has no clutch filter of its own. Every upstream call goes out
    one at a time through a throttle.
    """

    def __init__(
        self,
        config: TrackingConfig,
        video_source: VideoSource,
        clutch_source: ClutchSource,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.config = config
        self.video_source = video_source
        self.clutch_source = clutch_source
        self._sleep = sleep

    async def aggregate(self, game_id: str) -> List[Event]:
        """Deduplicated highlights for ``game_id`` in chronological order.

        Upstream failures only shrink the result; an empty list is a valid
        outcome.
        """
        result = await self.run(game_id)
        return result.events

    async def run(self, game_id: str) -> AggregationResult:
        """Aggregate and also return the report."""
        report = AggregationReport(game_id=game_id)
        full_game: List[Event] = []
        clutch: List[Event] = []
        started = time.monotonic()

        logger.info("Starting highlight aggregation",
                    game_id=game_id,
                    player_id=self.config.player_id,
                    team_id=self.config.team_id,
                    season=self.config.season)

        try:
            self._enter(report, AggregationStage.FETCHING_FULL_GAME)
            with self._timed(report, "full_game"):
                await self._fetch_full_game(game_id, full_game, report)

            self._enter(report, AggregationStage.FETCHING_CLUTCH_CONTEXT)
            with self._timed(report, "clutch_context"):
                context = await self.clutch_source.fetch_clutch_context(
                    game_id,
                    self.config.player_id,
                    final_period=self.config.clutch_period,
                    threshold_minutes=self.config.clutch_minutes,
                )
            report.clutch_event_ids = len(context.clutch_event_ids)
            report.participants_found = len(context.participant_ids)

            if context.participant_ids:
                self._enter(report, AggregationStage.FETCHING_CLUTCH_VIDEOS)
                with self._timed(report, "clutch_videos"):
                    await self._fetch_clutch_videos(game_id, context, clutch, report)
            else:
                logger.info("No clutch participants, keeping full-game highlights only", game_id=game_id)

        except Exception as e:
            report.error = str(e)
            logger.error("Highlight aggregation interrupted",
                         game_id=game_id,
                         stage=report.stages[-1].value if report.stages else None,
                         error=str(e),
                         exc_info=True)

        self._enter(report, AggregationStage.MERGING)
        events = merge_events(full_game, clutch)
        report.total_events = len(events)

        self._enter(report, AggregationStage.DONE)
        report.durations["total"] = time.monotonic() - started
        metrics.timer("aggregation.duration", report.durations["total"])
        metrics.increment("aggregation.runs", tags={"status": "error" if report.error else "success"})

        logger.info("Highlight aggregation complete",
                    game_id=game_id,
                    total_events=report.total_events,
                    full_game_events=report.full_game_events,
                    clutch_events=report.clutch_events_kept,
                    duration=round(report.durations["total"], 3))
        return AggregationResult(events=events, report=report)

    async def _fetch_full_game(self, game_id: str, events: List[Event], report: AggregationReport) -> None:
        sequencer = CallSequencer(self.config.full_game_delay_s, name="full_game", sleep=self._sleep)
        calls = [
            partial(self.video_source.fetch_events, game_id, category,
                    self.config.player_id, self.config.team_id)
            for category in self.config.categories
        ]
        async for batch in sequencer.iterate(calls):
            events.extend(batch)
            report.full_game_calls = sequencer.calls_issued
            report.full_game_events = len(events)

        logger.info("Fetched full-game highlights",
                    game_id=game_id,
                    calls=sequencer.calls_issued,
                    events_count=len(events))

    async def _fetch_clutch_videos(
        self,
        game_id: str,
        context: ClutchContext,
        kept: List[Event],
        report: AggregationReport,
    ) -> None:
        # Participants beyond the cap are dropped in order of first clutch appearance.
        participants = context.participant_ids[:self.config.max_clutch_participants]
        sequencer = CallSequencer(self.config.clutch_delay_s, name="clutch", sleep=self._sleep)

        for player_id in participants:
            calls = [
                partial(self.video_source.fetch_events, game_id, category, player_id, ANY_TEAM)
                for category in self.config.clutch_categories
            ]
            report.participants_fetched += 1
            async for batch in sequencer.iterate(calls):
                matched = filter_to_ids(batch, context.clutch_event_ids)
                kept.extend(matched)
                report.clutch_calls = sequencer.calls_issued
                report.clutch_events_kept += len(matched)
                report.clutch_events_discarded += len(batch) - len(matched)
                logger.debug("Filtered participant clips to clutch window",
                             game_id=game_id,
                             player_id=player_id,
                             fetched=len(batch),
                             kept=len(matched))

        logger.info("Fetched clutch highlights",
                    game_id=game_id,
                    participants=len(participants),
                    participants_skipped=len(context.participant_ids) - len(participants),
                    calls=sequencer.calls_issued,
                    events_count=len(kept))

    @staticmethod
    def _enter(report: AggregationReport, stage: AggregationStage) -> None:
        report.stages.append(stage)
        logger.debug("Aggregation stage", game_id=report.game_id, stage=stage.value)

    @staticmethod
    @contextmanager
    def _timed(report: AggregationReport, name: str) -> Iterator[None]:
        start = time.monotonic()
        try:
            yield
        finally:
            duration = time.monotonic() - start
            report.durations[name] = duration
            metrics.timer(f"aggregation.{name}.duration", duration)


@asynccontextmanager
async def open_aggregator(
    settings: Optional[AppSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[HighlightAggregator]:
    """Aggregator wired to the real NBA endpoints, closing its HTTP client on exit."""
    settings = settings or get_settings()
    config = TrackingConfig.from_settings(settings)

    async with build_client(settings, transport) as client:
        yield HighlightAggregator(
            config,
            video_source=NBAStatsClient(
                client,
                season=config.season,
                season_type=config.season_type,
                league_id=config.league_id,
                timeout_s=settings.VIDEO_TIMEOUT_S,
                base_url=settings.NBA_STATS_BASE_URL,
                settings=settings,
            ),
            clutch_source=NBACdnClient(
                client,
                pbp_timeout_s=settings.PBP_TIMEOUT_S,
                schedule_timeout_s=settings.SCHEDULE_TIMEOUT_S,
                base_url=settings.CDN_BASE_URL,
                settings=settings,
            ),
        )

"""Decode videodetailsasset responses into Event records."""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..models.events import Category, Event
from ..nba_logging import get_logger
from ..utils.coerce import to_int_or_none, to_str_or_none

logger = get_logger(__name__)


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _best_video_url(asset: Dict[str, Any]) -> Optional[str]:
    """Large, then medium, then small rendition."""
    for key in ("lurl", "murl", "surl"):
        url = to_str_or_none(asset.get(key))
        if url:
            return url
    return None


def decode_video_assets(
    payload: Any,
    category: Category,
    game_id: Optional[str] = None,
) -> List[Event]:
    """Turn a videodetailsasset payload into events.

    Upstream sends ``resultSets.playlist`` (one metadata entry per play) and
    ``resultSets.Meta.videoUrls`` (one asset per play) as parallel arrays
    paired by position. The arrays may differ in length; a playlist entry
    without an asset still becomes an Event, just without video fields.
    Entries without a usable event id or period are dropped.

    Args:
        payload: Decoded JSON body
        category: Category the query was made for, stamped on every event
        game_id: Fallback when an entry carries no ``gi``

    Returns:
        Events in playlist order
    """
    if not isinstance(payload, dict):
        return []

    result_sets = payload.get("resultSets")
    if not isinstance(result_sets, dict):
        return []

    playlist = _as_list(result_sets.get("playlist"))
    meta = result_sets.get("Meta")
    video_urls = _as_list(meta.get("videoUrls")) if isinstance(meta, dict) else []

    if len(playlist) != len(video_urls):
        logger.debug("Playlist and asset arrays differ in length",
                     category=category.value,
                     playlist=len(playlist),
                     assets=len(video_urls))

    events: List[Event] = []
    for index, item in enumerate(playlist):
        if not isinstance(item, dict):
            continue

        event_id = to_int_or_none(item.get("ei"))
        period = to_int_or_none(item.get("p"))
        if event_id is None or period is None:
            logger.debug("Skipping playlist entry without event id or period",
                         category=category.value, index=index)
            continue

        asset = video_urls[index] if index < len(video_urls) else None
        if not isinstance(asset, dict):
            asset = {}

        try:
            events.append(Event(
                event_id=event_id,
                game_id=to_str_or_none(item.get("gi")) or game_id or "",
                period=period,
                description=to_str_or_none(item.get("dsc")) or "",
                category=category,
                video_url=_best_video_url(asset),
                thumbnail_url=to_str_or_none(asset.get("lth")),
                video_duration_ms=to_int_or_none(asset.get("ldur")),
            ))
        except ValidationError as e:
            logger.debug("Skipping invalid playlist entry",
                         category=category.value, index=index, error=str(e))

    return events

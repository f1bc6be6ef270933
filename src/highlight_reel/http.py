"""Async HTTP helpers with per-call timeouts and connection retry."""

import asyncio
import time
from typing import Any, Dict, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import AppSettings, get_settings
from .errors import UpstreamError, UpstreamPayloadError, UpstreamStatusError, UpstreamTimeout
from .nba_logging import get_logger, metrics

logger = get_logger(__name__)

# Only failures to reach the host are retried. A timeout already spent its
# budget and a status error is the upstream's answer.
_RETRYABLE = (httpx.ConnectError, httpx.RemoteProtocolError)


def build_client(
    settings: Optional[AppSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create an AsyncClient; callers own it and must close it."""
    settings = settings or get_settings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.VIDEO_TIMEOUT_S),
        headers={'User-Agent': settings.USER_AGENT},
        follow_redirects=True,
        transport=transport,
    )


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout_s: float,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    endpoint: str = "unknown",
    max_attempts: Optional[int] = None,
) -> Any:
    """GET ``url`` and decode the JSON body.

    Args:
        client: Shared async client
        url: URL to request
        timeout_s: Total budget for this single call
        params: Query parameters
        headers: Extra request headers
        endpoint: Short name used for metrics tags
        max_attempts: Connection attempts (defaults to RETRY_MAX)

    Returns:
        Decoded JSON payload

    Raises:
        UpstreamTimeout: The call exceeded ``timeout_s``
        UpstreamStatusError: Non-2xx response
        UpstreamPayloadError: Body is not JSON
        UpstreamError: Network failure after retries
    """
    attempts = max_attempts or get_settings().RETRY_MAX
    start = time.monotonic()
    status = "error"

    try:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            retry=retry_if_exception_type(_RETRYABLE),
            reraise=True,
        ):
            with attempt:
                # httpx timeouts are per phase; wait_for bounds the whole call
                response = await asyncio.wait_for(
                    client.get(url, params=params, headers=headers, timeout=timeout_s),
                    timeout_s,
                )

        logger.debug("HTTP response received",
                     url=url,
                     status_code=response.status_code,
                     content_length=len(response.content))

        if not response.is_success:
            status = str(response.status_code)
            raise UpstreamStatusError(url, response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            status = "bad_payload"
            raise UpstreamPayloadError(f"Invalid JSON from upstream: {e}", url) from e

        status = "success"
        return payload

    except (httpx.TimeoutException, asyncio.TimeoutError) as e:
        status = "timeout"
        raise UpstreamTimeout(url, timeout_s) from e
    except httpx.RequestError as e:
        status = "network"
        raise UpstreamError(f"Request failed: {e}", url) from e
    finally:
        duration = time.monotonic() - start
        metrics.increment("upstream.calls", tags={"endpoint": endpoint, "status": status})
        metrics.timer("upstream.duration", duration, tags={"endpoint": endpoint})

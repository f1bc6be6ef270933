"""Upstream failure taxonomy.

Fetchers convert every one of these into an empty result; only callers that
opt out of degradation (the schedule listing) ever see them.
"""

from typing import Optional


class UpstreamError(Exception):
    """An upstream call did not produce a usable response."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class UpstreamTimeout(UpstreamError):
    """The call exceeded its own timeout and was cancelled."""

    def __init__(self, url: str, timeout_s: float) -> None:
        super().__init__(f"Request timed out after {timeout_s:g}s", url)
        self.timeout_s = timeout_s


class UpstreamStatusError(UpstreamError):
    """Upstream answered with a non-success status."""

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(f"Upstream returned {status_code}", url)
        self.status_code = status_code


class UpstreamPayloadError(UpstreamError):
    """The body could not be decoded as JSON."""

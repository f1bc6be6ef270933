"""Structured logging and in-process metrics for the highlight reel."""

import logging
import sys
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

import structlog
from structlog.stdlib import LoggerFactory

from .config import AppSettings, get_settings

# Third-party loggers that would otherwise log every upstream request
_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


@dataclass
class TimingSummary:
    """Running count, total and worst case of one timer series."""

    count: int = 0
    total: float = 0.0
    max: float = 0.0

    def add(self, duration: float) -> None:
        self.count += 1
        self.total += duration
        self.max = max(self.max, duration)

    def as_dict(self) -> Dict[str, float]:
        mean = self.total / self.count if self.count else 0.0
        return {"count": self.count, "total": self.total, "mean": mean, "max": self.max}


class MetricsCollector:
    """Counters and timing summaries for upstream calls and aggregation runs.

    Series are keyed ``name,tag1=v1,tag2=v2`` with tags sorted by name, so
    ``upstream.calls,endpoint=videodetailsasset,status=timeout`` counts the
    video endpoint's timeouts.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._counters: Dict[str, int] = {}
        self._timers: Dict[str, TimingSummary] = {}

    @staticmethod
    def key(name: str, tags: Optional[Dict[str, str]] = None) -> str:
        if not tags:
            return name
        return ",".join([name] + [f"{k}={v}" for k, v in sorted(tags.items())])

    def increment(self, name: str, value: int = 1, tags: Optional[Dict[str, str]] = None) -> None:
        series = self.key(name, tags)
        with self._lock:
            self._counters[series] = self._counters.get(series, 0) + value

    def timer(self, name: str, duration: float, tags: Optional[Dict[str, str]] = None) -> None:
        series = self.key(name, tags)
        with self._lock:
            self._timers.setdefault(series, TimingSummary()).add(duration)

    def get_metrics(self) -> Dict[str, Any]:
        """Point-in-time copy of every series."""
        with self._lock:
            return {
                "counters": dict(self._counters),
                "timers": {series: summary.as_dict() for series, summary in self._timers.items()},
            }

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._timers.clear()


metrics = MetricsCollector()


def _renderer(log_format: str):
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def configure_logging(settings: Optional[AppSettings] = None) -> None:
    """Route structlog through the stdlib root logger on stderr.

    stdout is reserved for the CLI's JSON output.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            _renderer(settings.resolve_log_format()),
        ],
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger().setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)

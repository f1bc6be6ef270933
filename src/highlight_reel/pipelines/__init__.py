"""Pipeline orchestration for highlight aggregation."""

from .highlights import (
    AggregationReport,
    AggregationResult,
    AggregationStage,
    HighlightAggregator,
    open_aggregator,
)

__all__ = [
    'AggregationReport',
    'AggregationResult',
    'AggregationStage',
    'HighlightAggregator',
    'open_aggregator',
]

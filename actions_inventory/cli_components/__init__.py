"""CLI components for output formatting and result aggregation."""

from .output_formatter import ColoredFormatter, OutputFormatter
from .result_aggregator import ResultAggregator, StandardResultAggregator

__all__ = [
    "ColoredFormatter",
    "OutputFormatter",
    "ResultAggregator",
    "StandardResultAggregator",
]

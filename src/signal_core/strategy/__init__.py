"""Indicators, classification and signal aggregation."""

from signal_core.strategy.aggregator import (
    SignalAggregator,
    indicator_consensus,
    is_acceptable,
    weighted_scores,
)
from signal_core.strategy.classify import build_indicator_results
from signal_core.strategy.condition import analyze_market_condition
from signal_core.strategy.confirmations import Confirmation, find_confirmations

__all__ = [
    "Confirmation",
    "SignalAggregator",
    "analyze_market_condition",
    "build_indicator_results",
    "find_confirmations",
    "indicator_consensus",
    "is_acceptable",
    "weighted_scores",
]

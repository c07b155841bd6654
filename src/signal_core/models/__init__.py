"""Pydantic domain models."""

from signal_core.models.market import (
    AssetClass,
    AssetSpec,
    BarSeries,
    MarketCondition,
    MarketData,
    PriceBar,
    bar_arrays,
)
from signal_core.models.session import SessionInfo
from signal_core.models.signal import IndicatorResult, TradingSignal

__all__ = [
    "AssetClass",
    "AssetSpec",
    "BarSeries",
    "IndicatorResult",
    "MarketCondition",
    "MarketData",
    "PriceBar",
    "SessionInfo",
    "TradingSignal",
    "bar_arrays",
]

"""Market data models: bars, live summaries, asset catalog rows."""

from __future__ import annotations

import math
from typing import Literal, Sequence

from pydantic import BaseModel, ConfigDict, Field, model_validator

AssetClass = Literal["CURRENCY", "INDEX", "COMMODITY", "CRYPTO", "STOCK", "OTC"]


class PriceBar(BaseModel):
    """One OHLCV bar. Immutable once produced."""

    model_config = ConfigDict(frozen=True)

    timestamp: int  # ms epoch
    open: float
    high: float
    low: float
    close: float
    volume: float = Field(ge=0.0)

    @model_validator(mode="after")
    def _check_ohlc(self) -> PriceBar:
        prices = (self.open, self.high, self.low, self.close)
        if not all(math.isfinite(p) and p > 0 for p in prices):
            raise ValueError(f"prices must be finite and positive: {prices}")
        body_low = min(self.open, self.close)
        body_high = max(self.open, self.close)
        if not (self.low <= body_low <= body_high <= self.high):
            raise ValueError(
                f"bar violates low <= min(open, close) <= max(open, close) <= high: "
                f"o={self.open} h={self.high} l={self.low} c={self.close}"
            )
        return self


# Ordered, oldest-first.
BarSeries = list[PriceBar]


def bar_arrays(
    bars: Sequence[PriceBar],
) -> tuple[list[float], list[float], list[float], list[float], list[float]]:
    """Split bars into index-aligned (opens, highs, lows, closes, volumes)."""
    return (
        [b.open for b in bars],
        [b.high for b in bars],
        [b.low for b in bars],
        [b.close for b in bars],
        [b.volume for b in bars],
    )


class AssetSpec(BaseModel):
    """One row of the read-only asset catalog."""

    symbol: str
    name: str
    asset_class: AssetClass
    category: str = ""
    base_price: float = Field(gt=0.0)
    spread: float = Field(default=0.0, ge=0.0)
    is_active: bool = True


class MarketData(BaseModel):
    """Live summary of an instrument's running bar buffer."""

    model_config = ConfigDict(populate_by_name=True)

    asset: str
    current_price: float = Field(alias="currentPrice")
    previous_close: float = Field(alias="previousClose")
    change: float
    change_percent: float = Field(alias="changePercent")
    high_24h: float = Field(alias="high24h")
    low_24h: float = Field(alias="low24h")
    volume_24h: float = Field(alias="volume24h")
    last_update: int = Field(alias="lastUpdate")
    price_history: list[PriceBar] = Field(default_factory=list, alias="priceHistory")


class MarketCondition(BaseModel):
    """Coarse regime description derived from a bar series."""

    trend: Literal["BULLISH", "BEARISH", "SIDEWAYS"]
    volatility: Literal["LOW", "MEDIUM", "HIGH"]
    volume: Literal["LOW", "MEDIUM", "HIGH"]
    sentiment: Literal["BULLISH", "BEARISH", "NEUTRAL"]
    strength: float = Field(ge=0.0, le=100.0)
    description: str

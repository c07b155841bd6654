"""Market regime summary for dashboards."""

from __future__ import annotations

from typing import Sequence

from signal_core.models import MarketCondition, PriceBar, bar_arrays
from signal_core.strategy import indicators as ind

MIN_BARS = 20


def analyze_market_condition(bars: Sequence[PriceBar]) -> MarketCondition:
    """Trend from EMA 10/20/50, volatility from ATR/price, volume from recent vs overall.

    Fewer than 20 bars gives a neutral sideways reading.
    """
    if len(bars) < MIN_BARS:
        return MarketCondition(
            trend="SIDEWAYS",
            volatility="MEDIUM",
            volume="MEDIUM",
            sentiment="NEUTRAL",
            strength=50.0,
            description="Not enough history",
        )

    _, highs, lows, closes, volumes = bar_arrays(bars)
    price = closes[-1]
    ema10 = ind.ema(closes, 10)[-1]
    ema20 = ind.ema(closes, 20)[-1]
    ema50 = ind.ema(closes, 50)[-1]

    if price > ema10 > ema20 > ema50:
        trend = "BULLISH"
    elif price < ema10 < ema20 < ema50:
        trend = "BEARISH"
    else:
        trend = "SIDEWAYS"

    atr_pct = ind.atr(highs, lows, closes, 14) / price * 100
    if atr_pct < 0.5:
        volatility = "LOW"
    elif atr_pct < 1.5:
        volatility = "MEDIUM"
    else:
        volatility = "HIGH"

    overall = sum(volumes) / len(volumes)
    recent = sum(volumes[-5:]) / 5
    ratio = recent / overall if overall > 0 else 1.0
    if ratio < 0.8:
        volume = "LOW"
    elif ratio < 1.5:
        volume = "MEDIUM"
    else:
        volume = "HIGH"

    rsi = ind.rsi(closes, 14)
    histogram = ind.macd(closes).histogram
    bullish = sum((rsi > 50, histogram > 0, trend == "BULLISH"))
    bearish = sum((rsi < 50, histogram < 0, trend == "BEARISH"))
    if bullish >= 2:
        sentiment = "BULLISH"
    elif bearish >= 2:
        sentiment = "BEARISH"
    else:
        sentiment = "NEUTRAL"

    strength = min(abs(price - ema50) / ema50 * 1000 + abs(rsi - 50), 100.0)
    return MarketCondition(
        trend=trend,
        volatility=volatility,
        volume=volume,
        sentiment=sentiment,
        strength=strength,
        description=f"{trend.lower()} trend, {volatility.lower()} volatility, {volume.lower()} volume",
    )

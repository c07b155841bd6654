"""Turns raw indicator values into BUY/SELL/NEUTRAL readings.

Oscillators only vote when a slow and a fast horizon agree at an extreme,
with strength ramping linearly from the threshold and capped at 100. A
NEUTRAL reading carries strength 0, except ADX which never takes a side.
"""

from __future__ import annotations

from typing import Sequence

from signal_core.models import IndicatorResult, PriceBar, bar_arrays
from signal_core.strategy import indicators as ind

RSI_OVERBOUGHT = 75.0
RSI_OVERSOLD = 25.0
BAND_HIGH = 0.85
BAND_LOW = 0.15
STOCH_HIGH = 85.0
STOCH_LOW = 15.0
WR_HIGH = -15.0
WR_LOW = -85.0
CCI_SLOW = 150.0
CCI_FAST = 100.0
CCI_FULL = 300.0


def _clamp(value: float) -> float:
    return max(0.0, min(value, 100.0))


def _neutral(name: str, value: float, description: str) -> IndicatorResult:
    return IndicatorResult(
        name=name, value=value, signal="NEUTRAL", strength=0.0, description=description
    )


def classify_rsi(closes: Sequence[float]) -> IndicatorResult:
    value = (ind.rsi(closes, 9) + ind.rsi(closes, 14) + ind.rsi(closes, 21)) / 3
    if value > RSI_OVERBOUGHT:
        return IndicatorResult(
            name="RSI",
            value=round(value, 2),
            signal="SELL",
            strength=_clamp((value - RSI_OVERBOUGHT) * 4),
            description=f"Overbought across 9/14/21 ({value:.1f})",
        )
    if value < RSI_OVERSOLD:
        return IndicatorResult(
            name="RSI",
            value=round(value, 2),
            signal="BUY",
            strength=_clamp((RSI_OVERSOLD - value) * 4),
            description=f"Oversold across 9/14/21 ({value:.1f})",
        )
    return _neutral("RSI", round(value, 2), f"Neutral ({value:.1f})")


def classify_macd(closes: Sequence[float]) -> IndicatorResult:
    slow = ind.macd(closes, 12, 26, 9)
    fast = ind.macd(closes, 8, 17, 6)
    price = closes[-1]
    strength = _clamp((abs(slow.histogram) + abs(fast.histogram)) / price * 20_000)
    if slow.histogram > 0 and fast.histogram > 0:
        return IndicatorResult(
            name="MACD",
            value=slow.histogram,
            signal="BUY",
            strength=strength,
            description="Bullish histogram on standard and fast MACD",
        )
    if slow.histogram < 0 and fast.histogram < 0:
        return IndicatorResult(
            name="MACD",
            value=slow.histogram,
            signal="SELL",
            strength=strength,
            description="Bearish histogram on standard and fast MACD",
        )
    return _neutral("MACD", slow.histogram, "Standard and fast MACD disagree")


def _band_position(price: float, bands: ind.Bands) -> float:
    width = bands.upper - bands.lower
    if width == 0:
        return 0.5
    return (price - bands.lower) / width


def classify_bollinger(closes: Sequence[float]) -> IndicatorResult:
    price = closes[-1]
    position = (
        _band_position(price, ind.bollinger_bands(closes, 20, 2))
        + _band_position(price, ind.bollinger_bands(closes, 10, 1.5))
    ) / 2
    value = round(position, 4)
    if position > BAND_HIGH:
        return IndicatorResult(
            name="Bollinger Bands",
            value=value,
            signal="SELL",
            strength=_clamp((position - BAND_HIGH) * 667),
            description="Price pressing the upper bands",
        )
    if position < BAND_LOW:
        return IndicatorResult(
            name="Bollinger Bands",
            value=value,
            signal="BUY",
            strength=_clamp((BAND_LOW - position) * 667),
            description="Price pressing the lower bands",
        )
    return _neutral("Bollinger Bands", value, "Price inside the bands")


def classify_stochastic(
    highs: Sequence[float], lows: Sequence[float], closes: Sequence[float]
) -> IndicatorResult:
    slow = ind.stochastic(highs, lows, closes, 14, 3)
    fast = ind.stochastic(highs, lows, closes, 9, 2)
    value = round(slow.k, 2)
    if slow.k > STOCH_HIGH and fast.k > STOCH_HIGH:
        return IndicatorResult(
            name="Stochastic",
            value=value,
            signal="SELL",
            strength=_clamp((slow.k - STOCH_HIGH) * 6.67),
            description=f"Overbought %K {slow.k:.1f} / fast {fast.k:.1f}",
        )
    if slow.k < STOCH_LOW and fast.k < STOCH_LOW:
        return IndicatorResult(
            name="Stochastic",
            value=value,
            signal="BUY",
            strength=_clamp((STOCH_LOW - slow.k) * 6.67),
            description=f"Oversold %K {slow.k:.1f} / fast {fast.k:.1f}",
        )
    return _neutral("Stochastic", value, f"%K {slow.k:.1f}, %D {slow.d:.1f}")


def classify_williams(
    highs: Sequence[float], lows: Sequence[float], closes: Sequence[float]
) -> IndicatorResult:
    slow = ind.williams_r(highs, lows, closes, 14)
    fast = ind.williams_r(highs, lows, closes, 9)
    value = round(slow, 2)
    if slow > WR_HIGH and fast > WR_HIGH:
        return IndicatorResult(
            name="Williams %R",
            value=value,
            signal="SELL",
            strength=_clamp((slow - WR_HIGH) * 6.67),
            description=f"Overbought ({slow:.1f})",
        )
    if slow < WR_LOW and fast < WR_LOW:
        return IndicatorResult(
            name="Williams %R",
            value=value,
            signal="BUY",
            strength=_clamp((WR_LOW - slow) * 6.67),
            description=f"Oversold ({slow:.1f})",
        )
    return _neutral("Williams %R", value, f"Mid-range ({slow:.1f})")


def classify_cci(
    highs: Sequence[float], lows: Sequence[float], closes: Sequence[float]
) -> IndicatorResult:
    slow = ind.cci(highs, lows, closes, 20)
    fast = ind.cci(highs, lows, closes, 14)
    value = round(slow, 2)
    ramp = 100 / (CCI_FULL - CCI_SLOW)
    if slow > CCI_SLOW and fast > CCI_FAST:
        return IndicatorResult(
            name="CCI",
            value=value,
            signal="SELL",
            strength=_clamp((slow - CCI_SLOW) * ramp),
            description=f"Extended above mean ({slow:.0f})",
        )
    if slow < -CCI_SLOW and fast < -CCI_FAST:
        return IndicatorResult(
            name="CCI",
            value=value,
            signal="BUY",
            strength=_clamp((-CCI_SLOW - slow) * ramp),
            description=f"Extended below mean ({slow:.0f})",
        )
    return _neutral("CCI", value, f"Within normal range ({slow:.0f})")


def classify_adx(
    highs: Sequence[float], lows: Sequence[float], closes: Sequence[float]
) -> IndicatorResult:
    dm = ind.adx(highs, lows, closes, 14)
    if dm.adx >= 40:
        label = "Strong trend"
    elif dm.adx >= 25:
        label = "Trending"
    else:
        label = "Weak trend"
    return IndicatorResult(
        name="ADX",
        value=round(dm.adx, 2),
        signal="NEUTRAL",
        strength=_clamp(dm.adx),
        description=f"{label} (+DI {dm.plus_di:.1f}, -DI {dm.minus_di:.1f})",
    )


def classify_sar(
    highs: Sequence[float], lows: Sequence[float], closes: Sequence[float]
) -> IndicatorResult:
    sar = ind.parabolic_sar(highs, lows)
    price = closes[-1]
    distance = abs(price - sar.value)
    true_range = ind.atr(highs, lows, closes, 14)
    if true_range > 0:
        strength = _clamp(distance / true_range * 25)
    else:
        strength = 100.0 if distance > 0 else 0.0
    if price > sar.value:
        return IndicatorResult(
            name="Parabolic SAR",
            value=sar.value,
            signal="BUY",
            strength=strength,
            description="Price above SAR",
        )
    if price < sar.value:
        return IndicatorResult(
            name="Parabolic SAR",
            value=sar.value,
            signal="SELL",
            strength=strength,
            description="Price below SAR",
        )
    return _neutral("Parabolic SAR", sar.value, "Price at SAR")


def build_indicator_results(bars: Sequence[PriceBar]) -> list[IndicatorResult]:
    """Classify every indicator on *bars*, in a fixed order.

    Short series still produce readings from the indicators' neutral
    defaults; an empty series produces none.
    """
    if not bars:
        return []
    _, highs, lows, closes, _ = bar_arrays(bars)
    return [
        classify_rsi(closes),
        classify_macd(closes),
        classify_bollinger(closes),
        classify_stochastic(highs, lows, closes),
        classify_williams(highs, lows, closes),
        classify_cci(highs, lows, closes),
        classify_adx(highs, lows, closes),
        classify_sar(highs, lows, closes),
    ]

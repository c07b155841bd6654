"""Structural confirmations that back an indicator vote.

Each check looks at price structure rather than an oscillator and returns a
``Confirmation`` for the side it supports, or None. The aggregator adds the
confirmation's weight to that side's raw score and its bonus to the final
score.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from signal_core.config.schema import SignalConfig
from signal_core.models import PriceBar, bar_arrays
from signal_core.models.signal import Direction
from signal_core.strategy.indicators import ema

EMA_STACK = (5, 13, 21, 34, 55)
MOMENTUM_LOOKBACKS = (1, 3, 5, 10)
FIB_RATIOS = (0.236, 0.382, 0.618, 0.786)
FIB_WINDOW = 20
VOLUME_WINDOW = 20
STRUCTURE_WINDOW = 10
STRUCTURE_SHARE = 0.7
ENGULF_FACTOR = 1.2


@dataclass(frozen=True)
class Confirmation:
    name: str  # weight key in SignalConfig.weights
    direction: Direction
    bonus: float
    reason: str


def ema_stack(closes: Sequence[float], config: SignalConfig) -> Confirmation | None:
    """Price and EMA 5/13/21/34/55 strictly stacked in one direction."""
    if len(closes) < EMA_STACK[-1]:
        return None
    line = [closes[-1]] + [ema(closes, p)[-1] for p in EMA_STACK]
    pairs = list(zip(line, line[1:]))
    if all(a > b for a, b in pairs):
        return Confirmation(
            "Moving Average", "BUY", config.bonuses.ema_stack,
            "Price above bullish EMA stack 5/13/21/34/55",
        )
    if all(a < b for a, b in pairs):
        return Confirmation(
            "Moving Average", "SELL", config.bonuses.ema_stack,
            "Price below bearish EMA stack 5/13/21/34/55",
        )
    return None


def momentum(closes: Sequence[float], config: SignalConfig) -> Confirmation | None:
    """Price change over 1, 3, 5 and 10 bars all share a sign."""
    if len(closes) <= MOMENTUM_LOOKBACKS[-1]:
        return None
    changes = [closes[-1] - closes[-1 - n] for n in MOMENTUM_LOOKBACKS]
    if all(c > 0 for c in changes):
        return Confirmation(
            "Price Action", "BUY", config.bonuses.momentum,
            "Positive momentum over 1/3/5/10 bars",
        )
    if all(c < 0 for c in changes):
        return Confirmation(
            "Price Action", "SELL", config.bonuses.momentum,
            "Negative momentum over 1/3/5/10 bars",
        )
    return None


def candle_pattern(bars: Sequence[PriceBar], config: SignalConfig) -> Confirmation | None:
    """Three same-colour candles, or failing that an engulfing candle."""
    if len(bars) < 3:
        return None
    last3 = bars[-3:]
    if all(b.close > b.open for b in last3):
        return Confirmation(
            "Candle Pattern", "BUY", config.bonuses.candle_run, "Three consecutive bullish candles"
        )
    if all(b.close < b.open for b in last3):
        return Confirmation(
            "Candle Pattern", "SELL", config.bonuses.candle_run, "Three consecutive bearish candles"
        )

    prev, cur = bars[-2], bars[-1]
    prev_body = abs(prev.close - prev.open)
    cur_body = abs(cur.close - cur.open)
    if prev_body == 0 or cur_body <= prev_body * ENGULF_FACTOR:
        return None
    if prev.close < prev.open and cur.close > cur.open:
        return Confirmation(
            "Candle Pattern", "BUY", config.bonuses.engulfing, "Bullish engulfing candle"
        )
    if prev.close > prev.open and cur.close < cur.open:
        return Confirmation(
            "Candle Pattern", "SELL", config.bonuses.engulfing, "Bearish engulfing candle"
        )
    return None


def volume_surge(bars: Sequence[PriceBar], config: SignalConfig) -> Confirmation | None:
    """Last bar's volume against the average of the preceding bars, with a directional body."""
    if len(bars) < VOLUME_WINDOW + 1:
        return None
    window = bars[-VOLUME_WINDOW - 1 : -1]
    average = sum(b.volume for b in window) / len(window)
    last = bars[-1]
    if average <= 0 or last.volume / average <= config.volume_surge_ratio:
        return None
    ratio = last.volume / average
    if last.close > last.open:
        return Confirmation(
            "Volume Confirmation", "BUY", config.bonuses.volume_surge,
            f"Volume {ratio:.1f}x average on a bullish candle",
        )
    if last.close < last.open:
        return Confirmation(
            "Volume Confirmation", "SELL", config.bonuses.volume_surge,
            f"Volume {ratio:.1f}x average on a bearish candle",
        )
    return None


def fibonacci(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    config: SignalConfig,
) -> Confirmation | None:
    """Price sitting on a retracement level of the recent range."""
    if len(closes) < max(FIB_WINDOW, 2):
        return None
    top = max(highs[-FIB_WINDOW:])
    bottom = min(lows[-FIB_WINDOW:])
    span = top - bottom
    if span <= 0:
        return None
    price = closes[-1]
    step = closes[-1] - closes[-2]
    if step == 0:
        return None
    for ratio in FIB_RATIOS:
        level = top - span * ratio
        if abs(price - level) / price <= config.fib_tolerance:
            direction: Direction = "BUY" if step > 0 else "SELL"
            return Confirmation(
                "Fibonacci", direction, config.bonuses.fibonacci,
                f"Price at {ratio * 100:.1f}% retracement",
            )
    return None


def market_structure(
    highs: Sequence[float], lows: Sequence[float]
) -> Confirmation | None:
    """Higher highs with higher lows (or the reverse) across most recent bars."""
    if len(highs) < STRUCTURE_WINDOW:
        return None
    hi = highs[-STRUCTURE_WINDOW:]
    lo = lows[-STRUCTURE_WINDOW:]
    steps = len(hi) - 1
    rising = sum(1 for i in range(1, len(hi)) if hi[i] > hi[i - 1] and lo[i] > lo[i - 1])
    falling = sum(1 for i in range(1, len(hi)) if hi[i] < hi[i - 1] and lo[i] < lo[i - 1])
    if rising / steps > STRUCTURE_SHARE:
        return Confirmation("Market Structure", "BUY", 0.0, "Higher highs and higher lows")
    if falling / steps > STRUCTURE_SHARE:
        return Confirmation("Market Structure", "SELL", 0.0, "Lower highs and lower lows")
    return None


def find_confirmations(bars: Sequence[PriceBar], config: SignalConfig) -> list[Confirmation]:
    """Run every check in reporting order and keep the ones that fire."""
    _, highs, lows, closes, _ = bar_arrays(bars)
    found = [
        ema_stack(closes, config),
        momentum(closes, config),
        candle_pattern(bars, config),
        volume_surge(bars, config),
        fibonacci(highs, lows, closes, config),
        market_structure(highs, lows),
    ]
    return [c for c in found if c is not None]

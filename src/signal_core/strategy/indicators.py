"""Technical indicators — pure functions on price series.

Inputs are index-aligned sequences, oldest first. Short histories return a
neutral default instead of raising, and zero-range denominators have fixed
fallbacks, so callers aggregating many indicators never see NaN or
ZeroDivisionError.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

import numpy as np


class MACD(NamedTuple):
    macd: float
    signal: float
    histogram: float


class Bands(NamedTuple):
    lower: float
    middle: float
    upper: float


class Stochastic(NamedTuple):
    k: float
    d: float


class DirectionalMovement(NamedTuple):
    adx: float
    plus_di: float
    minus_di: float


class ParabolicSAR(NamedTuple):
    value: float
    uptrend: bool


def ema(values: Sequence[float], period: int) -> list[float]:
    """Exponential moving average seeded with the first value.

    ``ema[i] = values[i] * a + ema[i-1] * (1 - a)`` with ``a = 2 / (period + 1)``.
    Returns one value per input; empty input gives an empty list.
    """
    if not values:
        return []
    alpha = 2.0 / (period + 1)
    out = [float(values[0])]
    for v in values[1:]:
        out.append(v * alpha + out[-1] * (1 - alpha))
    return out


def sma(values: Sequence[float], period: int) -> list[float]:
    """Rolling simple mean; ``len(values) - period + 1`` values, or [] if too short."""
    if period <= 0 or len(values) < period:
        return []
    arr = np.asarray(values, dtype=np.float64)
    csum = np.cumsum(np.insert(arr, 0, 0.0))
    return ((csum[period:] - csum[:-period]) / period).tolist()


def rsi(closes: Sequence[float], period: int = 14) -> float:
    """Relative Strength Index (Wilder's smoothing), in [0, 100].

    Returns 50 with fewer than ``period + 1`` closes or when the window has
    neither gains nor losses, and 100 when there are gains but no losses.
    """
    if len(closes) < period + 1:
        return 50.0

    deltas = np.diff(np.asarray(closes, dtype=np.float64))
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # Seed with simple average of first *period* changes
    avg_gain = float(gains[:period].mean())
    avg_loss = float(losses[:period].mean())

    for gain, loss in zip(gains[period:], losses[period:]):
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period

    if avg_loss == 0:
        return 50.0 if avg_gain == 0 else 100.0
    rs = avg_gain / avg_loss
    return float(100 - 100 / (1 + rs))


def macd(
    closes: Sequence[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MACD:
    """MACD line, signal line and histogram at the latest bar.

    Zeros when fewer than ``slow + signal`` closes are available.
    """
    if len(closes) < slow + signal:
        return MACD(0.0, 0.0, 0.0)
    fast_ema = ema(closes, fast)
    slow_ema = ema(closes, slow)
    line = [f - s for f, s in zip(fast_ema, slow_ema)]
    signal_line = ema(line, signal)
    return MACD(line[-1], signal_line[-1], line[-1] - signal_line[-1])


def bollinger_bands(
    closes: Sequence[float],
    period: int = 20,
    num_std: float = 2,
) -> Bands:
    """Bollinger Bands (SMA +/- num_std * population stdev) over the last *period* closes.

    With fewer closes the bands collapse onto the last close (zeros when empty).
    """
    if num_std < 0:
        raise ValueError(f"num_std must be >= 0, got {num_std}")
    if len(closes) < period:
        last = float(closes[-1]) if len(closes) else 0.0
        return Bands(last, last, last)

    window = np.asarray(closes[-period:], dtype=np.float64)
    middle = float(window.mean())
    offset = float(window.std()) * num_std
    return Bands(middle - offset, middle, middle + offset)


def _k_series(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int,
) -> list[float]:
    out = []
    for i in range(period - 1, len(closes)):
        hh = max(highs[i - period + 1 : i + 1])
        ll = min(lows[i - period + 1 : i + 1])
        rng = hh - ll
        out.append(50.0 if rng == 0 else (closes[i] - ll) / rng * 100)
    return out


def stochastic(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    k_period: int = 14,
    d_period: int = 3,
) -> Stochastic:
    """Stochastic oscillator %K and %D (SMA of %K), both in [0, 100].

    (50, 50) with fewer than *k_period* bars; a flat window gives %K = 50.
    """
    if len(closes) < k_period:
        return Stochastic(50.0, 50.0)
    ks = _k_series(highs, lows, closes, k_period)
    ds = sma(ks, d_period)
    k = ks[-1]
    return Stochastic(k, ds[-1] if ds else k)


def williams_r(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> float:
    """Williams %R in [-100, 0]; -50 when short or flat."""
    if len(closes) < period:
        return -50.0
    hh = max(highs[-period:])
    ll = min(lows[-period:])
    if hh == ll:
        return -50.0
    return (hh - closes[-1]) / (hh - ll) * -100


def cci(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 20,
) -> float:
    """Commodity Channel Index on typical price (H+L+C)/3; 0 when short or flat."""
    if len(closes) < period:
        return 0.0
    typical = (
        np.asarray(highs[-period:], dtype=np.float64)
        + np.asarray(lows[-period:], dtype=np.float64)
        + np.asarray(closes[-period:], dtype=np.float64)
    ) / 3
    mean = typical.mean()
    mean_dev = np.abs(typical - mean).mean()
    if mean_dev == 0:
        return 0.0
    return float((typical[-1] - mean) / (0.015 * mean_dev))


def true_ranges(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
) -> list[float]:
    """True range for bars 1..n-1 (needs the previous close)."""
    return [
        max(
            highs[i] - lows[i],
            abs(highs[i] - closes[i - 1]),
            abs(lows[i] - closes[i - 1]),
        )
        for i in range(1, len(closes))
    ]


def atr(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> float:
    """Average True Range: mean of the last *period* true ranges; 0 when short."""
    if len(closes) < period + 1:
        return 0.0
    return float(np.mean(true_ranges(highs, lows, closes)[-period:]))


def _wilder(prev: float, value: float, period: int) -> float:
    return prev - prev / period + value


def adx(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> DirectionalMovement:
    """Average Directional Index with +DI / -DI at the latest bar.

    +DM, -DM and TR are Wilder-smoothed (running sums seeded over the first
    *period* bars, or over what is available). ADX is the mean of the first
    *period* DX values, Wilder-averaged thereafter. Zeros when fewer than
    ``period + 1`` bars are available.
    """
    if len(closes) < period + 1:
        return DirectionalMovement(0.0, 0.0, 0.0)

    plus_dm: list[float] = []
    minus_dm: list[float] = []
    for i in range(1, len(closes)):
        up = highs[i] - highs[i - 1]
        down = lows[i - 1] - lows[i]
        plus_dm.append(up if up > down and up > 0 else 0.0)
        minus_dm.append(down if down > up and down > 0 else 0.0)
    trs = true_ranges(highs, lows, closes)

    s_tr = sum(trs[:period])
    s_plus = sum(plus_dm[:period])
    s_minus = sum(minus_dm[:period])

    def _dx(tr: float, p: float, m: float) -> tuple[float, float, float]:
        if tr == 0:
            return 0.0, 0.0, 0.0
        pdi = p / tr * 100
        mdi = m / tr * 100
        total = pdi + mdi
        return (abs(pdi - mdi) / total * 100 if total else 0.0), pdi, mdi

    dx, pdi, mdi = _dx(s_tr, s_plus, s_minus)
    dxs = [dx]
    for i in range(period, len(trs)):
        s_tr = _wilder(s_tr, trs[i], period)
        s_plus = _wilder(s_plus, plus_dm[i], period)
        s_minus = _wilder(s_minus, minus_dm[i], period)
        dx, pdi, mdi = _dx(s_tr, s_plus, s_minus)
        dxs.append(dx)

    if len(dxs) < period:
        return DirectionalMovement(float(np.mean(dxs)), pdi, mdi)
    value = float(np.mean(dxs[:period]))
    for dx in dxs[period:]:
        value = (value * (period - 1) + dx) / period
    return DirectionalMovement(value, pdi, mdi)


def parabolic_sar(
    highs: Sequence[float],
    lows: Sequence[float],
    acceleration: float = 0.02,
    maximum: float = 0.2,
) -> ParabolicSAR:
    """Parabolic SAR at the latest bar and whether the trend is up.

    Starts long from the first low. The acceleration factor ratchets by
    *acceleration* on each new extreme up to *maximum*, SAR never enters the
    previous two bars' range, and the trend flips when price crosses SAR.
    """
    if len(highs) < 2:
        return ParabolicSAR(float(lows[-1]) if len(lows) else 0.0, True)

    uptrend = True
    sar = lows[0]
    ep = highs[0]
    af = acceleration

    for i in range(1, len(highs)):
        sar = sar + af * (ep - sar)
        if uptrend:
            sar = min(sar, lows[i - 1], lows[i - 2] if i >= 2 else lows[i - 1])
            if lows[i] <= sar:
                uptrend = False
                sar = ep
                ep = lows[i]
                af = acceleration
            elif highs[i] > ep:
                ep = highs[i]
                af = min(af + acceleration, maximum)
        else:
            sar = max(sar, highs[i - 1], highs[i - 2] if i >= 2 else highs[i - 1])
            if highs[i] >= sar:
                uptrend = True
                sar = ep
                ep = highs[i]
                af = acceleration
            elif lows[i] < ep:
                ep = lows[i]
                af = min(af + acceleration, maximum)

    return ParabolicSAR(float(sar), uptrend)

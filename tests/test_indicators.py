"""Tests for technical indicators."""

from __future__ import annotations

import math

import pytest

from signal_core.strategy.indicators import (
    adx,
    atr,
    bollinger_bands,
    cci,
    ema,
    macd,
    parabolic_sar,
    rsi,
    sma,
    stochastic,
    true_ranges,
    williams_r,
)


def _zigzag(n: int, start: float = 100.0) -> tuple[list[float], list[float], list[float]]:
    closes, highs, lows = [], [], []
    price = start
    for i in range(n):
        price += 1.5 if i % 3 else -2.0
        closes.append(price)
        highs.append(price + 0.7)
        lows.append(price - 0.9)
    return highs, lows, closes


class TestEMA:
    def test_empty(self):
        assert ema([], 10) == []

    def test_constant_series_is_constant(self):
        assert ema([5.0] * 30, 9) == pytest.approx([5.0] * 30)

    def test_seeded_with_first_value(self):
        out = ema([10.0, 20.0], 3)
        # alpha = 0.5
        assert out == pytest.approx([10.0, 15.0])

    def test_lags_rising_series(self):
        values = [float(i) for i in range(1, 31)]
        assert ema(values, 5)[-1] < values[-1]


class TestSMA:
    def test_rolling_mean(self):
        assert sma([1, 2, 3, 4, 5], 3) == pytest.approx([2.0, 3.0, 4.0])

    def test_too_short(self):
        assert sma([1, 2], 3) == []


class TestRSI:
    def test_insufficient_data_returns_50(self):
        assert rsi([float(i) for i in range(14)], period=14) == 50.0
        assert rsi([], period=14) == 50.0

    def test_all_gains_returns_100(self):
        assert rsi([float(i) for i in range(20)], period=14) == 100.0

    def test_all_losses_returns_0(self):
        assert rsi([float(20 - i) for i in range(20)], period=14) == 0.0

    def test_flat_series_returns_50(self):
        assert rsi([1.5] * 40, period=14) == 50.0

    def test_alternating_near_50(self):
        closes = []
        price = 100.0
        for i in range(30):
            closes.append(price)
            price += 1.0 if i % 2 == 0 else -1.0
        assert 40 < rsi(closes, period=14) < 60

    def test_gains_then_losses(self):
        # 14 gains of +1 seed RSI at 100, five losses pull it down
        closes = [100.0]
        for _ in range(14):
            closes.append(closes[-1] + 1)
        for _ in range(5):
            closes.append(closes[-1] - 1)
        assert 40 < rsi(closes, period=14) < 80

    def test_bounded(self):
        _, _, closes = _zigzag(80)
        for period in (9, 14, 21):
            assert 0 <= rsi(closes, period) <= 100


class TestMACD:
    def test_short_series_zeros(self):
        assert macd([1.0] * 30) == (0.0, 0.0, 0.0)

    def test_histogram_is_line_minus_signal(self):
        _, _, closes = _zigzag(60)
        result = macd(closes)
        assert result.histogram == pytest.approx(result.macd - result.signal)

    def test_rising_series_positive(self):
        closes = [100 * 1.001**i for i in range(60)]
        result = macd(closes)
        assert result.macd > 0
        assert result.histogram > 0


class TestBollingerBands:
    def test_flat_series_collapses(self):
        bands = bollinger_bands([42.0] * 25)
        assert bands.lower == bands.middle == bands.upper == 42.0

    def test_short_series_collapses_on_last_close(self):
        bands = bollinger_bands([1.0, 2.0, 3.0], period=20)
        assert bands == (3.0, 3.0, 3.0)

    def test_empty_series(self):
        assert bollinger_bands([], period=20) == (0.0, 0.0, 0.0)

    def test_known_value(self):
        closes = [float(i) for i in range(1, 21)]
        bands = bollinger_bands(closes, period=20, num_std=2)
        std = math.sqrt(sum((c - 10.5) ** 2 for c in closes) / 20)
        assert bands.middle == pytest.approx(10.5)
        assert bands.upper == pytest.approx(10.5 + 2 * std)
        assert bands.lower == pytest.approx(10.5 - 2 * std)

    @pytest.mark.parametrize("k", [0, 0.5, 1.5, 2, 3])
    def test_ordering(self, k):
        _, _, closes = _zigzag(40)
        bands = bollinger_bands(closes, 20, k)
        assert bands.lower <= bands.middle <= bands.upper

    def test_negative_std_rejected(self):
        with pytest.raises(ValueError):
            bollinger_bands([1.0] * 20, num_std=-1)


class TestStochastic:
    def test_short_series_defaults(self):
        assert stochastic([1.0], [1.0], [1.0]) == (50.0, 50.0)

    def test_flat_window(self):
        result = stochastic([5.0] * 20, [5.0] * 20, [5.0] * 20)
        assert result == (50.0, 50.0)

    def test_close_at_high(self):
        highs = [float(i) for i in range(1, 21)]
        lows = [h - 1 for h in highs]
        result = stochastic(highs, lows, highs)
        assert result.k == pytest.approx(100.0)

    def test_bounded(self):
        highs, lows, closes = _zigzag(60)
        result = stochastic(highs, lows, closes)
        assert 0 <= result.k <= 100
        assert 0 <= result.d <= 100


class TestWilliamsR:
    def test_defaults(self):
        assert williams_r([1.0], [1.0], [1.0]) == -50.0
        assert williams_r([2.0] * 14, [2.0] * 14, [2.0] * 14) == -50.0

    def test_close_at_low(self):
        lows = [float(20 - i) for i in range(20)]
        highs = [low + 1 for low in lows]
        assert williams_r(highs, lows, lows) == pytest.approx(-100.0)

    def test_bounded(self):
        highs, lows, closes = _zigzag(60)
        assert -100 <= williams_r(highs, lows, closes) <= 0


class TestCCI:
    def test_defaults(self):
        assert cci([1.0] * 5, [1.0] * 5, [1.0] * 5) == 0.0
        assert cci([3.0] * 20, [3.0] * 20, [3.0] * 20) == 0.0

    def test_sign_follows_last_typical_price(self):
        highs, lows, closes = _zigzag(40)
        closes[-1] += 20
        highs[-1] += 20
        lows[-1] += 20
        assert cci(highs, lows, closes) > 0


class TestATR:
    def test_true_range_uses_previous_close(self):
        assert true_ranges([10.0, 12.0], [9.0, 11.5], [9.5, 12.0]) == [2.5]

    def test_short_series(self):
        assert atr([1.0] * 5, [1.0] * 5, [1.0] * 5) == 0.0

    def test_constant_range(self):
        highs = [101.0] * 20
        lows = [99.0] * 20
        closes = [100.0] * 20
        assert atr(highs, lows, closes) == pytest.approx(2.0)


class TestADX:
    def test_short_series_zeros(self):
        assert adx([1.0] * 10, [1.0] * 10, [1.0] * 10) == (0.0, 0.0, 0.0)

    def test_flat_series_zeros(self):
        assert adx([1.0] * 40, [1.0] * 40, [1.0] * 40) == (0.0, 0.0, 0.0)

    def test_strong_uptrend(self):
        highs = [100.0 + i for i in range(60)]
        lows = [h - 0.5 for h in highs]
        closes = [h - 0.1 for h in highs]
        result = adx(highs, lows, closes)
        assert result.plus_di > result.minus_di
        assert result.adx > 40

    def test_bounded(self):
        highs, lows, closes = _zigzag(80)
        result = adx(highs, lows, closes)
        assert 0 <= result.adx <= 100


class TestParabolicSAR:
    def test_single_bar(self):
        assert parabolic_sar([2.0], [1.0]) == (1.0, True)

    def test_empty(self):
        assert parabolic_sar([], []) == (0.0, True)

    def test_uptrend_sar_below_price(self):
        highs = [100.0 + i for i in range(30)]
        lows = [h - 0.5 for h in highs]
        result = parabolic_sar(highs, lows)
        assert result.uptrend is True
        assert result.value < lows[-1]

    def test_downtrend_flips(self):
        highs = [130.0 - i for i in range(30)]
        lows = [h - 0.5 for h in highs]
        result = parabolic_sar(highs, lows)
        assert result.uptrend is False
        assert result.value > highs[-1]

    def test_flat_series_sits_on_price(self):
        result = parabolic_sar([5.0] * 20, [5.0] * 20)
        assert result.value == 5.0

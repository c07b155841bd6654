"""Tests for structural confirmations."""

from __future__ import annotations

import pytest

from signal_core.config import SignalConfig
from signal_core.models import PriceBar, bar_arrays
from signal_core.strategy.confirmations import (
    candle_pattern,
    ema_stack,
    fibonacci,
    find_confirmations,
    market_structure,
    momentum,
    volume_surge,
)


@pytest.fixture
def config():
    return SignalConfig()


def _bar(ts: int, o: float, c: float, volume: float = 1000.0) -> PriceBar:
    return PriceBar(timestamp=ts, open=o, high=max(o, c), low=min(o, c), close=c, volume=volume)


class TestEmaStack:
    def test_rising(self, rising_bars, config):
        closes = bar_arrays(rising_bars)[3]
        found = ema_stack(closes, config)
        assert found.direction == "BUY"
        assert found.bonus == 25

    def test_falling(self, falling_bars, config):
        closes = bar_arrays(falling_bars)[3]
        assert ema_stack(closes, config).direction == "SELL"

    def test_flat_or_short(self, flat_bars, config):
        assert ema_stack(bar_arrays(flat_bars)[3], config) is None
        assert ema_stack([1.0, 2.0, 3.0], config) is None


class TestMomentum:
    def test_all_positive(self, config):
        assert momentum([float(i) for i in range(1, 13)], config).direction == "BUY"

    def test_mixed(self, config):
        closes = [float(i) for i in range(1, 12)] + [5.0]
        assert momentum(closes, config) is None

    def test_needs_eleven_bars(self, config):
        assert momentum([float(i) for i in range(10)], config) is None


class TestCandlePattern:
    def test_three_bullish(self, config):
        bars = [_bar(i, 100 + i, 101 + i) for i in range(3)]
        found = candle_pattern(bars, config)
        assert found.direction == "BUY"
        assert found.bonus == config.bonuses.candle_run

    def test_bearish_engulfing(self, config):
        bars = [_bar(0, 100, 99), _bar(1, 99, 100), _bar(2, 100.5, 98)]
        found = candle_pattern(bars, config)
        assert found.direction == "SELL"
        assert found.bonus == config.bonuses.engulfing

    def test_body_not_large_enough(self, config):
        bars = [_bar(0, 100, 99), _bar(1, 99, 100), _bar(2, 100, 98.9)]
        assert candle_pattern(bars, config) is None


class TestVolumeSurge:
    def test_surge_on_bullish_candle(self, config):
        bars = [_bar(i, 100, 100) for i in range(20)] + [_bar(20, 100, 101, volume=3000)]
        assert volume_surge(bars, config).direction == "BUY"

    def test_surge_on_doji_ignored(self, config):
        bars = [_bar(i, 100, 100) for i in range(20)] + [_bar(20, 100, 100, volume=3000)]
        assert volume_surge(bars, config) is None

    def test_normal_volume(self, rising_bars, config):
        assert volume_surge(rising_bars, config) is None


class TestFibonacci:
    def test_flat_range_skipped(self, config):
        assert fibonacci([1.0] * 20, [1.0] * 20, [1.0] * 20, config) is None

    def test_price_on_618_level(self, config):
        highs = [110.0] + [105.0] * 19
        lows = [100.0] + [102.0] * 19
        # 61.8% retracement from the top: 110 - 10 * 0.618 = 103.82
        closes = [105.0] * 18 + [103.7, 103.82]
        found = fibonacci(highs, lows, closes, config)
        assert found.direction == "BUY"
        assert "61.8%" in found.reason

    def test_price_off_levels(self, config):
        highs = [110.0] + [105.0] * 19
        lows = [100.0] + [102.0] * 19
        closes = [105.0] * 19 + [105.0 - 0.1]
        assert fibonacci(highs, lows, closes, config) is None


class TestMarketStructure:
    def test_rising(self, rising_bars):
        _, highs, lows, _, _ = bar_arrays(rising_bars)
        assert market_structure(highs, lows).direction == "BUY"

    def test_flat_is_neither(self, flat_bars):
        _, highs, lows, _, _ = bar_arrays(flat_bars)
        assert market_structure(highs, lows) is None


class TestFindConfirmations:
    def test_rising_series_all_bullish(self, rising_bars, config):
        found = find_confirmations(rising_bars, config)
        assert [c.name for c in found] == [
            "Moving Average",
            "Price Action",
            "Candle Pattern",
            "Market Structure",
        ]
        assert all(c.direction == "BUY" for c in found)

    def test_flat_series_none(self, flat_bars, config):
        assert find_confirmations(flat_bars, config) == []

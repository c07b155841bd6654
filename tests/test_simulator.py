"""Tests for the synthetic bar generator."""

from __future__ import annotations

import json

import numpy as np
import pytest

from signal_core.config import AppConfig, SimulatorConfig
from signal_core.errors import InvalidInputError
from signal_core.simulator import generate, generate_for, resolve_asset
from signal_core.simulator.generator import market_seed

END_MS = 1_704_117_600_000  # 2024-01-01T14:00:00Z


def _assert_valid(bar):
    assert bar.low <= min(bar.open, bar.close) <= max(bar.open, bar.close) <= bar.high
    assert bar.low > 0
    assert bar.volume >= 0


class TestGenerate:
    def test_zero_periods_is_base_bar(self):
        bars = generate("EUR/USD", 1.0847, 0, 60_000)
        assert len(bars) == 1
        bar = bars[0]
        assert bar.open == bar.high == bar.low == bar.close == 1.0847

    def test_length_and_spacing(self):
        bars = generate("EUR/USD", 1.0847, 30, 60_000, seed=1, end_ms=END_MS)
        assert len(bars) == 31
        assert bars[-1].timestamp == END_MS
        assert all(b.timestamp - a.timestamp == 60_000 for a, b in zip(bars, bars[1:]))

    def test_continuity(self):
        bars = generate("GBP/USD", 1.2635, 50, seed=3, end_ms=END_MS)
        assert all(b.open == a.close for a, b in zip(bars, bars[1:]))

    @pytest.mark.parametrize("symbol,price", [("EUR/USD", 1.0847), ("BTC/USD", 43789.45), ("NATGAS", 3.467)])
    def test_bars_valid(self, symbol, price):
        for bar in generate(symbol, price, 500, seed=11, end_ms=END_MS):
            _assert_valid(bar)

    def test_tiny_price_stays_positive(self):
        bars = generate("DUST", 0.0002, 300, seed=5, end_ms=END_MS, asset_class="CRYPTO")
        for bar in bars:
            _assert_valid(bar)

    def test_seeded_determinism(self):
        a = generate("EUR/USD", 1.0847, 100, seed=42, end_ms=END_MS)
        b = generate("EUR/USD", 1.0847, 100, seed=42, end_ms=END_MS)
        assert a == b

    def test_different_seeds_differ(self):
        a = generate("EUR/USD", 1.0847, 100, seed=1, end_ms=END_MS)
        b = generate("EUR/USD", 1.0847, 100, seed=2, end_ms=END_MS)
        assert a != b

    def test_crypto_moves_more_than_currency(self):
        fx = generate("EUR/USD", 1.0, 300, seed=9, end_ms=END_MS)
        btc = generate("BTC/USD", 1.0, 300, seed=9, end_ms=END_MS)

        def spread(bars):
            return sum((b.high - b.low) / b.open for b in bars[1:])

        assert spread(btc) > spread(fx)

    def test_config_volatility_applies(self):
        calm = SimulatorConfig(base_volatility={"CURRENCY": 0.0001})
        bars = generate("EUR/USD", 1.0, 50, seed=1, end_ms=END_MS, config=calm)
        assert all(abs(b.close / b.open - 1) < 0.001 for b in bars)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"periods": -1},
            {"base_price": 0.0},
            {"base_price": -5.0},
            {"base_price": float("nan")},
            {"period_ms": 0},
        ],
    )
    def test_invalid_input(self, kwargs):
        args = {"symbol": "EUR/USD", "base_price": 1.0847, "periods": 10, "period_ms": 60_000}
        args.update(kwargs)
        with pytest.raises(InvalidInputError):
            generate(**args)

    def test_bars_serialise(self):
        bars = generate("EUR/USD", 1.0847, 3, seed=1, end_ms=END_MS)
        json.dumps([b.model_dump() for b in bars])


class TestGenerateFor:
    def test_uses_catalog_price(self):
        bars = generate_for("USD/JPY", 5, seed=1, end_ms=END_MS)
        assert bars[0].close == 149.87

    def test_config_seed_used(self):
        config = AppConfig(simulator=SimulatorConfig(seed=7))
        a = generate_for("EUR/USD", 20, config=config, end_ms=END_MS)
        b = generate_for("EUR/USD", 20, config=config, end_ms=END_MS)
        assert a == b

    def test_unknown_symbol(self):
        with pytest.raises(InvalidInputError) as exc_info:
            generate_for("NOPE", 5)
        assert exc_info.value.context == {"symbol": "NOPE"}

    def test_resolve_asset(self):
        assert resolve_asset("GOLD", AppConfig()).asset_class == "COMMODITY"


class TestMarketSeed:
    def test_unseeded_stays_unseeded(self):
        assert market_seed(None, "EUR/USD") is None

    def test_symbol_changes_the_stream(self):
        eur = np.random.default_rng(market_seed(7, "EUR/USD")).random(5)
        gbp = np.random.default_rng(market_seed(7, "GBP/USD")).random(5)
        again = np.random.default_rng(market_seed(7, "EUR/USD")).random(5)
        assert not np.array_equal(eur, gbp)
        assert np.array_equal(eur, again)

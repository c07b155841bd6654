"""Shared test fixtures."""

from datetime import datetime, timezone

import pytest

from signal_core.models import PriceBar

START_MS = 1_704_067_200_000  # 2024-01-01T00:00:00Z
STEP_MS = 60_000
# 14:00 UTC falls in the London/New York overlap
OVERLAP_NOW = datetime(2024, 1, 2, 14, 0, tzinfo=timezone.utc)


def _trend_bars(n: int, step: float, start: float = 100.0, volume: float = 1000.0) -> list[PriceBar]:
    """Each bar opens at the previous close and moves *step* (fractional) with no outer wicks."""
    bars = []
    price = start
    for i in range(n):
        close = price * (1 + step)
        bars.append(
            PriceBar(
                timestamp=START_MS + i * STEP_MS,
                open=price,
                high=max(price, close),
                low=min(price, close),
                close=close,
                volume=volume,
            )
        )
        price = close
    return bars


@pytest.fixture
def make_trend():
    return _trend_bars


@pytest.fixture
def rising_bars():
    return _trend_bars(60, 0.001)


@pytest.fixture
def falling_bars():
    return _trend_bars(60, -0.001)


@pytest.fixture
def flat_bars():
    return _trend_bars(60, 0.0)


@pytest.fixture
def overlap_now():
    return OVERLAP_NOW

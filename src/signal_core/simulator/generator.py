"""Synthetic OHLCV generator with session-aware volatility.

Each step continues from the previous close::

    sigma_t = base_volatility[class] * session volatility multiplier
    close   = max(open * (1 + bias + noise + news), PRICE_FLOOR)

``bias`` is a slow drift (at most ``trend_share`` of sigma_t), ``noise`` is
uniform in +/- sigma_t / 2 and ``news`` only fires on :00 and :30 bars.
"""

from __future__ import annotations

import math
import time
import zlib
from dataclasses import dataclass

import numpy as np
import structlog

from signal_core.config.catalog import default_catalog
from signal_core.config.schema import AppConfig, SimulatorConfig
from signal_core.errors import InvalidInputError
from signal_core.models import AssetSpec, PriceBar
from signal_core.session import classify, volume_multiplier

log = structlog.get_logger("simulator")

PRICE_FLOOR = 1e-4
NEWS_MINUTES = (0, 30)
DEFAULT_ASSET_CLASS = "CURRENCY"

_CATALOG_CLASSES = {spec.symbol: spec.asset_class for spec in default_catalog()}


@dataclass(frozen=True)
class StepContext:
    """Per-run constants shared by every step of one instrument's path."""

    asset_class: str
    base_volatility: float
    base_volume: float
    drift: float  # run-level trend direction in [-1, 1]
    config: SimulatorConfig


def make_context(
    asset_class: str,
    rng: np.random.Generator,
    config: SimulatorConfig,
) -> StepContext:
    return StepContext(
        asset_class=asset_class,
        base_volatility=config.base_volatility.get(asset_class, 0.01),
        base_volume=config.base_volume.get(asset_class, 100_000),
        drift=float(rng.uniform(-1.0, 1.0)),
        config=config,
    )


def _trend_bias(ctx: StepContext, hour: int, minute: int, ramp: float) -> float:
    """Drift as a fraction of sigma_t, in [-1, 1] before scaling."""
    tilt = 0.0
    if ctx.asset_class == "CRYPTO":
        tilt = 0.5 * math.sin((hour + minute / 60) * math.pi / 12)
    return float(np.clip(ctx.drift * ramp + tilt, -1.0, 1.0))


def simulate_step(
    ctx: StepContext,
    rng: np.random.Generator,
    open_price: float,
    timestamp: int,
    ramp: float = 1.0,
) -> PriceBar:
    """Produce one bar opening at *open_price*.

    The same number of draws is taken on every call so a seeded path does
    not depend on which bars happen to land on news minutes.
    """
    ts = time.gmtime(timestamp / 1000)
    hour, minute = ts.tm_hour, ts.tm_min
    sigma = ctx.base_volatility * classify(hour).multiplier

    bias = _trend_bias(ctx, hour, minute, ramp) * ctx.config.trend_share * sigma
    noise = float(rng.uniform(-0.5, 0.5)) * sigma
    news_draw = float(rng.uniform(-0.5, 0.5))
    news = news_draw * sigma * ctx.config.news_multiplier if minute in NEWS_MINUTES else 0.0

    close = max(open_price * (1.0 + bias + noise + news), PRICE_FLOOR)

    wick_scale = float(rng.uniform(0.3, 0.8))
    up, down = (float(x) for x in rng.random(2))
    body_high = max(open_price, close)
    body_low = min(open_price, close)
    high = body_high + up * sigma * open_price * wick_scale
    low = max(body_low - down * sigma * open_price * wick_scale, PRICE_FLOOR)
    # Floating point can push the floor above a floored body
    low = min(low, body_low)
    high = max(high, body_high)

    move = abs(close - open_price) / open_price
    volume = int(
        ctx.base_volume
        * (1.0 + ctx.config.volume_move_factor * move)
        * volume_multiplier(hour)
        * float(rng.uniform(0.8, 1.2))
    )

    return PriceBar(
        timestamp=timestamp,
        open=open_price,
        high=high,
        low=low,
        close=close,
        volume=volume,
    )


def base_bar(base_price: float, timestamp: int, ctx: StepContext) -> PriceBar:
    """Flat anchor bar at the base price."""
    return PriceBar(
        timestamp=timestamp,
        open=base_price,
        high=base_price,
        low=base_price,
        close=base_price,
        volume=int(ctx.base_volume),
    )


def market_seed(seed: int | None, symbol: str) -> np.random.SeedSequence | None:
    """Per-instrument seed: one configured seed gives each symbol its own stream."""
    if seed is None:
        return None
    return np.random.SeedSequence([seed, zlib.crc32(symbol.encode())])


def check_inputs(base_price: float, periods: int, period_ms: int) -> None:
    if isinstance(periods, bool) or not isinstance(periods, int) or periods < 0:
        raise InvalidInputError(f"periods must be a non-negative int, got {periods!r}")
    if not math.isfinite(base_price) or base_price <= 0:
        raise InvalidInputError(f"base_price must be positive, got {base_price!r}")
    if period_ms <= 0:
        raise InvalidInputError(f"period_ms must be positive, got {period_ms!r}")


def simulate_path(
    ctx: StepContext,
    rng: np.random.Generator,
    base_price: float,
    periods: int,
    period_ms: int,
    end_ms: int,
) -> list[PriceBar]:
    """Base bar plus *periods* steps ending at *end_ms*, drawing from *rng*.

    Callers that keep ticking afterwards pass their own generator so live
    bars continue the stream instead of replaying it.
    """
    start_ms = end_ms - periods * period_ms
    bars = [base_bar(base_price, start_ms, ctx)]
    for i in range(1, periods + 1):
        bar = simulate_step(
            ctx,
            rng,
            open_price=bars[-1].close,
            timestamp=start_ms + i * period_ms,
            ramp=i / periods,
        )
        bars.append(bar)
    return bars


def generate(
    symbol: str,
    base_price: float,
    periods: int,
    period_ms: int = 60_000,
    *,
    seed: int | None = None,
    end_ms: int | None = None,
    asset_class: str | None = None,
    config: SimulatorConfig | None = None,
) -> list[PriceBar]:
    """Generate ``periods + 1`` bars ending at *end_ms*, oldest first.

    Bar 0 is the flat base bar; bars 1..periods are simulated steps, so
    ``periods == 0`` returns just the base bar. With a fixed *seed* and
    *end_ms* the output is reproducible bit for bit.

    Raises:
        InvalidInputError: negative *periods*, non-positive *base_price* or
            *period_ms*.
    """
    check_inputs(base_price, periods, period_ms)

    config = config or SimulatorConfig()
    if end_ms is None:
        end_ms = int(time.time() * 1000)

    if asset_class is None:
        asset_class = _CATALOG_CLASSES.get(symbol, DEFAULT_ASSET_CLASS)

    rng = np.random.default_rng(seed)
    ctx = make_context(asset_class, rng, config)
    bars = simulate_path(ctx, rng, base_price, periods, period_ms, end_ms)

    log.debug(
        "bars_generated",
        symbol=symbol,
        asset_class=ctx.asset_class,
        periods=periods,
        first=bars[0].close,
        last=bars[-1].close,
    )
    return bars


def resolve_asset(symbol: str, config: AppConfig) -> AssetSpec:
    """Catalog lookup that rejects unknown symbols."""
    spec = config.asset(symbol)
    if spec is None:
        raise InvalidInputError(f"unknown symbol {symbol!r}", context={"symbol": symbol})
    return spec


def generate_for(
    symbol: str,
    periods: int,
    period_ms: int | None = None,
    *,
    config: AppConfig | None = None,
    seed: int | None = None,
    end_ms: int | None = None,
) -> list[PriceBar]:
    """Generate bars for a catalog symbol, taking price and class from the catalog."""
    config = config or AppConfig()
    spec = resolve_asset(symbol, config)
    return generate(
        symbol,
        spec.base_price,
        periods,
        period_ms or config.simulator.period_ms,
        seed=config.simulator.seed if seed is None else seed,
        end_ms=end_ms,
        asset_class=spec.asset_class,
        config=config.simulator,
    )

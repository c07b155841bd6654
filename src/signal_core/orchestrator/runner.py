"""Orchestrator runner — async feed loop that ticks markets and aggregates signals."""

from __future__ import annotations

import asyncio
import time

import structlog

from signal_core.config.loader import load_config
from signal_core.config.schema import AppConfig
from signal_core.logging.setup import setup_logging
from signal_core.models import TradingSignal
from signal_core.simulator import MarketState, resolve_asset
from signal_core.strategy import SignalAggregator, is_acceptable

log = structlog.get_logger("orchestrator")


def build_markets(config: AppConfig) -> dict[str, MarketState]:
    """Seed one running market per configured feed asset, skipping unknown symbols."""
    markets: dict[str, MarketState] = {}
    for symbol in config.feed.assets:
        try:
            spec = resolve_asset(symbol, config)
        except ValueError:
            log.warning("asset_not_found", asset=symbol)
            continue
        markets[symbol] = MarketState.seeded(
            spec,
            config.simulator.history_bars - 1,
            config.simulator,
            seed=config.simulator.seed,
        )
        log.info("market_loaded", asset=symbol, bars=len(markets[symbol]))
    return markets


def _is_due(key: str, interval_s: float, last_run: dict[str, float], now: float) -> bool:
    """Check if enough time has elapsed since the last run of *key*."""
    last = last_run.get(key)
    if last is not None and now - last < interval_s:
        return False
    last_run[key] = now
    return True


def run_tick(
    markets: dict[str, MarketState],
    aggregator: SignalAggregator,
    config: AppConfig,
    last_run: dict[str, float],
    now: float | None = None,
) -> list[TradingSignal]:
    """One pass over every market: append a bar, aggregate when the signal interval is due.

    A failure on one market is logged and does not stop the others.
    """
    if now is None:
        now = time.monotonic()
    emitted: list[TradingSignal] = []
    for symbol, market in markets.items():
        try:
            market.tick()
            if not _is_due(f"signal:{symbol}", config.feed.signal_interval_s, last_run, now):
                continue
            signal = aggregator.aggregate(symbol, market.snapshot())
        except Exception:
            log.exception("tick_error", asset=symbol)
            continue

        emitted.append(signal)
        log.info(
            "signal_emitted",
            asset=signal.asset,
            direction=signal.signal,
            strength=round(signal.strength, 2),
            confidence=round(signal.confidence, 2),
            risk_level=signal.risk_level,
            acceptable=is_acceptable(signal, config.acceptance),
        )
    return emitted


async def run_loop(config: AppConfig, max_ticks: int | None = None) -> None:
    """Main feed loop. Runs forever unless *max_ticks* is given."""
    markets = build_markets(config)

    if not markets:
        log.error("no_markets_configured")
        return

    aggregator = SignalAggregator(config.signals)
    log.info(
        "orchestrator_started",
        assets=list(markets),
        refresh_interval_s=config.feed.refresh_interval_s,
        signal_interval_s=config.feed.signal_interval_s,
    )

    last_run: dict[str, float] = {}
    ticks = 0
    while max_ticks is None or ticks < max_ticks:
        try:
            run_tick(markets, aggregator, config, last_run)
        except Exception:
            log.exception("tick_error")
        ticks += 1
        await asyncio.sleep(config.feed.refresh_interval_s)


def main(config_path: str | None = None, seed: int | None = None) -> None:
    """Entry point: load config, set up logging, run the async loop."""
    config = load_config(config_path)
    if seed is not None:
        config.simulator.seed = seed
    setup_logging(level=config.logging.level, log_format=config.logging.format)
    asyncio.run(run_loop(config))

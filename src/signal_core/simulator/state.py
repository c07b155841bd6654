"""Per-instrument running bar buffer, owned by the caller.

One ``MarketState`` per symbol replaces process-wide price maps. The feed
loop is the only producer (``tick``); readers take copies via ``snapshot``.
"""

from __future__ import annotations

import threading
import time
from collections import deque

import numpy as np
import structlog

from signal_core.config.schema import SimulatorConfig
from signal_core.models import AssetSpec, MarketData, PriceBar
from signal_core.simulator.generator import (
    base_bar,
    check_inputs,
    make_context,
    market_seed,
    simulate_path,
    simulate_step,
)

log = structlog.get_logger("market_state")


class MarketState:
    """Bounded, lock-guarded bar history for one instrument.

    *seed* is combined with the symbol, so one configured seed still gives
    every instrument its own path.
    """

    def __init__(
        self,
        spec: AssetSpec,
        config: SimulatorConfig | None = None,
        seed: int | None = None,
    ) -> None:
        self.spec = spec
        self.config = config or SimulatorConfig()
        self._rng = np.random.default_rng(market_seed(seed, spec.symbol))
        self._ctx = make_context(spec.asset_class, self._rng, self.config)
        self._bars: deque[PriceBar] = deque(maxlen=self.config.history_bars)
        self._lock = threading.Lock()

    @classmethod
    def seeded(
        cls,
        spec: AssetSpec,
        periods: int,
        config: SimulatorConfig | None = None,
        *,
        seed: int | None = None,
        end_ms: int | None = None,
    ) -> MarketState:
        """Start from a freshly generated history of ``periods + 1`` bars.

        History and later ticks draw from the same generator and drift, so
        live bars carry on from where the history stopped.
        """
        state = cls(spec, config, seed=seed)
        period_ms = state.config.period_ms
        check_inputs(spec.base_price, periods, period_ms)
        if end_ms is None:
            end_ms = int(time.time() * 1000)
        with state._lock:
            history = simulate_path(
                state._ctx, state._rng, spec.base_price, periods, period_ms, end_ms
            )
            state._bars.extend(history)
        log.debug(
            "bars_generated",
            symbol=spec.symbol,
            asset_class=spec.asset_class,
            periods=periods,
            first=history[0].close,
            last=history[-1].close,
        )
        return state

    @property
    def symbol(self) -> str:
        return self.spec.symbol

    def __len__(self) -> int:
        with self._lock:
            return len(self._bars)

    def last_price(self) -> float:
        with self._lock:
            if not self._bars:
                return self.spec.base_price
            return self._bars[-1].close

    def tick(self, now_ms: int | None = None) -> PriceBar:
        """Append one simulated bar continuing from the last close.

        Timestamps never go backwards: a *now_ms* earlier than the last bar
        is advanced by one period.
        """
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        with self._lock:
            if not self._bars:
                bar = base_bar(self.spec.base_price, now_ms, self._ctx)
            else:
                last = self._bars[-1]
                ts = max(now_ms, last.timestamp + self.config.period_ms)
                bar = simulate_step(self._ctx, self._rng, open_price=last.close, timestamp=ts)
            self._bars.append(bar)
        return bar

    def snapshot(self) -> list[PriceBar]:
        """Consistent copy of the buffer, oldest first."""
        with self._lock:
            return list(self._bars)

    def market_data(self, window: int = 1440, history: int = 100) -> MarketData:
        """Summary over the last *window* bars (1440 one-minute bars = 24h)."""
        bars = self.snapshot()
        if not bars:
            price = self.spec.base_price
            return MarketData(
                asset=self.symbol,
                current_price=price,
                previous_close=price,
                change=0.0,
                change_percent=0.0,
                high_24h=price,
                low_24h=price,
                volume_24h=0.0,
                last_update=int(time.time() * 1000),
            )

        recent = bars[-window:]
        current = bars[-1].close
        previous = recent[0].close
        change = current - previous
        return MarketData(
            asset=self.symbol,
            current_price=current,
            previous_close=previous,
            change=change,
            change_percent=change / previous * 100,
            high_24h=max(b.high for b in recent),
            low_24h=min(b.low for b in recent),
            volume_24h=sum(b.volume for b in recent),
            last_update=bars[-1].timestamp,
            price_history=bars[-history:],
        )

"""Combines indicator votes and structural confirmations into one signal.

Scoring per side::

    raw   = sum(weight * strength / 100) over indicator votes
            + sum(weight) over confirmations for that side
    score = min(raw * premium / total_weight * 100 + bonus, 100)

``premium`` is the session signal multiplier clamped to [1, max]. The
higher score wins; strength and confidence are floored at the configured
minimums so a fully-computed signal always clears them.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Mapping, Sequence

import structlog

from signal_core.config.schema import AcceptanceConfig, SignalConfig
from signal_core.errors import InsufficientDataError, InvalidInputError
from signal_core.models import IndicatorResult, PriceBar, TradingSignal
from signal_core.models.signal import Direction
from signal_core.session import bucket_for, signal_multiplier, utc_hour_of
from signal_core.strategy.classify import build_indicator_results
from signal_core.strategy.confirmations import find_confirmations

log = structlog.get_logger("aggregator")


def weighted_scores(
    results: Sequence[IndicatorResult],
    weights: Mapping[str, float],
) -> tuple[float, float]:
    """Raw (buy, sell) scores from indicator votes.

    Non-decreasing in each vote's strength; names without a weight count 0.
    """
    buy = sell = 0.0
    for result in results:
        if result.signal == "NEUTRAL" or result.strength <= 0:
            continue
        contribution = weights.get(result.name, 0.0) * result.strength / 100
        if result.signal == "BUY":
            buy += contribution
        else:
            sell += contribution
    return buy, sell


def indicator_consensus(indicators: Sequence[IndicatorResult]) -> float:
    """|#BUY - #SELL| / #indicators, in [0, 1]; 0 when there are none."""
    if not indicators:
        return 0.0
    buys = sum(1 for r in indicators if r.signal == "BUY")
    sells = sum(1 for r in indicators if r.signal == "SELL")
    return abs(buys - sells) / len(indicators)


def is_acceptable(signal: TradingSignal, thresholds: AcceptanceConfig | None = None) -> bool:
    """Whether a signal clears the trading gate."""
    thresholds = thresholds or AcceptanceConfig()
    return (
        signal.strength >= thresholds.min_strength
        and signal.confidence >= thresholds.min_confidence
        and signal.risk_level == "LOW"
        and indicator_consensus(signal.indicators) >= thresholds.min_consensus
    )


def _validate_bars(bars: Sequence[PriceBar]) -> None:
    previous: int | None = None
    for i, bar in enumerate(bars):
        if not isinstance(bar, PriceBar):
            raise InvalidInputError(
                f"bars[{i}] is {type(bar).__name__}, expected PriceBar", context={"index": i}
            )
        if previous is not None and bar.timestamp < previous:
            raise InvalidInputError(
                f"bars[{i}] timestamp {bar.timestamp} precedes {previous}",
                context={"index": i},
            )
        previous = bar.timestamp


def _as_utc(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def _price_change(bars: Sequence[PriceBar]) -> float:
    if len(bars) < 2:
        return 0.0
    return bars[-1].close - bars[0].close


def _tie_break(bars: Sequence[PriceBar]) -> Direction:
    return "SELL" if _price_change(bars) < 0 else "BUY"


class SignalAggregator:
    """Combine indicator votes, confirmations and the session premium into a signal.

    With ``strict=True`` a short series raises ``InsufficientDataError``
    instead of returning the degraded low-confidence signal.
    """

    def __init__(self, config: SignalConfig | None = None, strict: bool = False) -> None:
        self.config = config or SignalConfig()
        self.strict = strict

    def aggregate(
        self,
        asset: str,
        bars: Sequence[PriceBar],
        *,
        now: datetime | None = None,
    ) -> TradingSignal:
        _validate_bars(bars)
        now = _as_utc(now)
        timestamp = int(now.timestamp() * 1000)
        results = build_indicator_results(bars)

        if len(bars) < self.config.min_bars:
            if self.strict:
                raise InsufficientDataError(
                    f"{asset}: {len(bars)} bars, need {self.config.min_bars}",
                    available=len(bars),
                    required=self.config.min_bars,
                    context={"asset": asset},
                )
            return self._insufficient(asset, bars, results, timestamp)

        cfg = self.config
        weights = cfg.weights
        buy_raw, sell_raw = weighted_scores(results, weights)
        buy_bonus = sell_bonus = 0.0
        reasoning = [f"{r.name}: {r.description}" for r in results if r.signal != "NEUTRAL"]

        for confirmation in find_confirmations(bars, cfg):
            weight = weights.get(confirmation.name, 0.0)
            if confirmation.direction == "BUY":
                buy_raw += weight
                buy_bonus += confirmation.bonus
            else:
                sell_raw += weight
                sell_bonus += confirmation.bonus
            reasoning.append(confirmation.reason)

        hour = utc_hour_of(now)
        session = bucket_for(hour).name
        premium = min(max(signal_multiplier(hour), 1.0), cfg.max_session_multiplier)
        total = cfg.total_weight or 1.0
        buy_score = min(buy_raw * premium / total * 100 + buy_bonus, 100.0)
        sell_score = min(sell_raw * premium / total * 100 + sell_bonus, 100.0)

        direction: Direction
        if buy_score > sell_score:
            direction = "BUY"
        elif sell_score > buy_score:
            direction = "SELL"
        else:
            direction = _tie_break(bars)

        consensus = indicator_consensus(results)
        gap = abs(buy_score - sell_score)
        strength = max(max(buy_score, sell_score), cfg.min_strength)
        confidence = max(min(gap * 2.5 + consensus * 100, 100.0), cfg.min_confidence)
        risk = (
            "LOW"
            if confidence >= cfg.high_threshold and strength >= cfg.high_threshold
            else "MEDIUM"
        )
        reasoning.append(f"Session: {session} (premium x{premium:.2f})")

        log.info(
            "signal_aggregated",
            asset=asset,
            signal=direction,
            strength=round(strength, 2),
            confidence=round(confidence, 2),
            buy_score=round(buy_score, 2),
            sell_score=round(sell_score, 2),
            session=session,
        )
        return TradingSignal(
            asset=asset,
            signal=direction,
            strength=strength,
            confidence=confidence,
            timestamp=timestamp,
            timeframe=cfg.timeframe,
            indicators=results,
            reasoning=reasoning,
            risk_level=risk,
            expected_duration=cfg.expected_duration_s,
        )

    def _insufficient(
        self,
        asset: str,
        bars: Sequence[PriceBar],
        results: list[IndicatorResult],
        timestamp: int,
    ) -> TradingSignal:
        buys = sum(1 for r in results if r.signal == "BUY")
        sells = sum(1 for r in results if r.signal == "SELL")
        direction: Direction
        if buys != sells:
            direction = "BUY" if buys > sells else "SELL"
        else:
            direction = _tie_break(bars)

        confidence = min(indicator_consensus(results) * 100, self.config.insufficient_confidence_cap)
        log.warning(
            "insufficient_data",
            asset=asset,
            available=len(bars),
            required=self.config.min_bars,
        )
        return TradingSignal(
            asset=asset,
            signal=direction,
            strength=0.0,
            confidence=confidence,
            timestamp=timestamp,
            timeframe=self.config.timeframe,
            indicators=results,
            reasoning=[f"Insufficient data: {len(bars)} of {self.config.min_bars} bars"],
            risk_level="HIGH",
            expected_duration=self.config.expected_duration_s,
        )

"""Configuration schema — Pydantic models for config.yaml."""

from __future__ import annotations

from pydantic import BaseModel, Field

from signal_core.config.catalog import default_catalog
from signal_core.models import AssetSpec


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"


class SimulatorConfig(BaseModel):
    period_ms: int = Field(default=60_000, gt=0)
    history_bars: int = Field(default=200, gt=0)
    seed: int | None = None
    # Fraction of price per bar, before the session multiplier
    base_volatility: dict[str, float] = Field(default_factory=lambda: {
        "CURRENCY": 0.002,
        "INDEX": 0.015,
        "COMMODITY": 0.025,
        "CRYPTO": 0.05,
        "STOCK": 0.03,
        "OTC": 0.003,
    })
    base_volume: dict[str, float] = Field(default_factory=lambda: {
        "CURRENCY": 1_000_000,
        "INDEX": 500_000,
        "COMMODITY": 200_000,
        "CRYPTO": 100_000,
        "STOCK": 300_000,
        "OTC": 150_000,
    })
    trend_share: float = Field(default=0.1, ge=0.0, le=1.0)
    news_multiplier: float = Field(default=2.0, ge=0.0)
    volume_move_factor: float = Field(default=10.0, ge=0.0)


class BonusConfig(BaseModel):
    """Score points added to the side a structural confirmation supports."""

    ema_stack: float = 25
    momentum: float = 20
    candle_run: float = 25
    engulfing: float = 20
    volume_surge: float = 15
    fibonacci: float = 15


def _default_weights() -> dict[str, float]:
    return {
        "RSI": 0.20,
        "MACD": 0.30,
        "Bollinger Bands": 0.25,
        "Stochastic": 0.20,
        "Williams %R": 0.15,
        "CCI": 0.20,
        "ADX": 0.15,
        "Parabolic SAR": 0.15,
        "Moving Average": 0.35,
        "Price Action": 0.40,
        "Candle Pattern": 0.25,
        "Volume Confirmation": 0.25,
        "Fibonacci": 0.30,
        "Market Structure": 0.35,
    }


class SignalConfig(BaseModel):
    min_bars: int = Field(default=55, gt=0)
    min_strength: float = Field(default=70, ge=0, le=100)
    min_confidence: float = Field(default=75, ge=0, le=100)
    high_threshold: float = Field(default=80, ge=0, le=100)
    insufficient_confidence_cap: float = Field(default=50, ge=0, le=100)
    max_session_multiplier: float = Field(default=1.5, ge=1.0)
    expected_duration_s: int = Field(default=60, ge=0)
    timeframe: str = "1m"
    weights: dict[str, float] = Field(default_factory=_default_weights)
    bonuses: BonusConfig = Field(default_factory=BonusConfig)
    fib_tolerance: float = Field(default=0.001, gt=0)
    volume_surge_ratio: float = Field(default=2.0, gt=0)

    @property
    def total_weight(self) -> float:
        return sum(self.weights.values())


class AcceptanceConfig(BaseModel):
    min_strength: float = Field(default=80, ge=0, le=100)
    min_confidence: float = Field(default=80, ge=0, le=100)
    min_consensus: float = Field(default=0.25, ge=0, le=1)


class FeedConfig(BaseModel):
    assets: list[str] = Field(default_factory=lambda: ["EUR/USD", "GBP/USD", "BTC/USD"])
    refresh_interval_s: float = Field(default=1.0, gt=0)
    signal_interval_s: float = Field(default=5.0, gt=0)


class ApiConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    simulator: SimulatorConfig = Field(default_factory=SimulatorConfig)
    signals: SignalConfig = Field(default_factory=SignalConfig)
    acceptance: AcceptanceConfig = Field(default_factory=AcceptanceConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    assets: list[AssetSpec] = Field(default_factory=default_catalog)

    def asset(self, symbol: str) -> AssetSpec | None:
        """Catalog lookup by symbol."""
        for spec in self.assets:
            if spec.symbol == symbol:
                return spec
        return None

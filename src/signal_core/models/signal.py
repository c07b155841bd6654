"""Signal models for per-indicator results and the composite trading signal."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

IndicatorSignal = Literal["BUY", "SELL", "NEUTRAL"]
Direction = Literal["BUY", "SELL"]
RiskLevel = Literal["LOW", "MEDIUM", "HIGH"]


class IndicatorResult(BaseModel):
    """One indicator reading with its classification."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: float | str
    signal: IndicatorSignal
    strength: float = Field(ge=0.0, le=100.0)
    description: str


class TradingSignal(BaseModel):
    """Composite directional signal emitted by the aggregator.

    Serialised with the camelCase field names existing consumers expect
    (``riskLevel``, ``expectedDuration``).
    """

    model_config = ConfigDict(populate_by_name=True)

    asset: str
    signal: Direction
    strength: float = Field(ge=0.0, le=100.0)
    confidence: float = Field(ge=0.0, le=100.0)
    timestamp: int
    timeframe: str
    indicators: list[IndicatorResult] = Field(default_factory=list)
    reasoning: list[str] = Field(default_factory=list)
    risk_level: RiskLevel = Field(alias="riskLevel")
    expected_duration: int = Field(alias="expectedDuration", ge=0)

    def to_json_dict(self) -> dict[str, Any]:
        """Wire form with the external field names."""
        return self.model_dump(mode="json", by_alias=True)

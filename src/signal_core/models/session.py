"""Trading session model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SessionInfo(BaseModel):
    """Session of the trading day for a UTC hour. Recomputed on every call."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    multiplier: float = Field(ge=0.0)
    is_optimal: bool = Field(alias="isOptimal")

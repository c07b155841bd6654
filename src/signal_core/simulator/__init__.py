"""Synthetic market data: bar generator and per-instrument running state."""

from signal_core.simulator.generator import generate, generate_for, resolve_asset
from signal_core.simulator.state import MarketState

__all__ = ["MarketState", "generate", "generate_for", "resolve_asset"]

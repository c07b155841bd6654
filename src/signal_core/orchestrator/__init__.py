"""Feed orchestrator."""

from signal_core.orchestrator.runner import build_markets, run_loop, run_tick

__all__ = ["build_markets", "run_loop", "run_tick"]

"""FastAPI application serving simulated market data and signals."""

from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from signal_core.config.loader import load_config
from signal_core.config.schema import AppConfig
from signal_core.errors import InvalidInputError
from signal_core.models import AssetSpec
from signal_core.simulator import MarketState, generate_for
from signal_core.strategy import SignalAggregator, analyze_market_condition, is_acceptable

logger = structlog.get_logger("api")

MAX_PERIODS = 10_000


def _spec_or_404(config: AppConfig, symbol: str) -> AssetSpec:
    spec = config.asset(symbol)
    if spec is None or not spec.is_active:
        raise HTTPException(status_code=404, detail=f"Unknown symbol {symbol!r}")
    return spec


def _market(request: Request, spec: AssetSpec) -> MarketState:
    """Per-symbol running state, created on first use."""
    markets: dict[str, MarketState] = request.app.state.markets
    state = markets.get(spec.symbol)
    if state is None:
        config: AppConfig = request.app.state.config
        state = MarketState.seeded(
            spec,
            config.simulator.history_bars - 1,
            config.simulator,
            seed=config.simulator.seed,
        )
        markets[spec.symbol] = state
        logger.info("market_state_created", asset=spec.symbol, bars=len(state))
    return state


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the app with its own config, aggregator and market states."""
    app = FastAPI(
        title="Signal Core API",
        description="Simulated OHLCV feed and aggregated trading signals",
        version="0.1.0",
    )

    # CORS middleware - adjust origins in production
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config or AppConfig()
    app.state.aggregator = SignalAggregator(app.state.config.signals)
    app.state.markets = {}

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/api/assets")
    async def list_assets(request: Request):
        """Active catalog rows."""
        config: AppConfig = request.app.state.config
        return {"assets": [spec.model_dump() for spec in config.assets if spec.is_active]}

    @app.get("/api/market-data")
    async def market_data(request: Request, symbol: str, periods: Optional[int] = None):
        """Live summary for *symbol*, or a fresh history of *periods* bars."""
        config: AppConfig = request.app.state.config
        spec = _spec_or_404(config, symbol)

        if periods is not None:
            if periods > MAX_PERIODS:
                raise InvalidInputError(f"periods must be <= {MAX_PERIODS}, got {periods}")
            bars = generate_for(spec.symbol, periods, config=config)
            return {"asset": spec.symbol, "bars": [bar.model_dump() for bar in bars]}

        state = _market(request, spec)
        state.tick()
        return state.market_data().model_dump(mode="json", by_alias=True)

    @app.get("/api/signals")
    async def signals(request: Request, symbol: str):
        """Aggregate a signal over the symbol's running history."""
        config: AppConfig = request.app.state.config
        spec = _spec_or_404(config, symbol)
        state = _market(request, spec)
        state.tick()

        signal = request.app.state.aggregator.aggregate(spec.symbol, state.snapshot())
        body = signal.to_json_dict()
        body["acceptable"] = is_acceptable(signal, config.acceptance)
        return body

    @app.get("/api/market-condition")
    async def market_condition(request: Request, symbol: str):
        """Trend, volatility and volume regime over the running history."""
        spec = _spec_or_404(request.app.state.config, symbol)
        state = _market(request, spec)
        return analyze_market_condition(state.snapshot()).model_dump()

    return app


app = create_app(load_config())

#!/usr/bin/env python3
"""FastAPI server runner."""

import uvicorn
import structlog

from signal_core.logging.setup import setup_from_config
from signal_core.api.app import app

logger = structlog.get_logger()


def main():
    """Run the FastAPI server."""
    config = app.state.config
    setup_from_config(config.logging)

    logger.info("Starting FastAPI server", host=config.api.host, port=config.api.port)

    try:
        uvicorn.run(
            app,
            host=config.api.host,
            port=config.api.port,
            log_config=None  # Use our structlog setup
        )
    except Exception as e:
        logger.error("Failed to start server", error=str(e))
        raise


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Start the Rally API with logging and Logfire configured first."""

import sys

import logfire
import uvicorn

from rally.config import Settings
from rally.util.logging import setup_logging
from rally.util.observability import configure_logfire


def main() -> int:
    """Configure observability, then serve the app with uvicorn."""
    settings = Settings()

    setup_logging(settings)
    # Startup errors (bad settings, import failures) are reported too
    configure_logfire(settings)

    try:
        logfire.info("Starting Rally API", port=settings.port)
        uvicorn.run(
            "rally.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0
    except Exception as e:
        logfire.error(
            "Rally API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""Serve the ClearTrack API under uvicorn.

Logfire is configured here, before the app module is imported, so import-time
failures are reported too.
"""

import sys

import logfire
import uvicorn

from cleartrack.config import Settings
from cleartrack.util.logging import setup_logging
from cleartrack.util.observability import configure_logfire

APP = "cleartrack.interface.api.app:app"


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info("Starting ClearTrack API", port=settings.port)
    try:
        # Behind the platform proxy; trust its X-Forwarded-* so cookies stay secure
        uvicorn.run(
            APP,
            host="0.0.0.0",
            port=settings.port,
            proxy_headers=True,
            forwarded_allow_ips="*",
            log_level="debug" if settings.debug else "info",
        )
    except Exception:
        logfire.exception("ClearTrack API failed to start")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Scoreboard state server.
Usage: PORT=3000 REMOTE_SOURCE_URL=https://... python3 -m rallyboard.main

Remote polling is off unless REMOTE_SOURCE_URL is set. REMOTE_POLL_MS sets
the pause between polls (default 1000), DATA_FILE the state document
(default data/state.json).
"""

import logging

import uvicorn

from rallyboard.config import Settings
from rallyboard.web import create_app

logger = logging.getLogger("rallyboard")


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings)
    # uvicorn logs the bound address once the socket is open
    logger.info("🚀 Starting scoreboard server on %s:%d", settings.host, settings.port)
    try:
        uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    except KeyboardInterrupt:
        logger.info("👋 Exiting...")


if __name__ == "__main__":
    main()

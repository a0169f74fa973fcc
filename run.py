#!/usr/bin/env python3
"""
Run the PropGo Listings API server.
"""

import logging

import uvicorn

from utils.config import Config

logger = logging.getLogger(__name__)


def main():
    """Start the web server."""
    config = Config.load()
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info("Starting PropGo Listings on http://%s:%d", config.host, config.port)

    uvicorn.run(
        "web.app:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
    )


if __name__ == "__main__":
    main()

"""
Process entry point: log in to Telegram, then serve the API.

The Telegram session is established before the listener opens so the first
/search request never races the login prompt.
"""

import asyncio
import logging
from typing import Optional

import uvicorn

logger = logging.getLogger(__name__)


async def serve(host: Optional[str] = None, port: Optional[int] = None) -> None:
    from src.api.dependencies import app_config, get_channel_reader
    from src.api.main import app

    reader = get_channel_reader()
    await reader.login()

    config = uvicorn.Config(
        app,
        host=host or app_config.server.host,
        port=port or app_config.server.port,
        log_level="info",
    )
    logger.info("Server running on %s:%s", config.host, config.port)
    await uvicorn.Server(config).serve()


def main(host: Optional[str] = None, port: Optional[int] = None) -> int:
    try:
        asyncio.run(serve(host=host, port=port))
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down")
    except Exception as e:
        logger.error("Failed to start server: %s", e, exc_info=True)
        return 1
    return 0

import asyncio
import logging
import sys

from dotenv import load_dotenv

from bugsink_mcp.exceptions import ConfigurationError
from bugsink_mcp.models.config import BugsinkConfig
from bugsink_mcp.services.bugsink_client import BugsinkClient
from bugsink_mcp.tools import create_server

logger = logging.getLogger(__name__)


async def main() -> int:
    load_dotenv()
    config = BugsinkConfig.from_env()

    # stdout carries the MCP protocol, logs go to stderr
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config.require()
    except ConfigurationError as e:
        logger.error(f"Error: {e}")
        return 1

    try:
        server = create_server(BugsinkClient(config))
        logger.info("Bugsink MCP server started")
        logger.info(f"Connected to: {config.base_url}")
        await server.run_stdio_async()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

"""MCP Server entry point for Omnivore.

Runs FastMCP with Streamable HTTP transport so MCP clients can search
saved articles and highlights via HTTP POST to /mcp.
"""

import asyncio
import logging
import sys

from fastmcp import FastMCP

from .client import OmnivoreClient
from .config import load_config
from .tools import register_tools

logging.basicConfig(
    stream=sys.stderr,
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)


def build_server(client: OmnivoreClient, date_format: str) -> FastMCP:
    """Create the MCP server with every Omnivore tool registered."""
    mcp = FastMCP("omnivore-mcp")
    register_tools(mcp, client, date_format=date_format)
    return mcp


def main() -> None:
    """Run the Omnivore MCP server until it stops, then close the HTTP client."""
    config = load_config()
    client = OmnivoreClient(config)
    mcp = build_server(client, config.date_format)

    logger.info(
        "Starting Omnivore MCP server on %s:%d (streamable-http), endpoint %s",
        config.server_host,
        config.server_port,
        config.omnivore_endpoint,
    )
    try:
        mcp.run(
            transport="streamable-http",
            host=config.server_host,
            port=config.server_port,
        )
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    finally:
        # mcp.run owns its event loop; close the client on a fresh one.
        asyncio.run(client.aclose())
        logger.info("Closed Omnivore client")


if __name__ == "__main__":
    main()

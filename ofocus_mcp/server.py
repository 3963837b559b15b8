"""FastMCP server initialization for OFocus MCP."""

import logging

from mcp.server.fastmcp import FastMCP

from ofocus_mcp.logging_setup import setup_logging

logger = logging.getLogger(__name__)

# Initialize the MCP server
mcp = FastMCP("ofocus_mcp")


def run() -> None:
    """Run the MCP server on stdio."""
    setup_logging()
    logger.info("Starting ofocus_mcp server")
    mcp.run()


if __name__ == "__main__":
    run()

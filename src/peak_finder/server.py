"""MCP server for peak-finder.

Registers all tools and runs via stdio transport.
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from .config import settings
from .tools.location import register_location_tools
from .tools.search import register_search_tools
from .tools.details import register_details_tools
from .tools.session import register_session_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "peak-finder",
    instructions="Find peaks and volcanoes near a place and show details about them",
)

# Register all tool groups
register_location_tools(mcp)
register_search_tools(mcp)
register_details_tools(mcp)
register_session_tools(mcp)
register_status_tools(mcp)


def main():
    # stdout carries the MCP protocol
    logging.basicConfig(
        level=settings.log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()

"""Search tools: search_mountains, list_mountains."""

import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state
from ..core.details import format_elevation
from ..core.overpass import QueryFailure
from ..core.search import MountainSearch
from ..models import Mountain
from ._prereqs import require_state

logger = logging.getLogger(__name__)


def format_mountain_line(index: int, mountain: Mountain) -> str:
    line = f"{index}. {mountain.name} ({mountain.kind.label}) - {mountain.distance_km} km"
    if mountain.elevation_m is not None:
        line += f", {format_elevation(mountain.elevation_m)}"
    return f"{line} [id {mountain.id}]"


def format_mountain_list(mountains: list[Mountain]) -> str:
    return "\n".join(format_mountain_line(i, m) for i, m in enumerate(mountains, 1))


def register_search_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def search_mountains(radius_m: int | None = None, max_results: int | None = None) -> str:
        """Find peaks and volcanoes near the current location, nearest first.

        Uses the OpenStreetMap Overpass API, falling back across several mirrors.
        **Requires:** set_location, geocode_place or select_geocode_result first.
        **Next:** get_mountain_details for any listed id.

        Args:
            radius_m: Search radius in meters (default 50000).
            max_results: Maximum number of mountains to return (default 30).
        """
        try:
            require_state(state, location=True)
        except ValueError as e:
            return f"Error: {e}"

        search = MountainSearch()
        try:
            query = search.make_query(state.origin.lat, state.origin.lon, radius_m, max_results)
        except ValidationError:
            return "Error: radius_m and max_results must be positive."

        try:
            mountains = await search.search(query)
        except QueryFailure as exc:
            return f"Error: {exc.message} ({exc.reason})."

        state.last_query = query
        state.mountains = mountains

        if not mountains:
            return "No mountains found in the nearby area."
        return f"Found {len(mountains)} nearby mountains!\n{format_mountain_list(mountains)}"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def list_mountains() -> str:
        """List the mountains from the last search, nearest first.

        **Requires:** search_mountains (or load_session) first.
        """
        try:
            require_state(state, results=True)
        except ValueError as e:
            return f"Error: {e}"
        return format_mountain_list(state.mountains)

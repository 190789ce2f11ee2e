"""Location tools: set_location, geocode_place, select_geocode_result."""

import logging

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state
from ..core.geocode import GeocodingError, reverse_geocode, search_places
from ..models import Coordinate, GeocodeCandidate

logger = logging.getLogger(__name__)


def _select_candidate(candidate: GeocodeCandidate) -> Coordinate:
    origin = Coordinate(lat=candidate.lat, lon=candidate.lon)
    state.set_origin(origin, source="search", label=candidate.display_name)
    return origin


def register_location_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def set_location(lat: float, lon: float, source: str = "map") -> str:
        """Set the point to search around, from a map click or the device location.

        Clears results from any previous location.
        **Prior:** If you only have a place name, call geocode_place instead.
        **Next:** search_mountains.

        Args:
            lat: Latitude in degrees (-90 to 90).
            lon: Longitude in degrees (-180 to 180).
            source: 'map' for a picked point, 'device' for the user's own position.
        """
        if source not in ("map", "device"):
            return "Error: source must be 'map' or 'device'."
        try:
            origin = Coordinate(lat=lat, lon=lon)
        except ValidationError:
            return f"Error: Invalid coordinates ({lat}, {lon})."

        try:
            label = await reverse_geocode(origin.lat, origin.lon)
        except GeocodingError as exc:
            logger.info("Reverse geocoding failed for %s, %s: %s", lat, lon, exc)
            label = "Address not available"

        state.set_origin(origin, source=source, label=label)
        where = "Your current location" if source == "device" else "Selected location"
        return f"{where}: {origin.lat:.6f}, {origin.lon:.6f} ({label})"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def geocode_place(query: str, limit: int = 5) -> str:
        """Search for a place by name and use it as the search location.

        - 1 result: location is set automatically.
        - 2+ results: raises an error with a numbered list. Present it to the user,
          wait for them to reply with a number, then call select_geocode_result.

        **Next (1 result):** search_mountains.
        **Next (2+ results):** select_geocode_result with the user's chosen number.

        Args:
            query: Place name (e.g., "Chamonix", "Mount Rainier", "Tenerife").
            limit: Maximum number of candidates to return (1-10, default 5).
        """
        query = query.strip()
        if not query:
            return "Error: Please enter a location to search."

        try:
            candidates = await search_places(query, limit=limit)
        except GeocodingError as exc:
            return f"Error: {exc}"

        if not candidates:
            return f"Location not found for '{query}'. Try a different name."

        if len(candidates) == 1:
            c = candidates[0]
            origin = _select_candidate(c)
            return (
                f"Found 1 result: '{c.display_name}' (auto-selected). "
                f"Location set: {origin.lat:.6f}, {origin.lon:.6f}"
            )

        state.pending_geocode_candidates = candidates

        lines = [f"Found {len(candidates)} location(s) for '{query}':\n"]
        for i, c in enumerate(candidates, 1):
            lines.append(
                f"{i}. {c.display_name}\n"
                f"   Type: {c.place_type} | Center: {c.lat:.5f}, {c.lon:.5f}"
            )
        lines.append(
            f"\nUser input required: ask the user which number (1-{len(candidates)}) "
            "they want, then call select_geocode_result with that number."
        )
        raise ValueError("\n".join(lines))

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def select_geocode_result(number: int) -> str:
        """Select a geocode candidate by number and use it as the search location.

        Only call this after geocode_place returned multiple candidates AND the user
        has replied with their chosen number.

        **Requires:** geocode_place called first with multiple results.
        **Next:** search_mountains.

        Args:
            number: 1-based index of the candidate the user selected.
        """
        if not state.pending_geocode_candidates:
            return "Error: No geocode search results pending. Call geocode_place first."

        n = len(state.pending_geocode_candidates)
        if number < 1 or number > n:
            return f"Error: Invalid selection {number}. Choose a number between 1 and {n}."

        candidate = state.pending_geocode_candidates[number - 1]
        origin = _select_candidate(candidate)
        return (
            f"Location set from '{candidate.display_name}': "
            f"{origin.lat:.6f}, {origin.lon:.6f}"
        )

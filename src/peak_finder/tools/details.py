"""Detail tools: get_mountain_details, share_mountain, open_shared_mountain."""

from urllib.parse import parse_qsl, urlsplit

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from ..state import state
from ..core.details import (
    copy_coords_text,
    fetch_mountain_details,
    format_coords,
    format_elevation,
    mountain_from_share_params,
    share_text,
    share_url,
)
from ..core.models import MountainDetails

NO_HISTORY = (
    "History not available automatically. If this mountain has a Wikipedia page, "
    "adding the OSM 'wikipedia' tag will improve this section."
)


def format_details(details: MountainDetails) -> str:
    m = details.mountain
    lines = [
        m.name,
        f"Type: {m.kind.label}",
        f"Elevation: {format_elevation(m.elevation_m)}",
        f"Coordinates: {format_coords(m.lat, m.lon)}",
        f"Distance: {m.distance_km} km",
        f"Location: {details.place or 'Location not available'}",
        "",
        details.summary.extract if details.has_history else NO_HISTORY,
    ]
    if details.has_history and details.summary.page_url:
        lines.append(f"Source: Wikipedia {details.summary.page_url}")
    lines += [
        "",
        f"Image: {details.image_url}",
        f"OpenStreetMap: {details.osm_url}",
        f"Share: {details.share_url}",
    ]
    return "\n".join(lines)


def register_details_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
    async def get_mountain_details(mountain_id: int) -> str:
        """Show details for one mountain: place name, Wikipedia summary, image and links.

        **Requires:** search_mountains (or load_session) so the id is known.

        Args:
            mountain_id: OSM id shown in the search results.
        """
        mountain = state.find_mountain(mountain_id)
        if mountain is None:
            return f"Error: No mountain with id {mountain_id} in the current results."
        details = await fetch_mountain_details(mountain)
        return format_details(details)

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=True))
    def share_mountain(mountain_id: int) -> str:
        """Build a shareable link and summary text for one mountain.

        Args:
            mountain_id: OSM id shown in the search results.
        """
        mountain = state.find_mountain(mountain_id)
        if mountain is None:
            return f"Error: No mountain with id {mountain_id} in the current results."
        return (
            f"Mountain: {mountain.name}\n"
            f"{share_text(mountain)}\n"
            f"Coordinates to copy: {copy_coords_text(mountain)}\n"
            f"Link: {share_url(mountain)}"
        )

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False, openWorldHint=True))
    async def open_shared_mountain(url: str) -> str:
        """Open a link produced by share_mountain and show the mountain's details.

        Values in the link take precedence over any stored result with the same id.
        The mountain is added to the current results so later tools can use its id.

        Args:
            url: The shared link (only its query string is used).
        """
        params = dict(parse_qsl(urlsplit(url).query))
        stored = None
        if params.get("id", "").isdigit():
            stored = state.find_mountain(int(params["id"]))
        try:
            mountain = mountain_from_share_params(params, stored=stored, origin=state.origin)
        except ValueError as e:
            return f"Error: {e}"

        if stored is None:
            others = [m for m in state.mountains if m.id != mountain.id]
            state.mountains = sorted([*others, mountain], key=lambda m: (m.distance_km, m.id))
        details = await fetch_mountain_details(mountain)
        return format_details(details)

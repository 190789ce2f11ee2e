"""Detail view for a single mountain: formatting, links and best-effort enrichment."""

import logging
from typing import Mapping
from urllib.parse import quote, urlencode

from ..config import settings
from ..models import UNNAMED_PEAK, Coordinate, Mountain, MountainKind, to_float
from .geo import distance_km
from .geocode import GeocodingError, reverse_geocode
from .models import MountainDetails, WikipediaSummary
from .results import parse_elevation
from .wikipedia import WikipediaError, parse_wikipedia_tag, summary_by_search, summary_by_title

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "Not available"
FALLBACK_IMAGE_URL = "https://source.unsplash.com/featured/1200x800/?mountain,peak,{name}"


def format_elevation(elevation_m: int | None) -> str:
    if elevation_m is None:
        return NOT_AVAILABLE
    return f"{elevation_m:,} m"


def format_elevation_compact(elevation_m: int | None) -> str:
    if elevation_m is None:
        return "-"
    return f"{elevation_m:,}m"


def format_coords(lat: float | None, lon: float | None) -> str:
    if lat is None or lon is None:
        return NOT_AVAILABLE
    return f"{lat:.4f}, {lon:.4f}"


def copy_coords_text(mountain: Mountain) -> str:
    """Full precision coordinates suitable for pasting into another map."""
    return f"{mountain.lat:.6f}, {mountain.lon:.6f}"


def osm_url(lat: float, lon: float) -> str:
    return f"https://www.openstreetmap.org/?mlat={lat}&mlon={lon}#map=14/{lat}/{lon}"


def share_url(mountain: Mountain, base_url: str | None = None) -> str:
    """Link that reopens the detail view for ``mountain``."""
    params = {"id": str(mountain.id)}
    if mountain.name:
        params["name"] = mountain.name
    params["lat"] = str(mountain.lat)
    params["lon"] = str(mountain.lon)
    if mountain.elevation_m is not None:
        params["ele"] = str(mountain.elevation_m)
    params["type"] = mountain.kind.value
    return f"{base_url or settings.share_base_url}?{urlencode(params, quote_via=quote)}"


def share_text(mountain: Mountain) -> str:
    return (
        f"Elevation: {format_elevation(mountain.elevation_m)} | "
        f"Coordinates: {format_coords(mountain.lat, mountain.lon)}"
    )


def mountain_from_share_params(
    params: Mapping[str, str],
    stored: Mountain | None = None,
    origin: Coordinate | None = None,
) -> Mountain:
    """Rebuild a mountain from share link parameters.

    Link values win over the stored record when they parse; anything missing
    or malformed falls back to ``stored``. Raises ValueError when no usable
    coordinates are available from either source.
    """
    try:
        mountain_id = int(params["id"])
    except (KeyError, TypeError, ValueError):
        mountain_id = stored.id if stored else 0

    name = " ".join((params.get("name") or (stored.name if stored else "") or "").split())

    lat = to_float(params.get("lat"))
    lon = to_float(params.get("lon"))
    if lat is None or lon is None or not (-90 <= lat <= 90 and -180 <= lon <= 180):
        if stored is None:
            raise ValueError("Shared link has no usable coordinates.")
        lat, lon = stored.lat, stored.lon

    elevation = parse_elevation(params.get("ele"))
    if elevation is None and stored is not None:
        elevation = stored.elevation_m

    try:
        kind = MountainKind(params.get("type"))
    except ValueError:
        kind = stored.kind if stored else MountainKind.PEAK

    if origin is not None:
        distance = distance_km(origin, Coordinate(lat=lat, lon=lon))
    else:
        distance = stored.distance_km if stored else 0.0

    return Mountain(
        id=mountain_id,
        name=name or UNNAMED_PEAK,
        lat=lat,
        lon=lon,
        elevation_m=elevation,
        kind=kind,
        distance_km=distance,
        wikipedia=stored.wikipedia if stored else None,
        wikidata=stored.wikidata if stored else None,
    )


async def _lookup_summary(mountain: Mountain) -> WikipediaSummary | None:
    ref = parse_wikipedia_tag(mountain.wikipedia)
    try:
        if ref is not None:
            return await summary_by_title(ref.lang, ref.title)
        return await summary_by_search(mountain.name)
    except WikipediaError as exc:
        logger.info("No Wikipedia summary for %s (%s): %s", mountain.name, mountain.id, exc)
        return None


async def fetch_mountain_details(mountain: Mountain) -> MountainDetails:
    """Enrich a mountain with its place name, Wikipedia summary and an image.

    Every lookup is best effort: failures leave the corresponding field empty
    and fall back to a generic image, they never raise.
    """
    try:
        place = await reverse_geocode(mountain.lat, mountain.lon)
    except GeocodingError as exc:
        logger.info("Reverse geocoding failed for %s: %s", mountain.id, exc)
        place = None

    summary = await _lookup_summary(mountain)
    if summary is not None and not summary.extract:
        summary = None

    image_url = summary.thumbnail_url if summary else None
    image_is_fallback = image_url is None
    if image_is_fallback:
        image_url = FALLBACK_IMAGE_URL.format(name=quote(mountain.name, safe=""))

    return MountainDetails(
        mountain=mountain,
        place=place,
        summary=summary,
        image_url=image_url,
        image_is_fallback=image_is_fallback,
        osm_url=osm_url(mountain.lat, mountain.lon),
        share_url=share_url(mountain),
    )

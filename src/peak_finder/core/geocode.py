"""Forward and reverse geocoding via Nominatim."""

import logging

import httpx

from ..config import settings
from ..models import GeocodeCandidate

logger = logging.getLogger(__name__)

ADDRESS_NOT_AVAILABLE = "Address not available"


class GeocodingError(Exception):
    pass


def format_address(address: dict | None, display_name: str | None = None) -> str:
    """Short "locality, state, country" label from a Nominatim address block."""
    address = address or {}
    parts = []
    for key in ("city", "town", "village", "county"):
        if address.get(key):
            parts.append(address[key])
            break
    if address.get("state"):
        parts.append(address["state"])
    if address.get("country"):
        parts.append(address["country"])
    return ", ".join(parts) or display_name or ADDRESS_NOT_AVAILABLE


async def _get_json(path: str, params: dict):
    url = f"{settings.nominatim_url.rstrip('/')}/{path}"
    async with httpx.AsyncClient(
        timeout=settings.http_timeout_s, headers={"User-Agent": settings.user_agent}
    ) as client:
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise GeocodingError(f"Nominatim returned HTTP {exc.response.status_code}.") from exc
        except httpx.HTTPError as exc:
            raise GeocodingError(f"Error contacting geocoding service: {exc}") from exc
        except ValueError as exc:
            raise GeocodingError("Geocoding service sent an invalid response.") from exc


async def search_places(query: str, limit: int = 5) -> list[GeocodeCandidate]:
    """Look up a free-text place name. Returns at most ``limit`` candidates."""
    limit = max(1, min(10, limit))
    results = await _get_json(
        "search", {"q": query, "format": "json", "limit": limit, "addressdetails": 1}
    )
    if not isinstance(results, list):
        raise GeocodingError("Geocoding service sent an invalid response.")

    candidates = []
    for item in results:
        try:
            candidates.append(
                GeocodeCandidate(
                    display_name=item["display_name"],
                    lat=float(item["lat"]),
                    lon=float(item["lon"]),
                    place_type=item.get("type", "unknown"),
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.debug("Skipping malformed Nominatim result %r: %s", item, exc)
    return candidates


async def reverse_geocode(lat: float, lon: float) -> str:
    """Human readable place label for a coordinate."""
    data = await _get_json(
        "reverse",
        {"format": "json", "lat": lat, "lon": lon, "zoom": 10, "addressdetails": 1},
    )
    if not isinstance(data, dict):
        raise GeocodingError("Geocoding service sent an invalid response.")
    return format_address(data.get("address"), data.get("display_name"))

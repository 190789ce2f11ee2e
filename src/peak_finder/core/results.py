"""Turn raw Overpass features into a ranked, capped list of mountains."""

import re

from ..models import UNNAMED_PEAK, Coordinate, Mountain, MountainKind, RawFeature
from .geo import distance_km

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_elevation(value: str | None) -> int | None:
    """Leading integer of an OSM ``ele`` tag ("3718", "3000 m", "2850.5").

    Returns None for anything without a leading integer.
    """
    if not value:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def _has_valid_position(feature: RawFeature) -> bool:
    return (
        feature.lat is not None and feature.lon is not None
        and -90 <= feature.lat <= 90 and -180 <= feature.lon <= 180
    )


def to_mountain(feature: RawFeature, origin: Coordinate) -> Mountain:
    tags = feature.tags
    kind = MountainKind.VOLCANO if tags.get("natural") == "volcano" else MountainKind.PEAK
    return Mountain(
        id=feature.id,
        name=tags.get("name") or UNNAMED_PEAK,
        lat=feature.lat,
        lon=feature.lon,
        elevation_m=parse_elevation(tags.get("ele")),
        kind=kind,
        distance_km=distance_km(origin, Coordinate(lat=feature.lat, lon=feature.lon)),
        wikipedia=tags.get("wikipedia"),
        wikidata=tags.get("wikidata"),
    )


def process_features(
    features: list[RawFeature], origin: Coordinate, max_results: int
) -> list[Mountain]:
    """Filter, rank by distance and truncate.

    Features without a position are skipped, as are unnamed features with no
    elevation. Ties on distance are broken by OSM id so the order does not
    depend on the order the API returned them in.
    """
    mountains = []
    for feature in features:
        if not _has_valid_position(feature):
            continue
        mountain = to_mountain(feature, origin)
        if mountain.name == UNNAMED_PEAK and mountain.elevation_m is None:
            continue
        mountains.append(mountain)

    mountains.sort(key=lambda m: (m.distance_km, m.id))
    return mountains[:max_results]

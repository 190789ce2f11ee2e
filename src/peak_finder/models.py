"""Pydantic domain models for coordinates, raw Overpass features and mountains."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

UNNAMED_PEAK = "Unnamed Peak"


class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


def to_float(value) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class RawFeature(BaseModel):
    """A node element as returned by the Overpass API."""

    id: int
    lat: float | None = None
    lon: float | None = None
    tags: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_element(cls, element: dict) -> "RawFeature":
        """Build a feature from an Overpass element without ever rejecting it.

        Bad coordinates become None and non-string tag values are stringified,
        so the decision to keep or drop the feature is left to the caller.
        """
        try:
            feature_id = int(element.get("id", 0))
        except (TypeError, ValueError, OverflowError):
            feature_id = 0
        tags = element.get("tags") or {}
        if not isinstance(tags, dict):
            tags = {}
        return cls(
            id=feature_id,
            lat=to_float(element.get("lat")),
            lon=to_float(element.get("lon")),
            tags={str(k): str(v) for k, v in tags.items() if v is not None},
        )


class MountainKind(str, Enum):
    PEAK = "peak"
    VOLCANO = "volcano"

    @property
    def label(self) -> str:
        return "Volcano" if self is MountainKind.VOLCANO else "Peak"


class Mountain(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str = UNNAMED_PEAK
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    elevation_m: int | None = None
    kind: MountainKind = MountainKind.PEAK
    distance_km: float = Field(default=0.0, ge=0)
    wikipedia: str | None = None
    wikidata: str | None = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(lat=self.lat, lon=self.lon)


class SearchQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    origin: Coordinate
    radius_m: int = Field(default=50_000, gt=0)
    max_results: int = Field(default=30, gt=0)


class GeocodeCandidate(BaseModel):
    display_name: str
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    place_type: str = "unknown"

"""Session state for the peak-finder MCP server.

Holds the selected origin, the last search and its results, and any
geocoding candidates waiting for the user to pick one.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from peak_finder.models import Coordinate, GeocodeCandidate, Mountain, MountainKind, SearchQuery

LocationSource = Literal["device", "map", "search"]


class SessionSnapshot(BaseModel):
    """Persisted form of the session, enough to redisplay the last search."""
    origin: Optional[Coordinate] = None
    origin_label: str = ""
    origin_source: LocationSource = "map"
    query: Optional[SearchQuery] = None
    mountains: list[Mountain] = Field(default_factory=list)


class SessionState(BaseModel):
    origin: Optional[Coordinate] = None
    origin_label: str = ""
    origin_source: LocationSource = "map"
    last_query: Optional[SearchQuery] = None
    mountains: list[Mountain] = Field(default_factory=list)
    pending_geocode_candidates: list[GeocodeCandidate] = Field(default_factory=list)

    def set_origin(self, origin: Coordinate, source: LocationSource, label: str = "") -> None:
        """Select a new origin and drop results that belonged to the old one."""
        self.origin = origin
        self.origin_source = source
        self.origin_label = label
        self.last_query = None
        self.mountains = []
        self.pending_geocode_candidates = []

    def find_mountain(self, mountain_id: int) -> Optional[Mountain]:
        for mountain in self.mountains:
            if mountain.id == mountain_id:
                return mountain
        return None

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            origin=self.origin,
            origin_label=self.origin_label,
            origin_source=self.origin_source,
            query=self.last_query,
            mountains=list(self.mountains),
        )

    def restore(self, snapshot: SessionSnapshot) -> None:
        self.origin = snapshot.origin
        self.origin_label = snapshot.origin_label
        self.origin_source = snapshot.origin_source
        self.last_query = snapshot.query
        self.mountains = list(snapshot.mountains)
        self.pending_geocode_candidates = []

    def summary(self) -> dict:
        return {
            "location": {
                "set": True,
                "lat": self.origin.lat,
                "lon": self.origin.lon,
                "label": self.origin_label,
                "source": self.origin_source,
            } if self.origin else {"set": False},
            "search": {
                "radius_m": self.last_query.radius_m,
                "max_results": self.last_query.max_results,
            } if self.last_query else None,
            "results": {
                "count": len(self.mountains),
                "peaks": sum(1 for m in self.mountains if m.kind is MountainKind.PEAK),
                "volcanoes": sum(1 for m in self.mountains if m.kind is MountainKind.VOLCANO),
                "nearest_km": self.mountains[0].distance_km if self.mountains else None,
            },
            "pending_geocode_candidates": len(self.pending_geocode_candidates),
        }


# Global session state, one per MCP server process
state = SessionState()

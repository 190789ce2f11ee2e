"""Nearby mountain search: Overpass query followed by ranking."""

import logging

from ..config import Settings, settings as default_settings
from ..models import Coordinate, Mountain, SearchQuery
from .overpass import FeatureQueryClient
from .results import process_features

logger = logging.getLogger(__name__)


class MountainSearch:
    """Entry point for nearby mountain searches.

    Holds no per-search state, so one instance can serve concurrent searches.
    QueryFailure from the Overpass client propagates unchanged.
    """

    def __init__(self, client: FeatureQueryClient | None = None, settings: Settings | None = None):
        self.settings = settings or default_settings
        self.client = client or FeatureQueryClient(
            endpoints=self.settings.overpass_endpoints,
            timeout_s=self.settings.overpass_timeout_s,
            user_agent=self.settings.user_agent,
            server_timeout_s=self.settings.overpass_query_timeout_s,
        )

    def make_query(
        self, lat: float, lon: float,
        radius_m: int | None = None, max_results: int | None = None,
    ) -> SearchQuery:
        return SearchQuery(
            origin=Coordinate(lat=lat, lon=lon),
            radius_m=radius_m if radius_m is not None else self.settings.search_radius_m,
            max_results=max_results if max_results is not None else self.settings.max_results,
        )

    async def search(self, query: SearchQuery) -> list[Mountain]:
        features = await self.client.fetch_features(query.origin, query.radius_m)
        mountains = process_features(features, query.origin, query.max_results)
        logger.info(
            "Found %d mountains (%d raw features) within %dm of %.5f, %.5f",
            len(mountains), len(features), query.radius_m, query.origin.lat, query.origin.lon,
        )
        return mountains


async def search_nearby_mountains(
    lat: float, lon: float,
    radius_m: int | None = None, max_results: int | None = None,
) -> list[Mountain]:
    """Search around (lat, lon) using the configured defaults."""
    search = MountainSearch()
    return await search.search(search.make_query(lat, lon, radius_m, max_results))

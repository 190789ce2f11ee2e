"""Peak and volcano fetching via the Overpass API with endpoint failover."""

import asyncio
import logging
from typing import Literal

import httpx

from ..config import settings
from ..models import Coordinate, RawFeature

logger = logging.getLogger(__name__)

FailureReason = Literal[
    "rate-limited",
    "upstream-busy",
    "malformed-query",
    "network-timeout",
    "unexpected-response-shape",
    "generic",
]

_STATUS_REASONS: dict[int, tuple[FailureReason, str]] = {
    429: ("rate-limited", "Too many requests, the mountain database is rate limiting us"),
    504: ("upstream-busy", "The mountain database is busy, try again in a moment"),
    400: ("malformed-query", "The mountain database rejected the query"),
}


class QueryFailure(Exception):
    """Every configured Overpass endpoint failed."""

    def __init__(self, reason: FailureReason, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


def classify_status(status_code: int) -> tuple[FailureReason, str]:
    """Map an HTTP error status to a failure reason and message."""
    if status_code in _STATUS_REASONS:
        return _STATUS_REASONS[status_code]
    return "generic", f"Error querying mountain database (HTTP {status_code})"


def build_query(origin: Coordinate, radius_m: int, server_timeout_s: int = 25) -> str:
    """Overpass QL for peak and volcano nodes within radius_m of origin."""
    around = f"(around:{radius_m},{origin.lat},{origin.lon})"
    return (
        f"[out:json][timeout:{server_timeout_s}];"
        f'(node["natural"="peak"]{around};'
        f'node["natural"="volcano"]{around};);'
        "out geom;"
    )


def _parse_elements(data) -> list[RawFeature]:
    if not isinstance(data, dict) or not isinstance(data.get("elements"), list):
        raise ValueError("response has no 'elements' list")
    return [RawFeature.from_element(e) for e in data["elements"] if isinstance(e, dict)]


class FeatureQueryClient:
    """Queries a list of Overpass endpoints strictly in order.

    The first endpoint to return a well-formed payload wins. Each attempt is
    bounded by ``timeout_s``; when every endpoint fails the last failure is
    raised as a QueryFailure.
    """

    def __init__(
        self,
        endpoints: list[str] | None = None,
        timeout_s: float | None = None,
        user_agent: str | None = None,
        server_timeout_s: int | None = None,
    ):
        self.endpoints = list(endpoints if endpoints is not None else settings.overpass_endpoints)
        if not self.endpoints:
            raise ValueError("At least one Overpass endpoint is required.")
        self.timeout_s = timeout_s if timeout_s is not None else settings.overpass_timeout_s
        self.user_agent = user_agent or settings.user_agent
        self.server_timeout_s = (
            server_timeout_s if server_timeout_s is not None else settings.overpass_query_timeout_s
        )

    async def fetch_features(self, origin: Coordinate, radius_m: int) -> list[RawFeature]:
        query = build_query(origin, radius_m, self.server_timeout_s)
        failure = QueryFailure("generic", "Error searching mountain database")

        async with httpx.AsyncClient(
            timeout=self.timeout_s, headers={"User-Agent": self.user_agent}
        ) as client:
            for endpoint in self.endpoints:
                try:
                    response = await asyncio.wait_for(
                        client.post(endpoint, data={"data": query}),
                        timeout=self.timeout_s,
                    )
                    response.raise_for_status()
                    features = _parse_elements(response.json())
                except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
                    logger.warning("Overpass endpoint %s timed out: %s", endpoint, exc)
                    failure = QueryFailure(
                        "network-timeout",
                        f"The mountain database did not answer within {self.timeout_s:g}s",
                    )
                    continue
                except httpx.HTTPStatusError as exc:
                    status = exc.response.status_code
                    logger.warning("Overpass endpoint %s returned HTTP %s", endpoint, status)
                    failure = QueryFailure(*classify_status(status))
                    continue
                except ValueError as exc:
                    logger.warning("Overpass endpoint %s sent an unexpected response: %s", endpoint, exc)
                    failure = QueryFailure(
                        "unexpected-response-shape",
                        "The mountain database sent an unexpected response",
                    )
                    continue
                except httpx.HTTPError as exc:
                    logger.warning("Overpass endpoint %s failed: %s", endpoint, exc)
                    failure = QueryFailure("generic", f"Error querying mountain database: {exc}")
                    continue

                logger.debug("Overpass endpoint %s returned %d elements", endpoint, len(features))
                return features

        logger.warning(
            "All %d Overpass endpoints failed, last reason: %s", len(self.endpoints), failure.reason
        )
        raise failure

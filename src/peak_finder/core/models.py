"""Pydantic return models for the enrichment functions."""

from typing import Optional

from pydantic import BaseModel

from peak_finder.models import Mountain


class WikipediaRef(BaseModel):
    lang: str
    title: str


class WikipediaSummary(BaseModel):
    """Return type for summary_by_title and summary_by_search."""
    title: str
    extract: str = ""
    page_url: Optional[str] = None
    thumbnail_url: Optional[str] = None


class MountainDetails(BaseModel):
    """Return type for fetch_mountain_details."""
    mountain: Mountain
    place: Optional[str] = None
    summary: Optional[WikipediaSummary] = None
    image_url: Optional[str] = None
    image_is_fallback: bool = False
    osm_url: str
    share_url: str

    @property
    def has_history(self) -> bool:
        return bool(self.summary and self.summary.extract)

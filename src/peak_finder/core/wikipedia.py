"""Wikipedia summaries for mountains."""

import logging
from urllib.parse import quote

import httpx

from ..config import settings
from .models import WikipediaRef, WikipediaSummary

logger = logging.getLogger(__name__)

SUMMARY_URL = "https://{lang}.wikipedia.org/api/rest_v1/page/summary/{title}"
SEARCH_URL = "https://{lang}.wikipedia.org/w/api.php"


class WikipediaError(Exception):
    pass


def parse_wikipedia_tag(tag: str | None) -> WikipediaRef | None:
    """Split an OSM ``wikipedia`` tag such as "es:Monte_Aneto" into language and title."""
    if not tag or not isinstance(tag, str):
        return None
    lang, sep, title = tag.partition(":")
    lang, title = lang.strip(), title.strip()
    if not sep or not lang or not title:
        return None
    return WikipediaRef(lang=lang, title=title)


async def _get_json(url: str, params: dict | None = None) -> dict:
    async with httpx.AsyncClient(
        timeout=settings.http_timeout_s,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
    ) as client:
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise WikipediaError(f"Wikipedia returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise WikipediaError(f"Error contacting Wikipedia: {exc}") from exc
        except ValueError as exc:
            raise WikipediaError("Wikipedia sent an invalid response") from exc
    if not isinstance(data, dict):
        raise WikipediaError("Wikipedia sent an invalid response")
    return data


async def summary_by_title(lang: str, title: str) -> WikipediaSummary:
    url = SUMMARY_URL.format(lang=lang, title=quote(title, safe=""))
    data = await _get_json(url)
    return WikipediaSummary(
        title=data.get("title") or title.replace("_", " "),
        extract=data.get("extract") or "",
        page_url=((data.get("content_urls") or {}).get("desktop") or {}).get("page"),
        thumbnail_url=(data.get("thumbnail") or {}).get("source"),
    )


async def summary_by_search(query: str, lang: str | None = None) -> WikipediaSummary:
    """Summary of the top full-text search hit for ``query``."""
    lang = lang or settings.wikipedia_search_lang
    data = await _get_json(
        SEARCH_URL.format(lang=lang),
        params={"action": "query", "list": "search", "srsearch": query, "format": "json"},
    )
    hits = (data.get("query") or {}).get("search") or []
    if not hits or not hits[0].get("title"):
        raise WikipediaError(f"No Wikipedia article found for '{query}'")
    return await summary_by_title(lang, hits[0]["title"].replace(" ", "_"))

from unittest.mock import AsyncMock, MagicMock, patch

import pytest


@pytest.mark.parametrize("tag,expected", [
    ("es:Monte_Aneto", ("es", "Monte_Aneto")),
    ("en: Aneto ", ("en", "Aneto")),
    ("de:Zugspitze:Gipfel", ("de", "Zugspitze:Gipfel")),
])
def test_parse_wikipedia_tag(tag, expected):
    from peak_finder.core.wikipedia import parse_wikipedia_tag
    ref = parse_wikipedia_tag(tag)
    assert (ref.lang, ref.title) == expected


@pytest.mark.parametrize("tag", [None, "", "Aneto", ":Aneto", "es:", " :x"])
def test_parse_wikipedia_tag_rejects(tag):
    from peak_finder.core.wikipedia import parse_wikipedia_tag
    assert parse_wikipedia_tag(tag) is None


def _ok(payload):
    resp = MagicMock()
    resp.raise_for_status = MagicMock()
    resp.json = MagicMock(return_value=payload)
    return resp


def _patched(get):
    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_client.get = get
    return patch("httpx.AsyncClient", return_value=mock_client)


SUMMARY = {
    "title": "Aneto",
    "extract": "Aneto is the highest mountain in the Pyrenees.",
    "content_urls": {"desktop": {"page": "https://en.wikipedia.org/wiki/Aneto"}},
    "thumbnail": {"source": "https://upload.wikimedia.org/aneto.jpg"},
}


@pytest.mark.anyio
async def test_summary_by_title():
    from peak_finder.core.wikipedia import summary_by_title

    get = AsyncMock(return_value=_ok(SUMMARY))
    with _patched(get):
        summary = await summary_by_title("en", "Pico de Aneto")

    assert get.await_args.args[0] == "https://en.wikipedia.org/api/rest_v1/page/summary/Pico%20de%20Aneto"
    assert summary.extract.startswith("Aneto")
    assert summary.page_url == "https://en.wikipedia.org/wiki/Aneto"
    assert summary.thumbnail_url.endswith("aneto.jpg")


@pytest.mark.anyio
async def test_summary_by_search_uses_first_hit():
    from peak_finder.core.wikipedia import summary_by_search

    search = {"query": {"search": [{"title": "Pico de Aneto"}, {"title": "Other"}]}}
    get = AsyncMock(side_effect=[_ok(search), _ok(SUMMARY)])
    with _patched(get):
        summary = await summary_by_search("Aneto", lang="es")

    first, second = get.await_args_list
    assert first.kwargs["params"]["srsearch"] == "Aneto"
    assert first.args[0].startswith("https://es.wikipedia.org/")
    assert second.args[0].endswith("/Pico_de_Aneto")
    assert summary.title == "Aneto"


@pytest.mark.anyio
async def test_summary_by_search_no_hits():
    from peak_finder.core.wikipedia import summary_by_search, WikipediaError

    with _patched(AsyncMock(return_value=_ok({"query": {"search": []}}))):
        with pytest.raises(WikipediaError):
            await summary_by_search("Nothing at all")

"""Tests for save_session and load_session tools."""
import json
import os
import pytest
from unittest.mock import MagicMock
from pathlib import Path

from peak_finder.models import Coordinate, Mountain, MountainKind, SearchQuery


def _get_session_tools():
    from peak_finder.tools.session import register_session_tools
    tools = {}
    mock_mcp = MagicMock()
    def capture(**kwargs):
        def decorator(fn):
            tools[fn.__name__] = fn
            return fn
        return decorator
    mock_mcp.tool = capture
    register_session_tools(mock_mcp)
    return tools


def _configure_state():
    """Put known data into state for round-trip tests."""
    from peak_finder.state import state
    from peak_finder.models import GeocodeCandidate
    origin = Coordinate(lat=42.60, lon=0.52)
    state.set_origin(origin, source="search", label="Benasque, Aragon, Spain")
    state.last_query = SearchQuery(origin=origin, radius_m=20000, max_results=10)
    state.mountains = [
        Mountain(id=1, name="Aneto", lat=42.63, lon=0.66, elevation_m=3404,
                 distance_km=11.7, wikipedia="es:Pico_de_Aneto"),
        Mountain(id=2, lat=42.65, lon=0.60, elevation_m=2900, kind=MountainKind.VOLCANO,
                 distance_km=12.0),
    ]
    state.pending_geocode_candidates = [GeocodeCandidate(display_name="x", lat=0, lon=0)]


def test_save_session_creates_file(tmp_path):
    tools = _get_session_tools()
    _configure_state()
    path = str(tmp_path / "session.json")
    result = tools["save_session"](path=path)
    assert os.path.exists(path), f"File not created. Result: {result}"
    assert "saved" in result.lower()


def test_save_session_file_is_valid_json(tmp_path):
    tools = _get_session_tools()
    _configure_state()
    path = str(tmp_path / "session.json")
    tools["save_session"](path=path)
    with open(path) as f:
        data = json.load(f)
    assert data["origin"] == {"lat": 42.60, "lon": 0.52}
    assert len(data["mountains"]) == 2
    assert data["mountains"][1]["kind"] == "volcano"
    assert "pending_geocode_candidates" not in data


def test_load_session_restores_results(tmp_path):
    tools = _get_session_tools()
    _configure_state()
    path = str(tmp_path / "session.json")
    tools["save_session"](path=path)

    from peak_finder.state import state, SessionSnapshot
    saved = state.snapshot()
    state.restore(SessionSnapshot())
    assert state.origin is None

    result = tools["load_session"](path=path)
    assert state.snapshot() == saved
    assert state.find_mountain(1).wikipedia == "es:Pico_de_Aneto"
    assert state.pending_geocode_candidates == []
    assert "restored" in result.lower()
    assert "2 mountain(s)" in result


def test_load_session_missing_file_returns_error(tmp_path):
    tools = _get_session_tools()
    result = tools["load_session"](path=str(tmp_path / "nonexistent.json"))
    assert "error" in result.lower() or "not found" in result.lower()


def test_load_session_corrupt_file_returns_error(tmp_path):
    tools = _get_session_tools()
    path = tmp_path / "session.json"
    path.write_text("{not json")
    result = tools["load_session"](path=str(path))
    assert result.startswith("Error")


def test_store_load_state_none_when_missing(tmp_path):
    from peak_finder.tools.session import JsonFileSessionStore
    assert JsonFileSessionStore(tmp_path / "missing.json").load_state() is None


def test_store_rejects_invalid_snapshot(tmp_path):
    from peak_finder.tools.session import JsonFileSessionStore
    path = tmp_path / "session.json"
    path.write_text(json.dumps({"origin": {"lat": 200, "lon": 0}}))
    with pytest.raises(ValueError):
        JsonFileSessionStore(path).load_state()


def test_save_session_default_path_creates_directory(tmp_path, monkeypatch):
    """Default path (~/.cache/peak-finder/session.json) directory is created."""
    tools = _get_session_tools()
    _configure_state()
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    result = tools["save_session"]()
    expected = tmp_path / ".cache" / "peak-finder" / "session.json"
    assert expected.exists(), f"Default file not created. Result: {result}"

"""Session persistence tools: save_session, load_session."""

import json
import logging
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import ValidationError

from ..state import state, SessionSnapshot

logger = logging.getLogger(__name__)


def _default_path() -> Path:
    return Path.home() / ".cache" / "peak-finder" / "session.json"


class JsonFileSessionStore:
    """Saves and restores a SessionSnapshot as a JSON file."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else _default_path()

    def save_state(self, snapshot: SessionSnapshot) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            f.write(snapshot.model_dump_json(indent=2))
        logger.info("Session saved to %s", self.path)

    def load_state(self) -> Optional[SessionSnapshot]:
        """Return the saved snapshot, None if there is none.

        Raises ValueError when the file exists but cannot be read back.
        """
        if not self.path.exists():
            return None
        try:
            with open(self.path) as f:
                data = json.load(f)
            return SessionSnapshot.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ValueError(f"Invalid session file {self.path}: {e}") from e


def register_session_tools(mcp: FastMCP):

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=True))
    def save_session(path: str | None = None) -> str:
        """Save the current location and search results to a JSON file.

        Pending geocode candidates are not saved.
        **Next:** load_session in a future session to restore the results.

        Args:
            path: Where to save. Default: ~/.cache/peak-finder/session.json
        """
        store = JsonFileSessionStore(path)
        store.save_state(state.snapshot())
        return f"Session saved to {store.path} ({len(state.mountains)} mountain(s))"

    @mcp.tool(annotations=ToolAnnotations(readOnlyHint=False, destructiveHint=False))
    def load_session(path: str | None = None) -> str:
        """Load a previously saved location and search results.

        Restored mountains can be used with get_mountain_details right away.
        **Next:** list_mountains or get_mountain_details.

        Args:
            path: Path to load from. Default: ~/.cache/peak-finder/session.json
        """
        store = JsonFileSessionStore(path)
        try:
            snapshot = store.load_state()
        except ValueError as e:
            return f"Error: {e}"
        if snapshot is None:
            return f"Error: Session file not found at {store.path}"

        state.restore(snapshot)

        restored = []
        if state.origin is not None:
            restored.append(f"location ({state.origin_label or 'unnamed'})")
        restored.append(f"{len(state.mountains)} mountain(s)")
        return f"Session restored from {store.path}. Restored: {', '.join(restored)}."

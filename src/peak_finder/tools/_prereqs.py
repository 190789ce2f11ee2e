"""Prerequisite checking helpers for MCP tools."""


def require_state(state, *, location: bool = False, results: bool = False) -> None:
    """Raise ValueError with a descriptive message if required state is not set.

    Usage in a tool:
        try:
            require_state(state, location=True)
        except ValueError as e:
            return f"Error: {e}"
    """
    if location and state.origin is None:
        raise ValueError(
            "Choose a location first with set_location or geocode_place."
        )
    if results and not state.mountains:
        raise ValueError(
            "No mountains loaded. Run search_mountains first."
        )

import pytest


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_state():
    """Each test starts with an empty global session."""
    from peak_finder.state import state, SessionSnapshot
    state.restore(SessionSnapshot())
    yield
    state.restore(SessionSnapshot())

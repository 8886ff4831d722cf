"""
Tic-Tac-Fade - Test Configuration and Fixtures

Common fixtures and test doubles for all test modules.
"""

from typing import Any

import pytest

from tictacfade.engine.base import BoardShape, MatchConfig, MatchSnapshot
from tictacfade.engine.match import MatchState
from tictacfade.realtime.events import ClientRequest, EventPayload
from tictacfade.ui.interfaces import CueKind, CueTrigger, RenderSurface


# =============================================================================
# TEST DOUBLES
# =============================================================================

class RecordingSurface(RenderSurface):
    """Keeps every snapshot it is asked to render."""

    def __init__(self) -> None:
        self.snapshots: list[MatchSnapshot] = []

    def render(self, snapshot: MatchSnapshot) -> None:
        self.snapshots.append(snapshot)


class RecordingCues(CueTrigger):
    """Keeps every cue kind it is asked to play."""

    def __init__(self) -> None:
        self.kinds: list[CueKind] = []

    def cue(self, kind: CueKind) -> None:
        self.kinds.append(kind)


class FakeTransport:
    """In-memory transport returning scripted acknowledgements."""

    def __init__(self) -> None:
        self.sent: list[tuple[ClientRequest, dict[str, Any]]] = []
        self.responses: dict[ClientRequest, dict[str, Any]] = {}
        self.failures: dict[ClientRequest, Exception] = {}
        self.listener = None
        self.on_lost = None

    def set_listener(self, callback) -> None:
        self.listener = callback

    def set_connection_lost(self, callback) -> None:
        self.on_lost = callback

    async def request(self, request: ClientRequest, body: dict[str, Any]) -> dict[str, Any]:
        self.sent.append((request, body))
        if request in self.failures:
            raise self.failures[request]
        return self.responses.get(request, {"ok": True, "code": body.get("code")})

    def push(self, payload: EventPayload) -> None:
        """Deliver a coordinator notification."""
        self.listener(payload)


# =============================================================================
# MATCH FIXTURES
# =============================================================================

@pytest.fixture
def compact_config() -> MatchConfig:
    """Compact 3x3 rules with five live pieces."""
    return MatchConfig(shape=BoardShape.COMPACT, capacity=5)


@pytest.fixture
def compact_match(compact_config: MatchConfig) -> MatchState:
    return MatchState(compact_config)


@pytest.fixture
def volumetric_match() -> MatchState:
    return MatchState(MatchConfig.for_shape(BoardShape.VOLUMETRIC))


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def cues() -> RecordingCues:
    return RecordingCues()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def play():
    """Place alternating marks, asserting each placement succeeds."""
    def _play(match: MatchState, *positions: tuple[int, ...]) -> None:
        for position in positions:
            result = match.place(position)
            assert result.ok, f"placement at {position} rejected: {result.error}"
    return _play

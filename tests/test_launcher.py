"""
Tests for building sessions from menu choices.
"""

import asyncio
import random

import pytest

from tictacfade.config.settings import Settings
from tictacfade.engine.base import BoardShape, Difficulty, GameMode, Mark
from tictacfade.launcher import start_networked, start_solo
from tictacfade.realtime.events import ClientRequest
from tictacfade.realtime.models import Role
from tictacfade.ui.interfaces import CueKind, MatchSetup


@pytest.fixture
def settings():
    return Settings(
        volumetric_capacity=12,
        eviction_blink_seconds=0.5,
        eviction_fade_seconds=0.25,
        fade_tick_seconds=0.02,
    )


class TestStartSolo:
    """Tests for solo sessions."""

    def test_builds_from_settings(self, settings, surface):
        setup = MatchSetup(GameMode.SOLO, BoardShape.VOLUMETRIC, Difficulty.EASY)
        solo = start_solo(setup, surface=surface, settings=settings, rng=random.Random(3))

        assert solo.match.shape is BoardShape.VOLUMETRIC
        assert solo.match.capacity == 12
        assert solo.difficulty is Difficulty.EASY
        assert solo.fades.blink_seconds == 0.5
        assert solo.fades.tick_seconds == 0.02
        assert len(surface.snapshots) == 1

    def test_reply_applied_after_eviction_without_loop(self, settings, surface, cues):
        """Test a synchronous game keeps going once the first piece is evicted."""
        setup = MatchSetup(GameMode.SOLO, difficulty=Difficulty.EASY)
        solo = start_solo(setup, surface=surface, cues=cues, settings=settings, rng=random.Random(7))
        for position in [(0, 0), (1, 1), (2, 2), (0, 2)]:
            solo.match.place(position)

        results = solo.play((2, 0))

        assert len(results) == 2
        assert results[1].evicted.position == (0, 0)
        assert solo.match.current_turn is Mark.X
        assert solo.match.cell((0, 0)).is_empty
        assert not solo.match.cell((0, 0)).is_blinking
        assert solo.fades.pending == []
        assert cues.kinds == [CueKind.PLACE, CueKind.PLACE]
        assert len(surface.snapshots) == 3

    def test_rejects_networked_setup(self, settings):
        with pytest.raises(ValueError, match="solo"):
            start_solo(MatchSetup(GameMode.NETWORKED, is_host=True), settings=settings)


class TestStartNetworked:
    """Tests for networked sessions."""

    def test_host_creates_room(self, settings, transport, surface):
        setup = MatchSetup(GameMode.NETWORKED, room_code="ABC123", is_host=True)
        sync = asyncio.run(
            start_networked(setup, surface=surface, settings=settings, transport=transport)
        )

        assert sync.role is Role.HOST
        assert sync.room_code == "ABC123"
        assert transport.sent == [
            (ClientRequest.CREATE_ROOM, {"code": "ABC123", "shape": 2, "capacity": 5})
        ]
        assert surface.snapshots

    def test_guest_joins_with_rules(self, settings, transport):
        setup = MatchSetup(GameMode.NETWORKED, BoardShape.VOLUMETRIC, room_code="ABC123")
        sync = asyncio.run(start_networked(setup, settings=settings, transport=transport))

        assert sync.role is Role.GUEST
        assert transport.sent == [
            (ClientRequest.JOIN_ROOM, {"code": "ABC123", "shape": 3, "capacity": 12})
        ]

    def test_failed_join_reported(self, settings, transport):
        transport.responses[ClientRequest.JOIN_ROOM] = {
            "ok": False, "error": "RoomFull", "reason": "Room is full",
        }
        setup = MatchSetup(GameMode.NETWORKED, room_code="ABC123")
        sync = asyncio.run(start_networked(setup, settings=settings, transport=transport))

        assert sync.room_code is None
        assert sync.last_message == "Room is full"

    def test_rejects_solo_setup(self, settings, transport):
        with pytest.raises(ValueError, match="networked"):
            asyncio.run(start_networked(MatchSetup(GameMode.SOLO), settings=settings, transport=transport))


"""Tests for tictacfade/realtime/events.py: wire names and payloads."""

import pytest

from tictacfade.engine.base import Mark
from tictacfade.realtime.events import (
    ClientRequest,
    EventPayload,
    GameEvent,
    move_rejected,
    opponent_move,
    simple_event,
    turn_changed,
)


# ── Enums ───────────────────────────────────────────────────────────────

class TestWireNames:
    def test_requests_defined(self):
        assert {r.value for r in ClientRequest} == {
            "create-room", "join-room", "start-match",
            "submit-move", "restart-match", "leave-room",
        }

    def test_events_defined(self):
        assert {e.value for e in GameEvent} == {
            "opponent-joined", "opponent-left", "match-started",
            "turn-changed", "opponent-move", "match-reset", "move-rejected",
        }

    def test_names_do_not_collide(self):
        requests = {r.value for r in ClientRequest}
        events = {e.value for e in GameEvent}
        assert not requests & events


# ── EventPayload ────────────────────────────────────────────────────────

class TestEventPayload:
    def test_minimal_payload(self):
        p = simple_event(GameEvent.OPPONENT_LEFT, "ABC123")
        assert p.event is GameEvent.OPPONENT_LEFT
        assert p.room_code == "ABC123"
        assert p.data == {}
        assert p.to_wire() == {"code": "ABC123"}

    def test_turn_changed(self):
        p = turn_changed("ABC123", Mark.O)
        assert p.to_wire() == {"code": "ABC123", "mark": "O"}
        assert p.mark is Mark.O

    def test_opponent_move_is_json_friendly(self):
        p = opponent_move("ABC123", (2, 0, 1))
        assert p.to_wire() == {"code": "ABC123", "position": [2, 0, 1]}
        assert p.position == (2, 0, 1)

    def test_move_rejected(self):
        p = move_rejected("ABC123", "Not your turn")
        assert p.data["reason"] == "Not your turn"

    def test_from_wire(self):
        p = EventPayload.from_wire("opponent-move", {"code": "ABC123", "position": [1, 1]})
        assert p.event is GameEvent.OPPONENT_MOVE
        assert p.room_code == "ABC123"
        assert p.data == {"position": [1, 1]}

    def test_from_wire_does_not_mutate_body(self):
        body = {"code": "ABC123", "mark": "X"}
        EventPayload.from_wire("turn-changed", body)
        assert body == {"code": "ABC123", "mark": "X"}

    def test_from_wire_empty_body(self):
        p = EventPayload.from_wire("match-started", None)
        assert p.room_code == ""

    def test_from_wire_unknown_event(self):
        with pytest.raises(ValueError):
            EventPayload.from_wire("chat-message", {})

    def test_malformed_fields_raise(self):
        p = EventPayload(GameEvent.OPPONENT_MOVE, "ABC123", {"position": [7, 7]})
        with pytest.raises(ValueError):
            p.position
        p = EventPayload(GameEvent.TURN_CHANGED, "ABC123", {"mark": "Q"})
        with pytest.raises(ValueError):
            p.mark

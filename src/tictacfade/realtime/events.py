"""
Tic-Tac-Fade - Realtime Event Definitions

Wire names of client requests and coordinator notifications, and the
payload wrapper used on both sides of the connection.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tictacfade.engine.base import Mark, Position
from tictacfade.engine.validators import validate_mark, validate_position


class ClientRequest(Enum):
    """Requests a client sends to the coordinator."""

    CREATE_ROOM = "create-room"
    JOIN_ROOM = "join-room"
    START_MATCH = "start-match"
    SUBMIT_MOVE = "submit-move"
    RESTART_MATCH = "restart-match"
    LEAVE_ROOM = "leave-room"


class GameEvent(Enum):
    """Notifications the coordinator pushes to peers."""

    OPPONENT_JOINED = "opponent-joined"
    OPPONENT_LEFT = "opponent-left"
    MATCH_STARTED = "match-started"
    TURN_CHANGED = "turn-changed"
    OPPONENT_MOVE = "opponent-move"
    MATCH_RESET = "match-reset"
    MOVE_REJECTED = "move-rejected"


@dataclass
class EventPayload:
    """Wrapper for realtime event data."""

    event: GameEvent
    room_code: str
    data: dict[str, Any] = field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        """Body emitted under the event's wire name."""
        return {"code": self.room_code, **self.data}

    @classmethod
    def from_wire(cls, name: str, body: dict[str, Any] | None) -> "EventPayload":
        """
        Rebuild a payload received from the coordinator.

        Raises:
            ValueError: If the event name is unknown
        """
        body = dict(body or {})
        event = GameEvent(name)
        code = body.pop("code", "")
        return cls(event=event, room_code=code, data=body)

    @property
    def mark(self) -> Mark:
        """Mark carried by TURN_CHANGED."""
        return validate_mark(self.data.get("mark"))

    @property
    def position(self) -> Position:
        """Position carried by OPPONENT_MOVE."""
        return validate_position(self.data.get("position"))


def turn_changed(room_code: str, mark: Mark) -> EventPayload:
    return EventPayload(GameEvent.TURN_CHANGED, room_code, {"mark": mark.value})


def opponent_move(room_code: str, position: Position) -> EventPayload:
    return EventPayload(GameEvent.OPPONENT_MOVE, room_code, {"position": list(position)})


def move_rejected(room_code: str, reason: str) -> EventPayload:
    return EventPayload(GameEvent.MOVE_REJECTED, room_code, {"reason": reason})


def simple_event(event: GameEvent, room_code: str) -> EventPayload:
    return EventPayload(event, room_code)

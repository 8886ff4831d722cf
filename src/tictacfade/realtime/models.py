"""
Tic-Tac-Fade - Session Models

Pydantic models for the coordinator's room records and for the request
and acknowledgement bodies exchanged with clients.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from tictacfade.engine.base import BoardShape, Mark, MatchConfig, Position
from tictacfade.engine.validators import validate_position, validate_room_code


class Role(Enum):
    """A peer's seat in a room. The binding to a mark never changes."""

    HOST = "host"
    GUEST = "guest"

    @property
    def mark(self) -> Mark:
        return Mark.X if self is Role.HOST else Mark.O


class Room(BaseModel):
    """Server-side record pairing two peers."""

    code: str = Field(min_length=4, max_length=12)
    host: str
    guest: str | None = None
    shape: BoardShape = BoardShape.COMPACT
    capacity: int = 5
    turn: Mark = Mark.X
    started: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"validate_assignment": True}

    @property
    def rules(self) -> MatchConfig:
        return MatchConfig(shape=self.shape, capacity=self.capacity)

    @property
    def is_full(self) -> bool:
        return self.guest is not None

    @property
    def peers(self) -> list[str]:
        return [p for p in (self.host, self.guest) if p is not None]

    def role_of(self, peer: str) -> Role | None:
        if peer == self.host:
            return Role.HOST
        if peer is not None and peer == self.guest:
            return Role.GUEST
        return None

    def other_peer(self, peer: str) -> str | None:
        if peer == self.host:
            return self.guest
        if peer == self.guest:
            return self.host
        return None


class RulesMixin(BaseModel):
    """
    Optional board rules sent with create-room and join-room.

    ``shape`` is the number of board axes (2 or 3). A missing capacity
    means the shape's default.
    """

    shape: BoardShape | None = None
    capacity: int | None = None

    @model_validator(mode="after")
    def check_rules(self):
        if self.capacity is not None and self.shape is None:
            raise ValueError("Capacity requires a board shape.")
        self.rules()
        return self

    def rules(self) -> MatchConfig | None:
        """The requested MatchConfig, or None when no rules were sent."""
        if self.shape is None:
            return None
        return MatchConfig.for_shape(self.shape, self.capacity)


class CreateRoomRequest(RulesMixin):
    """Body of create-room. Without a code the server generates one."""

    code: str | None = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return validate_room_code(value)


class RoomRequest(BaseModel):
    """Body of start-match, restart-match and leave-room."""

    code: str

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        return validate_room_code(value)


class JoinRoomRequest(RulesMixin, RoomRequest):
    """Body of join-room. Rules, when sent, must match the host's."""


class MoveRequest(BaseModel):
    """Body of submit-move."""

    code: str
    position: Position

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        return validate_room_code(value)

    @field_validator("position", mode="before")
    @classmethod
    def check_position(cls, value) -> Position:
        return validate_position(value)


class Ack(BaseModel):
    """Acknowledgement returned to the requesting peer."""

    ok: bool
    code: str | None = None
    mark: Mark | None = None
    error: str | None = None
    reason: str | None = None

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)

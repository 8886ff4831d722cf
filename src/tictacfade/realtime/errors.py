"""
Tic-Tac-Fade - Session Errors

Failures of coordinator operations. Every error is recoverable and is
reported to the requesting peer in its acknowledgement; none of them
mutates the room registry.

Usage:
    try:
        coordinator.join_room(sid, code)
    except SessionError as e:
        return e.to_dict()
"""

from typing import Any

__all__ = [
    "NotAuthorized",
    "RoomExists",
    "RoomFull",
    "RoomNotFound",
    "SessionError",
]


class SessionError(Exception):
    """Base exception for coordinator failures.

    Attributes:
        code: Machine-readable error name sent to clients
        message: Short human-readable reason
        context: Additional context for logs
    """
    code: str = "SessionError"
    default_message: str = "Request failed"

    def __init__(
        self,
        message: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Acknowledgement payload for the requesting peer."""
        return {"ok": False, "error": self.code, "reason": self.message}


class RoomExists(SessionError):
    """A room with the requested code is already registered."""
    code = "RoomExists"
    default_message = "Room already exists"


class RoomNotFound(SessionError):
    """No active room has the requested code."""
    code = "RoomNotFound"
    default_message = "Room not found"


class RoomFull(SessionError):
    """The room already has a host and a guest."""
    code = "RoomFull"
    default_message = "Room is full"


class NotAuthorized(SessionError):
    """The peer may not perform this action now."""
    code = "NotAuthorized"
    default_message = "Not allowed"

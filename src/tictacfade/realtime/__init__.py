"""
Tic-Tac-Fade Real-time Sync.

Room coordination, turn authority and move relay for networked play.
"""

from tictacfade.realtime.client_sync import ClientSync
from tictacfade.realtime.coordinator import Dispatch, SessionCoordinator
from tictacfade.realtime.errors import (
    NotAuthorized,
    RoomExists,
    RoomFull,
    RoomNotFound,
    SessionError,
)
from tictacfade.realtime.events import ClientRequest, EventPayload, GameEvent
from tictacfade.realtime.registry import RoomRegistry

__all__ = [
    "ClientRequest",
    "ClientSync",
    "Dispatch",
    "EventPayload",
    "GameEvent",
    "NotAuthorized",
    "RoomExists",
    "RoomFull",
    "RoomNotFound",
    "RoomRegistry",
    "SessionCoordinator",
    "SessionError",
]

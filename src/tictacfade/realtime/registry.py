"""
Tic-Tac-Fade - Room Registry

The coordinator's table of active rooms. Create, lookup and delete are its
only mutators, and it is owned by a single coordinator instance.
"""

import secrets
import string

from tictacfade.engine.base import MatchConfig
from tictacfade.realtime.errors import RoomExists, RoomNotFound
from tictacfade.realtime.models import Room


def _generate_code(length: int = 6) -> str:
    """Generate an alphanumeric room code, avoiding ambiguous characters."""
    alphabet = string.ascii_uppercase.replace("O", "").replace("I", "")
    alphabet += string.digits.replace("0", "").replace("1", "")
    return "".join(secrets.choice(alphabet) for _ in range(length))


class RoomRegistry:
    """Active rooms keyed by code."""

    def __init__(self, code_length: int = 6) -> None:
        self.code_length = code_length
        self._rooms: dict[str, Room] = {}

    def __contains__(self, code: str) -> bool:
        return code in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    @property
    def codes(self) -> list[str]:
        return list(self._rooms.keys())

    def new_code(self) -> str:
        """A code not currently in use."""
        while True:
            code = _generate_code(self.code_length)
            if code not in self._rooms:
                return code

    def create(self, code: str, host: str, rules: MatchConfig | None = None) -> Room:
        """
        Register a room with a host and the board rules it plays.

        Raises:
            RoomExists: If the code is already registered
        """
        if code in self._rooms:
            raise RoomExists(context={"code": code})
        rules = rules or MatchConfig()
        room = Room(code=code, host=host, shape=rules.shape, capacity=rules.capacity)
        self._rooms[code] = room
        return room

    def get(self, code: str) -> Room:
        """
        Look up an active room.

        Raises:
            RoomNotFound: If no room has this code
        """
        room = self._rooms.get(code)
        if room is None:
            raise RoomNotFound(context={"code": code})
        return room

    def find(self, code: str) -> Room | None:
        return self._rooms.get(code)

    def rooms_of(self, peer: str) -> list[Room]:
        """Rooms where the peer is host or guest."""
        return [room for room in self._rooms.values() if peer in room.peers]

    def delete(self, code: str) -> Room | None:
        return self._rooms.pop(code, None)

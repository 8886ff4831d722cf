"""
Tic-Tac-Fade - Session Coordinator

Arbitrates turn authority for networked matches and relays moves between
the two peers of a room. The coordinator never runs the game rules: each
peer's own MatchState validates placements. It only decides whose turn it
is and who hears about what.

Every operation is synchronous, so it completes as one step on the event
loop and cannot interleave with another. Operations return the
notifications to deliver; the transport adapter sends them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tictacfade.engine.base import Mark, MatchConfig, Position
from tictacfade.realtime.errors import NotAuthorized, RoomFull
from tictacfade.realtime.events import (
    EventPayload,
    GameEvent,
    opponent_move,
    simple_event,
    turn_changed,
)
from tictacfade.realtime.models import Role, Room
from tictacfade.realtime.registry import RoomRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dispatch:
    """A notification addressed to one peer."""

    peer: str
    payload: EventPayload


class SessionCoordinator:
    """Room lifecycle, turn authority and move relay."""

    def __init__(self, registry: RoomRegistry | None = None) -> None:
        self.registry = registry or RoomRegistry()

    # -- Room lifecycle --------------------------------------------------

    def create_room(
        self,
        peer: str,
        code: str | None = None,
        rules: MatchConfig | None = None,
    ) -> Room:
        """
        Register a room with the caller as host.

        Args:
            peer: Session id of the caller
            code: Requested code; generated when None
            rules: Board shape and capacity both peers must play with

        Raises:
            RoomExists: If the code is already in use
        """
        if code is None:
            code = self.registry.new_code()
        room = self.registry.create(code, peer, rules or MatchConfig())
        logger.info("Room %s created by %s", code, peer)
        return room

    def join_room(
        self,
        peer: str,
        code: str,
        rules: MatchConfig | None = None,
    ) -> tuple[Room, list[Dispatch]]:
        """
        Seat the caller as guest and tell the host.

        A repeated join by the seated guest is accepted without notifying
        the host again.

        Raises:
            RoomNotFound: If the code is not registered
            RoomFull: If another guest is seated
            NotAuthorized: If the host tries to join its own room, or the
                guest's board rules differ from the room's
        """
        room = self.registry.get(code)
        if peer == room.host:
            raise NotAuthorized("You are already hosting this room", {"code": code})
        if rules is not None and rules != room.rules:
            raise NotAuthorized(
                "Board rules do not match the host's",
                {"code": code, "shape": room.shape.name, "capacity": room.capacity},
            )
        if room.guest == peer:
            return room, []
        if room.is_full:
            raise RoomFull(context={"code": code})

        room.guest = peer
        room.turn = Role.HOST.mark
        logger.info("%s joined room %s - both players connected", peer, code)
        return room, [Dispatch(room.host, simple_event(GameEvent.OPPONENT_JOINED, code))]

    def start_match(self, peer: str, code: str) -> list[Dispatch]:
        """
        Start the match. Host only, and only once a guest is seated.

        Raises:
            RoomNotFound: If the code is not registered
            NotAuthorized: If the caller is not the host or the room is not full
        """
        room = self.registry.get(code)
        if room.role_of(peer) is not Role.HOST:
            raise NotAuthorized("Only the host can start the match", {"code": code})
        if not room.is_full:
            raise NotAuthorized("Waiting for an opponent to join", {"code": code})
        if room.started:
            return []

        room.started = True
        room.turn = Role.HOST.mark
        logger.info("Match started in room %s", code)
        return (
            self._broadcast(room, simple_event(GameEvent.MATCH_STARTED, code))
            + self._broadcast(room, turn_changed(code, room.turn))
        )

    def restart_match(self, peer: str, code: str) -> list[Dispatch]:
        """
        Reset both peers to a fresh match with X to move. Host only.

        Raises:
            RoomNotFound: If the code is not registered
            NotAuthorized: If the caller is not the host or the match never started
        """
        room = self.registry.get(code)
        if room.role_of(peer) is not Role.HOST:
            raise NotAuthorized("Only the host can restart the match", {"code": code})
        if not room.started:
            raise NotAuthorized("Match has not started", {"code": code})

        room.turn = Role.HOST.mark
        logger.info("Match restarted in room %s", code)
        return (
            self._broadcast(room, simple_event(GameEvent.MATCH_RESET, code))
            + self._broadcast(room, turn_changed(code, room.turn))
        )

    # -- Moves -------------------------------------------------------------

    def submit_move(self, peer: str, code: str, position: Position) -> list[Dispatch]:
        """
        Relay a move if the caller holds the turn, then flip the turn.

        Board legality is not checked here; the receiving peer's MatchState
        rejects illegal placements locally.

        Raises:
            RoomNotFound: If the code is not registered
            NotAuthorized: If the match has not started, the caller is not in
                the room, or it is not the caller's turn
        """
        room = self.registry.get(code)
        if not room.started:
            raise NotAuthorized("Match has not started", {"code": code})

        role = room.role_of(peer)
        if role is None:
            raise NotAuthorized("You are not in this room", {"code": code})
        if role.mark is not room.turn:
            logger.info(
                "Move rejected - not %s's turn in room %s (current: %s)",
                peer, code, room.turn.value,
            )
            raise NotAuthorized("Not your turn", {"code": code, "turn": room.turn.value})

        other = room.other_peer(peer)
        room.turn = room.turn.opponent
        logger.debug("Valid move from %s in room %s: %s", peer, code, position)
        return (
            [Dispatch(other, opponent_move(code, position))]
            + self._broadcast(room, turn_changed(code, room.turn))
        )

    def current_turn(self, code: str) -> Mark:
        return self.registry.get(code).turn

    # -- Teardown ----------------------------------------------------------

    def leave(self, peer: str, code: str) -> list[Dispatch]:
        """
        Remove the room and tell the remaining peer. Unknown rooms and
        non-members are ignored.
        """
        room = self.registry.find(code)
        if room is None or room.role_of(peer) is None:
            return []
        return self._teardown(room, peer)

    def disconnect(self, peer: str) -> list[Dispatch]:
        """Tear down every room the peer belongs to."""
        dispatches: list[Dispatch] = []
        for room in self.registry.rooms_of(peer):
            dispatches.extend(self._teardown(room, peer))
        return dispatches

    def _teardown(self, room: Room, leaving: str) -> list[Dispatch]:
        self.registry.delete(room.code)
        logger.info("Room %s cleaned up after %s left", room.code, leaving)
        other = room.other_peer(leaving)
        if other is None:
            return []
        return [Dispatch(other, simple_event(GameEvent.OPPONENT_LEFT, room.code))]

    @staticmethod
    def _broadcast(room: Room, payload: EventPayload) -> list[Dispatch]:
        return [Dispatch(peer, payload) for peer in room.peers]

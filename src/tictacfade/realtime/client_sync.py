"""
Tic-Tac-Fade - Client Sync

Per-player adapter for networked matches. Mirrors coordinator
notifications into the local MatchState and gates local input by role and
turn. Both peers run identical MatchState logic, so applying the same
placements in the same order keeps their boards in step.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from pydantic import ValidationError
from socketio.exceptions import SocketIOError

from tictacfade.engine.base import Mark, Phase, PlaceResult, Position
from tictacfade.engine.match import MatchState
from tictacfade.realtime.events import ClientRequest, EventPayload, GameEvent
from tictacfade.realtime.models import Ack, Role
from tictacfade.ui.fade import EvictionFadeScheduler
from tictacfade.ui.interfaces import (
    CueTrigger,
    NullCues,
    NullSurface,
    RenderSurface,
    SessionOutcome,
    present_placement,
)

logger = logging.getLogger(__name__)

TRANSPORT_ERROR = "TransportError"


class Transport(Protocol):
    """What ClientSync needs from a connection (see SocketIOTransport)."""

    def set_listener(self, callback) -> None: ...

    def set_connection_lost(self, callback) -> None: ...

    async def request(self, request: ClientRequest, body: dict[str, Any]) -> dict[str, Any]: ...


class ClientSync:
    """Local mirror of one networked session."""

    def __init__(
        self,
        match: MatchState,
        transport: Transport,
        *,
        surface: RenderSurface | None = None,
        cues: CueTrigger | None = None,
        fades: EvictionFadeScheduler | None = None,
    ) -> None:
        self.match = match
        self.transport = transport
        self.surface = surface or NullSurface()
        self.cues = cues or NullCues()
        self.fades = fades
        self._clear_session()

        transport.set_listener(self.handle_event)
        transport.set_connection_lost(self.handle_connection_lost)

    def _clear_session(self) -> None:
        self.room_code: str | None = None
        self.role: Role | None = None
        self.opponent_connected = False
        self.started = False
        self.is_my_turn = False
        self.opponent_left = False
        self.last_message: str | None = None

    # -- Derived state -----------------------------------------------------

    @property
    def my_mark(self) -> Mark | None:
        return self.role.mark if self.role else None

    @property
    def opponent_mark(self) -> Mark | None:
        return self.role.mark.opponent if self.role else None

    @property
    def can_move(self) -> bool:
        """Whether local input should be accepted right now."""
        return (
            self.started
            and not self.opponent_left
            and self.is_my_turn
            and self.match.phase is Phase.PLAYING
            and self.match.current_turn is self.my_mark
        )

    @property
    def outcome(self) -> SessionOutcome:
        if self.opponent_left:
            return SessionOutcome.OPPONENT_LEFT
        if self.match.winner is not None:
            return SessionOutcome.WON if self.match.winner is self.my_mark else SessionOutcome.LOST
        if self.started:
            return SessionOutcome.PLAYING
        return SessionOutcome.WAITING

    # -- Requests ------------------------------------------------------------

    async def create_room(self, code: str | None = None) -> Ack:
        """Host a room with this client's board rules. The host plays X and moves first."""
        body = self._rules()
        if code:
            body["code"] = code
        ack = await self._request(ClientRequest.CREATE_ROOM, body)
        if ack.ok:
            self._enter(ack.code, Role.HOST)
        return ack

    async def join_room(self, code: str) -> Ack:
        """Join a room as guest, playing O. Board rules must match the host's."""
        ack = await self._request(ClientRequest.JOIN_ROOM, {"code": code, **self._rules()})
        if ack.ok:
            self._enter(ack.code, Role.GUEST)
            self.opponent_connected = True
        return ack

    async def start_match(self) -> bool:
        """Ask the coordinator to start. Ignored unless hosting."""
        if self.role is not Role.HOST or self.room_code is None:
            return False
        ack = await self._request(ClientRequest.START_MATCH, {"code": self.room_code})
        return ack.ok

    async def restart_match(self) -> bool:
        """Ask the coordinator to reset both boards. Ignored unless hosting."""
        if self.role is not Role.HOST or self.room_code is None or self.opponent_left:
            return False
        ack = await self._request(ClientRequest.RESTART_MATCH, {"code": self.room_code})
        return ack.ok

    async def submit_local_move(self, position: Position) -> bool:
        """
        Apply a local move and send it to the opponent.

        Input out of turn or on an illegal cell is ignored. A move the
        coordinator rejects is taken back off the local board. If the
        coordinator cannot be reached the move may or may not have been
        relayed, so the session ends.

        Returns:
            True if the move was applied locally and accepted by the coordinator
        """
        if not self.can_move:
            return False
        result = self.match.place(position, by=self.my_mark)
        if not result.ok:
            return False

        self.is_my_turn = False
        self._present(result)
        ack = await self._request(
            ClientRequest.SUBMIT_MOVE,
            {"code": self.room_code, "position": list(result.placed.position)},
        )
        if ack.ok:
            return True

        if ack.error == TRANSPORT_ERROR:
            self._end_by_departure("Connection to server lost")
        else:
            logger.warning("Coordinator rejected move %s: %s", position, ack.reason)
            self._take_back(result)
        return False

    async def leave(self) -> None:
        """Leave the room. The opponent is told and the room is destroyed."""
        if self.room_code is None:
            return
        code = self.room_code
        if self.fades is not None:
            self.fades.cancel_all()
        self._clear_session()
        await self._request(ClientRequest.LEAVE_ROOM, {"code": code})
        logger.info("Left room %s", code)

    # -- Notifications -------------------------------------------------------

    def handle_event(self, payload: EventPayload) -> None:
        """Apply one coordinator notification to the local mirror."""
        if self.room_code is None or payload.room_code != self.room_code:
            logger.debug("Ignoring %s for room %s", payload.event.value, payload.room_code)
            return

        event = payload.event
        if event is GameEvent.OPPONENT_JOINED:
            self.opponent_connected = True
        elif event is GameEvent.OPPONENT_LEFT:
            self._end_by_departure("Opponent left the match")
        elif event is GameEvent.MATCH_STARTED:
            self.started = True
        elif event is GameEvent.TURN_CHANGED:
            self.is_my_turn = payload.mark is self.my_mark
        elif event is GameEvent.OPPONENT_MOVE:
            self._apply_remote(payload)
        elif event is GameEvent.MATCH_RESET:
            if self.fades is not None:
                self.fades.cancel_all()
            self.match.reset()
            self.surface.render(self.match.snapshot())
        elif event is GameEvent.MOVE_REJECTED:
            self.last_message = payload.data.get("reason", "Move rejected")

    def handle_connection_lost(self) -> None:
        if self.room_code is not None:
            self._end_by_departure("Connection to server lost")

    # -- Internals -------------------------------------------------------------

    def _rules(self) -> dict[str, Any]:
        return {"shape": self.match.shape.value, "capacity": self.match.capacity}

    def _enter(self, code: str | None, role: Role) -> None:
        self._clear_session()
        self.room_code = code
        self.role = role
        if self.fades is not None:
            self.fades.cancel_all()
        self.match.reset()
        logger.info("Entered room %s as %s (%s)", code, role.value, role.mark.value)

    def _apply_remote(self, payload: EventPayload) -> None:
        try:
            position = payload.position
        except ValueError:
            logger.warning("Dropped malformed opponent move %s", payload.data)
            return
        result = self.match.place(position, by=self.opponent_mark)
        if not result.ok:
            logger.warning(
                "Dropped opponent move %s: %s", position, result.error.name
            )
            return
        self._present(result)

    def _end_by_departure(self, message: str) -> None:
        self.opponent_left = True
        self.opponent_connected = False
        self.is_my_turn = False
        self.last_message = message
        if self.fades is not None:
            self.fades.cancel_all()
        self.surface.render(self.match.snapshot())

    def _present(self, result: PlaceResult) -> None:
        present_placement(result, self.match, self.surface, self.cues, self.fades)

    def _take_back(self, result: PlaceResult) -> None:
        if self.fades is not None and result.evicted is not None:
            self.fades.cancel(result.evicted.position)
        self.match.undo(result)
        self.surface.render(self.match.snapshot())

    async def _request(self, request: ClientRequest, body: dict[str, Any]) -> Ack:
        try:
            ack = Ack.model_validate(await self.transport.request(request, body))
        except ValidationError:
            logger.exception("Malformed acknowledgement for %s", request.value)
            ack = Ack(ok=False, error="InvalidResponse", reason="Unexpected server response")
        except (SocketIOError, asyncio.TimeoutError, OSError) as e:
            logger.warning("%s failed: %r", request.value, e)
            ack = Ack(ok=False, error=TRANSPORT_ERROR, reason="Server did not respond")
        if not ack.ok:
            self.last_message = ack.reason
        return ack

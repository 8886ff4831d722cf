"""
Tic-Tac-Fade - Coordinator Server

Binds SessionCoordinator to a python-socketio ASGI server. Each client
request is answered through the Socket.IO acknowledgement; coordinator
notifications are emitted to the addressed session ids.

Requests for one room are processed and delivered under a per-room lock,
so two moves arriving back-to-back are handled strictly in order.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import socketio
import uvicorn
from pydantic import ValidationError

from tictacfade.config.settings import Settings, configure_logging, get_settings
from tictacfade.realtime.coordinator import Dispatch, SessionCoordinator
from tictacfade.realtime.errors import NotAuthorized, SessionError
from tictacfade.realtime.events import ClientRequest, move_rejected
from tictacfade.realtime.models import (
    Ack,
    CreateRoomRequest,
    JoinRoomRequest,
    MoveRequest,
    Role,
    RoomRequest,
)
from tictacfade.realtime.registry import RoomRegistry

logger = logging.getLogger(__name__)


def _invalid_request(error: ValidationError) -> dict[str, Any]:
    first = error.errors()[0] if error.errors() else {}
    reason = first.get("msg", "Invalid request")
    return Ack(ok=False, error="InvalidRequest", reason=reason).to_wire()


class CoordinatorServer:
    """Socket.IO front end for a single SessionCoordinator."""

    def __init__(
        self,
        settings: Settings | None = None,
        coordinator: SessionCoordinator | None = None,
        sio: socketio.AsyncServer | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.coordinator = coordinator or SessionCoordinator(
            RoomRegistry(self.settings.room_code_length)
        )
        origins = self.settings.cors_allowed_origins
        self.sio = sio or socketio.AsyncServer(
            async_mode="asgi",
            cors_allowed_origins="*" if origins == ["*"] else origins,
        )
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}
        self._register_handlers()

    def _register_handlers(self) -> None:
        self.sio.on("connect", self.on_connect)
        self.sio.on("disconnect", self.on_disconnect)
        self.sio.on(ClientRequest.CREATE_ROOM.value, self.on_create_room)
        self.sio.on(ClientRequest.JOIN_ROOM.value, self.on_join_room)
        self.sio.on(ClientRequest.START_MATCH.value, self.on_start_match)
        self.sio.on(ClientRequest.SUBMIT_MOVE.value, self.on_submit_move)
        self.sio.on(ClientRequest.RESTART_MATCH.value, self.on_restart_match)
        self.sio.on(ClientRequest.LEAVE_ROOM.value, self.on_leave_room)

    def asgi_app(self) -> socketio.ASGIApp:
        return socketio.ASGIApp(self.sio)

    # -- Connection events -------------------------------------------------

    async def on_connect(self, sid: str, environ: dict, auth: Any = None) -> None:
        logger.info("User connected: %s", sid)

    async def on_disconnect(self, sid: str, reason: Any = None) -> None:
        logger.info("User disconnected: %s", sid)
        # Not serialised behind the room lock: a disconnect voids the room
        # even while a move for it is being relayed.
        dispatches = self.coordinator.disconnect(sid)
        self._prune_locks()
        await self._deliver(dispatches)

    # -- Requests ------------------------------------------------------------

    async def on_create_room(self, sid: str, data: dict | None = None) -> dict[str, Any]:
        try:
            request = CreateRoomRequest.model_validate(data or {})
            room = self.coordinator.create_room(sid, request.code, request.rules())
        except ValidationError as e:
            return _invalid_request(e)
        except SessionError as e:
            logger.info("create-room from %s failed: %s", sid, e)
            return e.to_dict()
        return Ack(ok=True, code=room.code, mark=Role.HOST.mark).to_wire()

    async def on_join_room(self, sid: str, data: dict | None = None) -> dict[str, Any]:
        try:
            request = JoinRoomRequest.model_validate(data or {})
        except ValidationError as e:
            return _invalid_request(e)

        async with self._room_lock(request.code):
            try:
                room, dispatches = self.coordinator.join_room(
                    sid, request.code, request.rules()
                )
            except SessionError as e:
                logger.info("join-room from %s failed: %s", sid, e)
                return e.to_dict()
            await self._deliver(dispatches)
        return Ack(ok=True, code=room.code, mark=Role.GUEST.mark).to_wire()

    async def on_start_match(self, sid: str, data: dict | None = None) -> dict[str, Any]:
        return await self._room_action(sid, data, self.coordinator.start_match)

    async def on_restart_match(self, sid: str, data: dict | None = None) -> dict[str, Any]:
        return await self._room_action(sid, data, self.coordinator.restart_match)

    async def on_leave_room(self, sid: str, data: dict | None = None) -> dict[str, Any]:
        return await self._room_action(sid, data, self.coordinator.leave)

    async def on_submit_move(self, sid: str, data: dict | None = None) -> dict[str, Any]:
        try:
            request = MoveRequest.model_validate(data or {})
        except ValidationError as e:
            return _invalid_request(e)

        async with self._room_lock(request.code):
            try:
                dispatches = self.coordinator.submit_move(sid, request.code, request.position)
            except NotAuthorized as e:
                await self._deliver([Dispatch(sid, move_rejected(request.code, e.message))])
                return e.to_dict()
            except SessionError as e:
                return e.to_dict()
            await self._deliver(dispatches)
        return Ack(ok=True, code=request.code).to_wire()

    # -- Helpers -------------------------------------------------------------

    async def _room_action(self, sid: str, data: dict | None, action) -> dict[str, Any]:
        try:
            request = RoomRequest.model_validate(data or {})
        except ValidationError as e:
            return _invalid_request(e)

        async with self._room_lock(request.code):
            try:
                dispatches = action(sid, request.code)
            except SessionError as e:
                logger.info("%s from %s failed: %s", action.__name__, sid, e)
                return e.to_dict()
            await self._deliver(dispatches)
        return Ack(ok=True, code=request.code).to_wire()

    @asynccontextmanager
    async def _room_lock(self, code: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(code, asyncio.Lock())
        self._lock_users[code] = self._lock_users.get(code, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[code] -= 1
            if not self._lock_users[code]:
                del self._lock_users[code]
                if code not in self.coordinator.registry:
                    self._locks.pop(code, None)

    def _prune_locks(self) -> None:
        """Drop idle locks of rooms that no longer exist."""
        for code in list(self._locks):
            if code not in self.coordinator.registry and code not in self._lock_users:
                del self._locks[code]

    async def _deliver(self, dispatches: list[Dispatch]) -> None:
        """Emit notifications in order. Delivery is best-effort."""
        for dispatch in dispatches:
            payload = dispatch.payload
            try:
                await self.sio.emit(payload.event.value, payload.to_wire(), to=dispatch.peer)
            except Exception:
                logger.exception(
                    "Failed to deliver %s to %s", payload.event.value, dispatch.peer
                )


def create_app(settings: Settings | None = None) -> socketio.ASGIApp:
    """Build the ASGI application serving the coordinator."""
    return CoordinatorServer(settings).asgi_app()


def run() -> None:
    """Console entrypoint: serve the coordinator with uvicorn."""
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()

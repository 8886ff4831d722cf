"""
Tic-Tac-Fade - Client Transport

Socket.IO connection from a player's process to the coordinator. Requests
are sent with an acknowledgement; coordinator notifications are turned
into EventPayloads and handed to a single listener.

Reconnection is disabled: a dropped connection ends the session.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import socketio

from tictacfade.realtime.events import ClientRequest, EventPayload, GameEvent

logger = logging.getLogger(__name__)


class SocketIOTransport:
    """Request/notification channel to the coordinator."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        client: socketio.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._client = client or socketio.AsyncClient(reconnection=False)
        self._listener: Callable[[EventPayload], None] | None = None
        self._on_lost: Callable[[], None] | None = None
        self._closing = False

        for event in GameEvent:
            self._client.on(event.value, self._make_handler(event.value))
        self._client.on("disconnect", self._handle_disconnect)

    @property
    def connected(self) -> bool:
        return self._client.connected

    def set_listener(self, callback: Callable[[EventPayload], None]) -> None:
        """Receive every coordinator notification."""
        self._listener = callback

    def set_connection_lost(self, callback: Callable[[], None]) -> None:
        """Called once if the server drops the connection."""
        self._on_lost = callback

    async def connect(self) -> None:
        self._closing = False
        await self._client.connect(self.url, transports=["websocket"])
        logger.info("Connected to coordinator at %s", self.url)

    async def disconnect(self) -> None:
        self._closing = True
        if self._client.connected:
            await self._client.disconnect()

    async def request(self, request: ClientRequest, body: dict[str, Any]) -> dict[str, Any]:
        """
        Send a request and wait for its acknowledgement.

        Raises:
            socketio.exceptions.TimeoutError: If no acknowledgement arrives
        """
        logger.debug("Sending %s %s", request.value, body)
        response = await self._client.call(request.value, body, timeout=self.timeout)
        return response or {}

    def _make_handler(self, name: str):
        async def handler(data: dict | None = None) -> None:
            self._dispatch(name, data)
        return handler

    def _dispatch(self, name: str, data: dict | None) -> None:
        if self._listener is None:
            return
        try:
            payload = EventPayload.from_wire(name, data)
            self._listener(payload)
        except Exception:
            logger.exception("Error handling %s notification", name)

    async def _handle_disconnect(self, reason: Any = None) -> None:
        if self._closing:
            return
        logger.warning("Connection to coordinator lost (%s)", reason)
        if self._on_lost is not None:
            self._on_lost()

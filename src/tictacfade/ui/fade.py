"""
Tic-Tac-Fade - Eviction Fade Timer

Drives the blink-then-fade display hints of an evicted cell. The logical
eviction has already happened inside MatchState.place; this only animates
the hints and can be cancelled per cell at any time.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from tictacfade.engine.base import Position
from tictacfade.engine.match import MatchState

logger = logging.getLogger(__name__)


class EvictionFadeScheduler:
    """Cancellable per-cell presentation timers on the running event loop."""

    def __init__(
        self,
        match: MatchState,
        on_change: Callable[[], None] | None = None,
        *,
        blink_seconds: float = 1.5,
        fade_seconds: float = 1.0,
        tick_seconds: float = 0.05,
    ) -> None:
        self._match = match
        self._on_change = on_change
        self.blink_seconds = blink_seconds
        self.fade_seconds = fade_seconds
        self.tick_seconds = tick_seconds
        self._handles: dict[Position, asyncio.TimerHandle] = {}

    @property
    def pending(self) -> list[Position]:
        """Cells with a running blink or fade."""
        return list(self._handles.keys())

    def schedule(self, position: Position) -> None:
        """
        Start the blink phase for a freshly evicted cell.

        Outside a running event loop there is nothing to drive the timers,
        so the animation is skipped and the cell's hints stay clear.
        """
        self.cancel(position)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop, skipping fade for %s", position)
            return
        self._match.set_display_hints(position, is_blinking=True, fade_progress=0.0)
        self._handles[position] = loop.call_later(
            self.blink_seconds, self._start_fade, position
        )
        self._notify()

    def cancel(self, position: Position) -> None:
        """Stop any animation on a cell and clear its hints."""
        handle = self._handles.pop(position, None)
        if handle is None:
            return
        handle.cancel()
        self._match.clear_display_hints(position)
        logger.debug("Cancelled fade for %s", position)

    def cancel_all(self) -> None:
        for position in list(self._handles):
            self.cancel(position)

    def _start_fade(self, position: Position) -> None:
        if not self._match.cell(position).is_empty:
            # Re-occupied before the fade began
            self.cancel(position)
            return
        loop = asyncio.get_running_loop()
        self._match.set_display_hints(position, is_blinking=False)
        self._tick(position, loop.time())

    def _tick(self, position: Position, started: float) -> None:
        loop = asyncio.get_running_loop()
        if self.fade_seconds > 0:
            progress = min((loop.time() - started) / self.fade_seconds, 1.0)
        else:
            progress = 1.0

        if progress >= 1.0:
            self._handles.pop(position, None)
            self._match.clear_display_hints(position)
        else:
            self._match.set_display_hints(position, fade_progress=progress)
            self._handles[position] = loop.call_later(
                self.tick_seconds, self._tick, position, started
            )
        self._notify()

    def _notify(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change()
        except Exception:
            logger.exception("Render callback failed during fade")

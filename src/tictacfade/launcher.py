"""
Tic-Tac-Fade - Match Launcher

Turns the menu layer's MatchSetup into a running solo or networked session
wired to the presentation collaborators and the application settings.
"""

from __future__ import annotations

import logging
import random

from tictacfade.config.settings import Settings, get_settings
from tictacfade.engine.base import GameMode
from tictacfade.engine.match import MatchState
from tictacfade.engine.solo import SoloMatch
from tictacfade.realtime.client_sync import ClientSync, Transport
from tictacfade.realtime.transport import SocketIOTransport
from tictacfade.ui.fade import EvictionFadeScheduler
from tictacfade.ui.interfaces import (
    CueTrigger,
    MatchSetup,
    NullSurface,
    RenderSurface,
)

logger = logging.getLogger(__name__)


def _fade_scheduler(
    match: MatchState, surface: RenderSurface, settings: Settings
) -> EvictionFadeScheduler:
    """Fade timer that redraws the surface on every hint change."""
    return EvictionFadeScheduler(
        match,
        lambda: surface.render(match.snapshot()),
        blink_seconds=settings.eviction_blink_seconds,
        fade_seconds=settings.eviction_fade_seconds,
        tick_seconds=settings.fade_tick_seconds,
    )


def start_solo(
    setup: MatchSetup,
    *,
    surface: RenderSurface | None = None,
    cues: CueTrigger | None = None,
    settings: Settings | None = None,
    rng: random.Random | None = None,
) -> SoloMatch:
    """
    Build a solo match and draw the empty board.

    Raises:
        ValueError: If the setup is not for solo play
    """
    if setup.mode is not GameMode.SOLO:
        raise ValueError(f"Expected a solo setup, got {setup.mode.value}.")
    settings = settings or get_settings()

    solo = SoloMatch(
        settings.match_config(setup.shape),
        setup.difficulty,
        surface=surface,
        cues=cues,
        rng=rng,
    )
    solo.attach_fades(_fade_scheduler(solo.match, solo.surface, settings))
    solo.surface.render(solo.match.snapshot())
    logger.info("Solo match on %s board (%s)", setup.shape.name, setup.difficulty.value)
    return solo


async def start_networked(
    setup: MatchSetup,
    *,
    surface: RenderSurface | None = None,
    cues: CueTrigger | None = None,
    settings: Settings | None = None,
    transport: Transport | None = None,
) -> ClientSync:
    """
    Connect to the coordinator and create or join the setup's room.

    A failed create or join leaves ``room_code`` unset and the reason in
    ``last_message``.

    Args:
        setup: Networked choices from the menu
        surface: Board renderer
        cues: Cue trigger
        settings: Defaults to the cached application settings
        transport: Connected transport; a SocketIOTransport to
            ``settings.server_url`` is opened when None

    Raises:
        ValueError: If the setup is not for networked play
    """
    if setup.mode is not GameMode.NETWORKED:
        raise ValueError(f"Expected a networked setup, got {setup.mode.value}.")
    settings = settings or get_settings()
    surface = surface or NullSurface()

    if transport is None:
        transport = SocketIOTransport(settings.server_url, timeout=settings.request_timeout)
        await transport.connect()

    match = MatchState(settings.match_config(setup.shape))
    sync = ClientSync(
        match,
        transport,
        surface=surface,
        cues=cues,
        fades=_fade_scheduler(match, surface, settings),
    )
    if setup.is_host:
        await sync.create_room(setup.room_code)
    else:
        await sync.join_room(setup.room_code)
    surface.render(match.snapshot())
    return sync

"""Presentation collaborators for Tic-Tac-Fade."""

from tictacfade.ui.fade import EvictionFadeScheduler
from tictacfade.ui.interfaces import (
    CueKind,
    CueTrigger,
    MatchSetup,
    RenderSurface,
    SessionOutcome,
)

__all__ = [
    "CueKind",
    "CueTrigger",
    "EvictionFadeScheduler",
    "MatchSetup",
    "RenderSurface",
    "SessionOutcome",
]

"""Interfaces for the presentation collaborators the core drives.

Rendering, audio and menus live outside this package. The game layer
depends only on these ABCs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from tictacfade.engine.base import (
    BoardShape,
    Difficulty,
    GameMode,
    MatchSnapshot,
    PlaceResult,
)

if TYPE_CHECKING:
    from tictacfade.engine.match import MatchState
    from tictacfade.ui.fade import EvictionFadeScheduler


class CueKind(Enum):
    """Audio/visual cue fired after a successful placement."""

    PLACE = "place"
    WIN = "win"


class SessionOutcome(Enum):
    """What a player should be shown about the session."""

    WAITING = "waiting"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"
    OPPONENT_LEFT = "opponent_left"


class RenderSurface(ABC):
    """Something that draws the board."""

    @abstractmethod
    def render(self, snapshot: MatchSnapshot) -> None:
        """Redraw from a snapshot. Called after every placement and reset."""


class CueTrigger(ABC):
    """Plays a sound or flash for a game event."""

    @abstractmethod
    def cue(self, kind: CueKind) -> None: ...


class NullSurface(RenderSurface):
    def render(self, snapshot: MatchSnapshot) -> None:
        pass


class NullCues(CueTrigger):
    def cue(self, kind: CueKind) -> None:
        pass


@dataclass(frozen=True)
class MatchSetup:
    """
    Choices handed over by the menu layer before the core is engaged.

    Attributes:
        mode: Solo against the policy, or networked
        shape: Board geometry
        difficulty: Policy tier (solo only)
        room_code: Room to create or join (networked only; None lets the
            server generate one when hosting)
        is_host: Whether this client creates the room
    """

    mode: GameMode
    shape: BoardShape = BoardShape.COMPACT
    difficulty: Difficulty = Difficulty.HARD
    room_code: str | None = None
    is_host: bool = False

    def __post_init__(self) -> None:
        if self.mode is GameMode.NETWORKED and not self.is_host and not self.room_code:
            raise ValueError("A room code is required to join a networked match.")


def present_placement(
    result: PlaceResult,
    match: MatchState,
    surface: RenderSurface,
    cues: CueTrigger,
    fades: EvictionFadeScheduler | None = None,
) -> None:
    """Drive the collaborators after a successful placement."""
    if fades is not None:
        fades.cancel(result.placed.position)
        if result.evicted is not None:
            fades.schedule(result.evicted.position)
    cues.cue(CueKind.WIN if result.is_win else CueKind.PLACE)
    surface.render(match.snapshot())

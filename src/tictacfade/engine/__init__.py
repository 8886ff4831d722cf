"""
Tic-Tac-Fade Game Engine.

Pure Python game logic with zero network dependencies.
Handles line geometry, FIFO eviction, win detection and the solo opponent.
"""

from tictacfade.engine.base import (
    BoardShape,
    Cell,
    Difficulty,
    GameMode,
    InvalidMove,
    Mark,
    MatchConfig,
    MatchSnapshot,
    Phase,
    PlaceResult,
)
from tictacfade.engine.geometry import GeometryRules
from tictacfade.engine.match import MatchState
from tictacfade.engine.opponent import OpponentPolicy
from tictacfade.engine.solo import SoloMatch

__all__ = [
    # Data Classes
    "Cell",
    "MatchConfig",
    "MatchSnapshot",
    "PlaceResult",
    # Enums
    "BoardShape",
    "Difficulty",
    "GameMode",
    "InvalidMove",
    "Mark",
    "Phase",
    # Engine
    "GeometryRules",
    "MatchState",
    "OpponentPolicy",
    "SoloMatch",
]

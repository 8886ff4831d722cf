"""
Tic-Tac-Fade - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. Value objects are frozen dataclasses so that snapshots handed
to renderers and network layers can never alias live match state.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar

# A board coordinate: (row, col) on the compact board, (x, y, z) on the volume.
Position = tuple[int, ...]
Line = tuple[Position, ...]


class Mark(Enum):
    """The two player symbols. X always moves first."""
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Mark":
        """The other mark."""
        return Mark.O if self is Mark.X else Mark.X


class Phase(Enum):
    """Match phases. There is no draw: a match ends only on a win."""
    PLAYING = "playing"
    ENDED = "ended"


class BoardShape(Enum):
    """Board geometry; the value is the number of axes."""
    COMPACT = 2     # 3x3
    VOLUMETRIC = 3  # 3x3x3

    @property
    def dimensions(self) -> int:
        return self.value

    @property
    def cell_count(self) -> int:
        return BOARD_SIZE ** self.value


class Difficulty(Enum):
    """Opponent policy tiers."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GameMode(Enum):
    """How a match is played, chosen by the menu layer."""
    SOLO = "solo"
    NETWORKED = "networked"


class InvalidMove(Enum):
    """Reasons a placement is rejected."""
    GAME_OVER = auto()
    OUT_OF_BOUNDS = auto()
    OCCUPIED = auto()
    WRONG_TURN = auto()


BOARD_SIZE = 3


@dataclass(frozen=True)
class Cell:
    """
    One board cell.

    Attributes:
        position: Coordinates of the cell
        occupant: Mark holding the cell, or None when empty
        sequence: Placement sequence number (0 when empty)
        is_blinking: Display hint, set while an evicted piece blinks out
        fade_progress: Display hint in [0, 1] for the eviction fade
    """
    position: Position
    occupant: Mark | None = None
    sequence: int = 0
    is_blinking: bool = False
    fade_progress: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.occupant is None

    def to_dict(self) -> dict:
        """Serialize for renderers and logs."""
        return {
            "position": list(self.position),
            "occupant": self.occupant.value if self.occupant else None,
            "sequence": self.sequence,
            "is_blinking": self.is_blinking,
            "fade_progress": self.fade_progress,
        }


@dataclass(frozen=True)
class MatchConfig:
    """
    Configuration for a match.

    Attributes:
        shape: Board geometry
        capacity: Maximum live pieces before FIFO eviction begins
    """
    shape: BoardShape = BoardShape.COMPACT
    capacity: int = 5

    DEFAULT_CAPACITY: ClassVar[dict[BoardShape, int]] = {
        BoardShape.COMPACT: 5,
        BoardShape.VOLUMETRIC: 18,
    }

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not isinstance(self.capacity, int) or isinstance(self.capacity, bool):
            raise ValueError(
                f"Capacity must be an integer, got {type(self.capacity).__name__}."
            )
        if not 1 <= self.capacity < self.shape.cell_count:
            raise ValueError(
                f"Capacity for {self.shape.name} board must be between 1 and "
                f"{self.shape.cell_count - 1}, got {self.capacity}."
            )

    @classmethod
    def for_shape(cls, shape: BoardShape, capacity: int | None = None) -> "MatchConfig":
        """Build a config, falling back to the shape's default capacity."""
        if capacity is None:
            capacity = cls.DEFAULT_CAPACITY[shape]
        return cls(shape=shape, capacity=capacity)


@dataclass(frozen=True)
class MatchSnapshot:
    """
    Immutable projection of a match, handed to render surfaces.

    Attributes:
        shape: Board geometry
        cells: Every cell in position order
        current_turn: Mark to move next
        winner: Winning mark, or None while playing
        phase: Current phase
        scores: Wins per mark across resets
        winning_line: Positions of the completed line, if any
    """
    shape: BoardShape
    cells: tuple[Cell, ...]
    current_turn: Mark
    winner: Mark | None
    phase: Phase
    scores: dict[Mark, int] = field(default_factory=dict)
    winning_line: Line | None = None

    @property
    def occupied(self) -> tuple[Cell, ...]:
        """Non-empty cells, oldest first."""
        return tuple(
            sorted((c for c in self.cells if not c.is_empty), key=lambda c: c.sequence)
        )

    def cell(self, position: Position) -> Cell:
        for c in self.cells:
            if c.position == position:
                return c
        raise KeyError(position)


@dataclass(frozen=True)
class PlaceResult:
    """
    Outcome of a placement attempt.

    Attributes:
        ok: Whether the placement was applied
        error: Rejection reason when ok is False
        placed: The newly occupied cell
        evicted: The cell as it was just before FIFO eviction cleared it
        winner: Mark that completed a line on this placement
        winning_line: The completed line
        snapshot: Match snapshot after the attempt
    """
    ok: bool
    snapshot: MatchSnapshot
    error: InvalidMove | None = None
    placed: Cell | None = None
    evicted: Cell | None = None
    winner: Mark | None = None
    winning_line: Line | None = None

    @property
    def is_win(self) -> bool:
        return self.winner is not None

    @classmethod
    def rejected(cls, error: InvalidMove, snapshot: MatchSnapshot) -> "PlaceResult":
        return cls(ok=False, error=error, snapshot=snapshot)

"""
Tic-Tac-Fade - Board Geometry Rules

Enumerates every winning line for a board shape and evaluates line ownership.

Lines:
- Compact (3x3): 3 rows + 3 columns + 2 diagonals = 8
- Volumetric (3x3x3): 27 axis-aligned lines, 18 in-plane diagonals
  (2 per layer, 3 layers per axis, 3 axes) and 4 space diagonals = 49
"""

from functools import lru_cache
from itertools import product
from typing import ClassVar, Mapping

from tictacfade.engine.base import BOARD_SIZE, BoardShape, Line, Mark, Position


def _directions(dimensions: int) -> list[tuple[int, ...]]:
    """Unit step vectors, one per undirected direction.

    A direction and its negation describe the same lines, so only vectors
    whose first non-zero component is positive are kept.
    """
    steps = []
    for vector in product((-1, 0, 1), repeat=dimensions):
        nonzero = [v for v in vector if v != 0]
        if nonzero and nonzero[0] > 0:
            steps.append(vector)
    return steps


@lru_cache(maxsize=None)
def _build_lines(shape: BoardShape) -> tuple[Line, ...]:
    size = BOARD_SIZE
    lines: list[Line] = []
    for direction in _directions(shape.dimensions):
        for start in product(range(size), repeat=shape.dimensions):
            before = tuple(s - d for s, d in zip(start, direction))
            if GeometryRules.in_bounds(before, shape):
                # Not the first cell of its line
                continue
            line = tuple(
                tuple(s + d * k for s, d in zip(start, direction))
                for k in range(size)
            )
            if all(GeometryRules.in_bounds(p, shape) for p in line):
                lines.append(line)
    return tuple(sorted(lines))


class GeometryRules:
    """Stateless line enumeration and evaluation."""

    SIZE: ClassVar[int] = BOARD_SIZE

    @classmethod
    def positions(cls, shape: BoardShape) -> tuple[Position, ...]:
        """All board positions in lexicographic order."""
        return tuple(product(range(cls.SIZE), repeat=shape.dimensions))

    @classmethod
    def in_bounds(cls, position: Position, shape: BoardShape) -> bool:
        """
        Check whether a position lies on the board.

        Malformed positions (wrong length, non-integer coordinates) are
        reported as out of bounds rather than raising.
        """
        if not isinstance(position, tuple) or len(position) != shape.dimensions:
            return False
        for coord in position:
            if isinstance(coord, bool) or not isinstance(coord, int):
                return False
            if not 0 <= coord < cls.SIZE:
                return False
        return True

    @classmethod
    def winning_lines(cls, shape: BoardShape) -> tuple[Line, ...]:
        """
        Return the complete, fixed set of winning lines for a shape.

        The same tuple object is returned on every call.
        """
        return _build_lines(shape)

    @classmethod
    def lines_through(cls, position: Position, shape: BoardShape) -> tuple[Line, ...]:
        """Winning lines that contain a position."""
        return tuple(line for line in cls.winning_lines(shape) if position in line)

    @classmethod
    def evaluate(cls, board: Mapping[Position, Mark | None], line: Line) -> Mark | None:
        """
        Return the mark owning every cell of a line, else None.

        Args:
            board: Occupant per position (missing positions count as empty)
            line: Positions to check

        Returns:
            The common mark, or None if any cell is empty or marks differ
        """
        first = board.get(line[0])
        if first is None:
            return None
        for position in line[1:]:
            if board.get(position) is not first:
                return None
        return first

    @classmethod
    def find_winner(
        cls,
        board: Mapping[Position, Mark | None],
        shape: BoardShape,
    ) -> tuple[Mark, Line] | None:
        """
        Scan all lines in their fixed order and return the first owned one.

        Returns:
            (mark, line) for the first fully owned line, or None
        """
        for line in cls.winning_lines(shape):
            owner = cls.evaluate(board, line)
            if owner is not None:
                return owner, line
        return None

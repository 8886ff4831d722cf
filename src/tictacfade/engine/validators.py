"""
Tic-Tac-Fade - Input Validation Utilities

Validation for values that cross a trust boundary (network payloads, settings,
menu input). All validators either return normalized data or raise a
descriptive ValueError. In-match placement attempts are NOT validated here:
MatchState rejects those through its result object instead.
"""

import string
from typing import Any, Sequence

from tictacfade.engine.base import BOARD_SIZE, BoardShape, Mark, Position

ROOM_CODE_ALPHABET = frozenset(string.ascii_uppercase + string.digits)


def validate_position(
    values: Sequence[Any],
    dimensions: int | None = None,
) -> Position:
    """
    Validate and normalize board coordinates.

    Args:
        values: Sequence of coordinates
        dimensions: Required number of axes (2 or 3). None accepts either.

    Returns:
        Coordinates as a tuple of ints

    Raises:
        ValueError: If validation fails
    """
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise ValueError(f"Position must be a sequence of integers, got {type(values).__name__}.")

    coords = tuple(values)
    allowed = (dimensions,) if dimensions is not None else tuple(s.dimensions for s in BoardShape)
    if len(coords) not in allowed:
        raise ValueError(f"Position must have {' or '.join(map(str, allowed))} coordinates, got {len(coords)}.")

    for i, coord in enumerate(coords):
        if isinstance(coord, bool) or not isinstance(coord, int):
            raise ValueError(f"Coordinate at index {i} must be an integer, got {type(coord).__name__}.")
        if not (0 <= coord < BOARD_SIZE):
            raise ValueError(
                f"Coordinate at index {i} is {coord}, must be between 0 and {BOARD_SIZE - 1}."
            )

    return coords


def validate_room_code(code: Any, length: int | None = None) -> str:
    """
    Validate a room code and normalize it to upper case.

    Args:
        code: Raw room code
        length: Exact required length (None = 4 to 12 characters)

    Returns:
        Upper-cased, stripped code

    Raises:
        ValueError: If the code is empty, too long or not alphanumeric
    """
    if not isinstance(code, str):
        raise ValueError(f"Room code must be a string, got {type(code).__name__}.")

    normalized = code.strip().upper()
    if not normalized:
        raise ValueError("Room code cannot be empty.")

    if length is not None and len(normalized) != length:
        raise ValueError(f"Room code must be {length} characters, got {len(normalized)}.")
    if length is None and not 4 <= len(normalized) <= 12:
        raise ValueError(f"Room code must be 4-12 characters, got {len(normalized)}.")

    bad = set(normalized) - ROOM_CODE_ALPHABET
    if bad:
        raise ValueError(f"Room code may only contain A-Z and 0-9, got {''.join(sorted(bad))!r}.")

    return normalized


def validate_mark(value: Any) -> Mark:
    """
    Parse a mark from its wire form.

    Raises:
        ValueError: If value is not "X" or "O"
    """
    if isinstance(value, Mark):
        return value
    try:
        return Mark(str(value).upper())
    except ValueError:
        raise ValueError(f"Mark must be 'X' or 'O', got {value!r}.") from None


"""
Tic-Tac-Fade - Base Classes Tests

Tests for dataclasses, enums, and validation utilities.
"""

import pytest

from tictacfade.engine.base import (
    BoardShape,
    Cell,
    InvalidMove,
    Mark,
    MatchConfig,
    MatchSnapshot,
    Phase,
    PlaceResult,
)
from tictacfade.engine.validators import (
    validate_mark,
    validate_position,
    validate_room_code,
)


class TestMark:
    """Tests for Mark enum."""

    def test_values(self):
        assert Mark.X.value == "X"
        assert Mark.O.value == "O"

    def test_opponent(self):
        assert Mark.X.opponent is Mark.O
        assert Mark.O.opponent is Mark.X


class TestBoardShape:
    """Tests for BoardShape enum."""

    def test_compact(self):
        assert BoardShape.COMPACT.dimensions == 2
        assert BoardShape.COMPACT.cell_count == 9

    def test_volumetric(self):
        assert BoardShape.VOLUMETRIC.dimensions == 3
        assert BoardShape.VOLUMETRIC.cell_count == 27


class TestCell:
    """Tests for Cell dataclass."""

    def test_empty_cell(self):
        cell = Cell(position=(0, 0))
        assert cell.is_empty
        assert cell.sequence == 0
        assert not cell.is_blinking

    def test_frozen(self):
        cell = Cell(position=(0, 0))
        with pytest.raises(AttributeError):
            cell.occupant = Mark.X

    def test_to_dict(self):
        cell = Cell(position=(1, 2), occupant=Mark.O, sequence=4)
        assert cell.to_dict() == {
            "position": [1, 2],
            "occupant": "O",
            "sequence": 4,
            "is_blinking": False,
            "fade_progress": 0.0,
        }


class TestMatchConfig:
    """Tests for MatchConfig dataclass."""

    def test_defaults(self):
        config = MatchConfig()
        assert config.shape is BoardShape.COMPACT
        assert config.capacity == 5

    def test_for_shape_defaults(self):
        assert MatchConfig.for_shape(BoardShape.VOLUMETRIC).capacity == 18
        assert MatchConfig.for_shape(BoardShape.COMPACT, capacity=6).capacity == 6

    @pytest.mark.parametrize("capacity", [0, -1, 9])
    def test_capacity_out_of_range_compact(self, capacity):
        with pytest.raises(ValueError, match="between 1 and 8"):
            MatchConfig(capacity=capacity)

    def test_capacity_limit_volumetric(self):
        assert MatchConfig(BoardShape.VOLUMETRIC, 26).capacity == 26
        with pytest.raises(ValueError, match="between 1 and 26"):
            MatchConfig(BoardShape.VOLUMETRIC, 27)

    @pytest.mark.parametrize("capacity", [5.0, "5", True])
    def test_capacity_must_be_int(self, capacity):
        with pytest.raises(ValueError, match="integer"):
            MatchConfig(capacity=capacity)


class TestSnapshotAndResult:
    """Tests for MatchSnapshot and PlaceResult."""

    def _snapshot(self):
        cells = (
            Cell((0, 0), Mark.X, 2),
            Cell((0, 1)),
            Cell((0, 2), Mark.O, 1),
        )
        return MatchSnapshot(BoardShape.COMPACT, cells, Mark.X, None, Phase.PLAYING)

    def test_occupied_ordered_by_sequence(self):
        snap = self._snapshot()
        assert [c.position for c in snap.occupied] == [(0, 2), (0, 0)]

    def test_cell_lookup(self):
        snap = self._snapshot()
        assert snap.cell((0, 0)).occupant is Mark.X
        with pytest.raises(KeyError):
            snap.cell((2, 2))

    def test_rejected(self):
        result = PlaceResult.rejected(InvalidMove.OCCUPIED, self._snapshot())
        assert not result.ok
        assert result.error is InvalidMove.OCCUPIED
        assert not result.is_win


class TestValidatePosition:
    """Tests for validate_position function."""

    def test_valid_positions(self):
        assert validate_position([0, 2]) == (0, 2)
        assert validate_position((2, 1, 0)) == (2, 1, 0)

    def test_dimensions_enforced(self):
        with pytest.raises(ValueError, match="must have 2 coordinates"):
            validate_position([0, 1, 2], dimensions=2)

    @pytest.mark.parametrize("values", ["01", 5, None, {"x": 1}])
    def test_not_a_sequence(self, values):
        with pytest.raises(ValueError, match="sequence of integers"):
            validate_position(values)

    def test_wrong_length(self):
        with pytest.raises(ValueError, match="2 or 3 coordinates"):
            validate_position([1])

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="index 1 is 3"):
            validate_position([0, 3])

    @pytest.mark.parametrize("values", [[0, 1.0], [True, 0], [0, "1"]])
    def test_non_integer(self, values):
        with pytest.raises(ValueError, match="must be an integer"):
            validate_position(values)


class TestValidateRoomCode:
    """Tests for validate_room_code function."""

    def test_normalizes(self):
        assert validate_room_code("  abc123 ") == "ABC123"

    def test_exact_length(self):
        assert validate_room_code("ABCD", length=4) == "ABCD"
        with pytest.raises(ValueError, match="must be 6 characters"):
            validate_room_code("ABCD", length=6)

    @pytest.mark.parametrize("code", ["", "   "])
    def test_empty(self, code):
        with pytest.raises(ValueError, match="cannot be empty"):
            validate_room_code(code)

    @pytest.mark.parametrize("code", ["ABC", "A" * 13])
    def test_length_bounds(self, code):
        with pytest.raises(ValueError, match="4-12"):
            validate_room_code(code)

    def test_bad_characters(self):
        with pytest.raises(ValueError, match="A-Z and 0-9"):
            validate_room_code("AB-123")

    def test_not_a_string(self):
        with pytest.raises(ValueError, match="must be a string"):
            validate_room_code(123456)


class TestValidateMark:
    """Tests for validate_mark function."""

    def test_parses(self):
        assert validate_mark("x") is Mark.X
        assert validate_mark("O") is Mark.O
        assert validate_mark(Mark.X) is Mark.X

    def test_invalid(self):
        with pytest.raises(ValueError, match="'X' or 'O'"):
            validate_mark("Z")

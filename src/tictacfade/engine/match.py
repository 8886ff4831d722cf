"""
Tic-Tac-Fade - Match State Machine

The authoritative per-match state: board, FIFO placement queue, turn, scores
and phase. All mutation goes through ``place`` and ``reset``.

Game Rules:
- Players alternate, X first
- At most ``capacity`` pieces are live; a placement beyond that evicts the
  single oldest piece on the board, whoever owns it
- Eviction happens before win detection on the same placement
- Three in a line (any row, column, diagonal or space diagonal) wins
- No draws: the board can never fill permanently
"""

from collections import deque
from dataclasses import replace

from tictacfade.engine.base import (
    Cell,
    InvalidMove,
    Line,
    Mark,
    MatchConfig,
    MatchSnapshot,
    Phase,
    PlaceResult,
    Position,
)
from tictacfade.engine.geometry import GeometryRules


class MatchState:
    """
    Mutable state machine for one match.

    Transitions: PLAYING -> ENDED via a winning placement, ENDED -> PLAYING
    via ``reset``. Two instances fed the same placements always agree.
    """

    FIRST_MARK = Mark.X

    def __init__(self, config: MatchConfig | None = None) -> None:
        self.config = config or MatchConfig()
        self.scores: dict[Mark, int] = {Mark.X: 0, Mark.O: 0}
        self._positions = GeometryRules.positions(self.config.shape)
        self._init_match()

    def _init_match(self) -> None:
        self._cells: dict[Position, Cell] = {p: Cell(position=p) for p in self._positions}
        self._queue: deque[Position] = deque()
        self._next_sequence = 1
        self.moves_played = 0
        self.current_turn = self.FIRST_MARK
        self.winner: Mark | None = None
        self.winning_line: Line | None = None
        self.phase = Phase.PLAYING

    # -- Read-only views ---------------------------------------------------

    @property
    def shape(self):
        return self.config.shape

    @property
    def capacity(self) -> int:
        return self.config.capacity

    @property
    def queue(self) -> tuple[Position, ...]:
        """Live piece positions, oldest first."""
        return tuple(self._queue)

    @property
    def piece_count(self) -> int:
        return len(self._queue)

    def cell(self, position: Position) -> Cell:
        return self._cells[position]

    def occupants(self) -> dict[Position, Mark | None]:
        """Occupant per position, the form GeometryRules evaluates."""
        return {p: c.occupant for p, c in self._cells.items()}

    def empty_positions(self) -> list[Position]:
        return [p for p in self._positions if self._cells[p].is_empty]

    def next_eviction(self) -> Position | None:
        """Position that the next placement would evict, if any."""
        if len(self._queue) >= self.capacity:
            return self._queue[0]
        return None

    def snapshot(self) -> MatchSnapshot:
        return MatchSnapshot(
            shape=self.shape,
            cells=tuple(self._cells[p] for p in self._positions),
            current_turn=self.current_turn,
            winner=self.winner,
            phase=self.phase,
            scores=dict(self.scores),
            winning_line=self.winning_line,
        )

    def preview(self, position: Position, mark: Mark) -> dict[Position, Mark | None]:
        """
        Occupancy after a hypothetical placement, including its eviction.

        Does not mutate the match and does not check whose turn it is.
        """
        board = self.occupants()
        board[position] = mark
        evict = self.next_eviction()
        if evict is not None and evict != position:
            board[evict] = None
        return board

    # -- Mutation ----------------------------------------------------------

    def validate(self, position: Position, by: Mark | None = None) -> InvalidMove | None:
        """Return the reason a placement would be rejected, or None."""
        if self.phase is not Phase.PLAYING:
            return InvalidMove.GAME_OVER
        if not GeometryRules.in_bounds(position, self.shape):
            return InvalidMove.OUT_OF_BOUNDS
        if not self._cells[position].is_empty:
            return InvalidMove.OCCUPIED
        if by is not None and by is not self.current_turn:
            return InvalidMove.WRONG_TURN
        return None

    def place(self, position: Position, by: Mark | None = None) -> PlaceResult:
        """
        Place the current mark at a position.

        Steps:
        1. Reject (without mutating) on wrong phase, bounds, occupancy or turn
        2. Occupy the cell with the next sequence number and enqueue it
        3. If the queue exceeds capacity, evict the oldest piece
        4. Scan every line; a complete line ends the match
        5. Otherwise pass the turn

        Args:
            position: Target coordinates
            by: Mark claiming the move. None means the current turn.

        Returns:
            PlaceResult describing the outcome
        """
        if isinstance(position, list):
            position = tuple(position)

        error = self.validate(position, by)
        if error is not None:
            return PlaceResult.rejected(error, self.snapshot())

        mark = self.current_turn
        placed = Cell(position=position, occupant=mark, sequence=self._next_sequence)
        self._cells[position] = placed
        self._queue.append(position)
        self._next_sequence += 1
        self.moves_played += 1

        evicted = None
        if len(self._queue) > self.capacity:
            oldest = self._queue.popleft()
            evicted = self._cells[oldest]
            self._cells[oldest] = Cell(position=oldest)

        found = GeometryRules.find_winner(self.occupants(), self.shape)
        if found is not None:
            self.winner, self.winning_line = found
            self.phase = Phase.ENDED
            self.scores[self.winner] += 1
        else:
            self.current_turn = mark.opponent

        return PlaceResult(
            ok=True,
            snapshot=self.snapshot(),
            placed=placed,
            evicted=evicted,
            winner=self.winner,
            winning_line=self.winning_line,
        )

    def undo(self, result: PlaceResult) -> None:
        """
        Reverse the most recent placement, restoring any piece it evicted.

        Raises:
            ValueError: If ``result`` is not the latest successful placement
        """
        placed = result.placed
        if (
            not result.ok
            or not self._queue
            or self._queue[-1] != placed.position
            or self._cells[placed.position].sequence != placed.sequence
        ):
            raise ValueError("Only the latest placement can be undone.")

        self._queue.pop()
        self._cells[placed.position] = Cell(position=placed.position)
        if result.evicted is not None:
            self._queue.appendleft(result.evicted.position)
            self._cells[result.evicted.position] = replace(
                result.evicted, is_blinking=False, fade_progress=0.0
            )
        self._next_sequence -= 1
        self.moves_played -= 1

        if self.winner is not None:
            self.scores[self.winner] -= 1
            self.winner = None
            self.winning_line = None
            self.phase = Phase.PLAYING
        self.current_turn = placed.occupant

    def reset(self) -> None:
        """Start a fresh match. Scores are a running tally and persist."""
        self._init_match()

    def reset_scores(self) -> None:
        self.scores = {Mark.X: 0, Mark.O: 0}

    def set_display_hints(
        self,
        position: Position,
        *,
        is_blinking: bool | None = None,
        fade_progress: float | None = None,
    ) -> None:
        """Update presentation hints on a cell without touching game logic."""
        cell = self._cells[position]
        changes = {}
        if is_blinking is not None:
            changes["is_blinking"] = is_blinking
        if fade_progress is not None:
            changes["fade_progress"] = min(max(fade_progress, 0.0), 1.0)
        if changes:
            self._cells[position] = replace(cell, **changes)

    def clear_display_hints(self, position: Position) -> None:
        self.set_display_hints(position, is_blinking=False, fade_progress=0.0)

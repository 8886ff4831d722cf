"""
Tic-Tac-Fade - Heuristic Opponent

Depth-1 lookahead move selection for solo mode.

Tiers:
- EASY: mostly random, sometimes positional
- MEDIUM: always blocks, usually takes an immediate win
- HARD: takes an immediate win, else blocks, else positional

An "immediate win" is judged on the board as it would look after the
placement AND the FIFO eviction that placement would trigger.
"""

import random
from typing import ClassVar

from tictacfade.engine.base import BoardShape, Difficulty, Mark, Position
from tictacfade.engine.geometry import GeometryRules
from tictacfade.engine.match import MatchState


class OpponentPolicy:
    """Stateless move selection. Reads MatchState, never mutates it."""

    EASY_RANDOM_RATE: ClassVar[float] = 0.7
    MEDIUM_WIN_RATE: ClassVar[float] = 0.8

    @classmethod
    def positional_order(cls, shape: BoardShape) -> tuple[Position, ...]:
        """
        Positions ranked by how many winning lines pass through them.

        On the compact board this is center, then corners, then edges.
        """
        positions = GeometryRules.positions(shape)
        return tuple(
            sorted(positions, key=lambda p: -len(GeometryRules.lines_through(p, shape)))
        )

    @classmethod
    def positional_move(cls, match: MatchState) -> Position | None:
        """First empty cell in positional preference order."""
        for position in cls.positional_order(match.shape):
            if match.cell(position).is_empty:
                return position
        return None

    @classmethod
    def find_winning_move(cls, match: MatchState, mark: Mark) -> Position | None:
        """
        Find a position that would complete a line for a mark.

        Each candidate is evaluated after the eviction its placement would
        cause, so a line relying on the piece about to vanish does not count.
        """
        for position in match.empty_positions():
            board = match.preview(position, mark)
            for line in GeometryRules.lines_through(position, match.shape):
                if GeometryRules.evaluate(board, line) is mark:
                    return position
        return None

    @classmethod
    def select_move(
        cls,
        match: MatchState,
        self_mark: Mark,
        opponent_mark: Mark,
        difficulty: Difficulty = Difficulty.HARD,
        rng: random.Random | None = None,
    ) -> Position | None:
        """
        Choose a move for ``self_mark``.

        Args:
            match: Current match (read only)
            self_mark: Mark the policy plays
            opponent_mark: Mark to block
            difficulty: Policy tier
            rng: Random source for the non-deterministic tiers

        Returns:
            An empty position, or None only when the board has none
        """
        empty = match.empty_positions()
        if not empty:
            return None
        rng = rng or random.Random()

        if difficulty is Difficulty.EASY:
            if rng.random() < cls.EASY_RANDOM_RATE:
                return rng.choice(empty)
            return cls.positional_move(match)

        if difficulty is Difficulty.MEDIUM:
            block = cls.find_winning_move(match, opponent_mark)
            if block is not None:
                return block
            win = cls.find_winning_move(match, self_mark)
            if win is not None and rng.random() < cls.MEDIUM_WIN_RATE:
                return win
            return cls.positional_move(match)

        win = cls.find_winning_move(match, self_mark)
        if win is not None:
            return win
        block = cls.find_winning_move(match, opponent_mark)
        if block is not None:
            return block
        return cls.positional_move(match)

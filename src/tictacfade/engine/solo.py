"""
Tic-Tac-Fade - Solo Match Controller

Plays a human against OpponentPolicy on a local MatchState. The network
layer is not involved: the policy's moves go straight into the match.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from tictacfade.engine.base import Difficulty, Mark, MatchConfig, PlaceResult, Position
from tictacfade.engine.match import MatchState
from tictacfade.engine.opponent import OpponentPolicy
from tictacfade.ui.interfaces import (
    CueTrigger,
    NullCues,
    NullSurface,
    RenderSurface,
    present_placement,
)

if TYPE_CHECKING:
    from tictacfade.ui.fade import EvictionFadeScheduler


class SoloMatch:
    """Human (X) versus the heuristic opponent (O)."""

    HUMAN: Mark = Mark.X
    COMPUTER: Mark = Mark.O

    def __init__(
        self,
        config: MatchConfig | None = None,
        difficulty: Difficulty = Difficulty.HARD,
        *,
        surface: RenderSurface | None = None,
        cues: CueTrigger | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.match = MatchState(config)
        self.difficulty = difficulty
        self.surface = surface or NullSurface()
        self.cues = cues or NullCues()
        self.fades: EvictionFadeScheduler | None = None
        self._rng = rng or random.Random()

    def attach_fades(self, fades: EvictionFadeScheduler) -> None:
        """Animate evictions. Without a running event loop the animation is skipped."""
        self.fades = fades

    def play(self, position: Position) -> list[PlaceResult]:
        """
        Apply the human move, then the computer's reply.

        Input on the computer's turn or on an illegal cell is ignored.

        Returns:
            Results of the successful placements (empty if ignored)
        """
        results: list[PlaceResult] = []
        human = self._apply(position, self.HUMAN)
        if human is None:
            return results
        results.append(human)

        if not human.is_win:
            reply = self.computer_move()
            if reply is not None:
                results.append(reply)
        return results

    def computer_move(self) -> PlaceResult | None:
        """Ask the policy for a move and apply it, if it is the computer's turn."""
        if self.match.current_turn is not self.COMPUTER:
            return None
        choice = OpponentPolicy.select_move(
            self.match, self.COMPUTER, self.HUMAN, self.difficulty, self._rng
        )
        if choice is None:
            return None
        return self._apply(choice, self.COMPUTER)

    def reset(self) -> None:
        if self.fades is not None:
            self.fades.cancel_all()
        self.match.reset()
        self.surface.render(self.match.snapshot())

    def _apply(self, position: Position, mark: Mark) -> PlaceResult | None:
        result = self.match.place(position, by=mark)
        if not result.ok:
            return None

        present_placement(result, self.match, self.surface, self.cues, self.fades)
        return result

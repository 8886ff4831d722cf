"""
Tests for the solo match controller.
"""

from unittest.mock import MagicMock

from tictacfade.engine.base import Difficulty, Mark, MatchConfig, Phase
from tictacfade.engine.solo import SoloMatch
from tictacfade.ui.interfaces import CueKind


class TestSoloMatch:
    """Tests for human versus computer play."""

    def test_human_move_gets_reply(self, surface, cues):
        solo = SoloMatch(surface=surface, cues=cues)
        results = solo.play((1, 1))

        assert len(results) == 2
        assert results[0].placed.occupant is Mark.X
        assert results[1].placed.occupant is Mark.O
        assert results[1].placed.position == (0, 0)
        assert solo.match.current_turn is Mark.X
        assert cues.kinds == [CueKind.PLACE, CueKind.PLACE]
        assert len(surface.snapshots) == 2

    def test_illegal_move_ignored(self, surface):
        solo = SoloMatch(surface=surface)
        solo.play((1, 1))
        rendered = len(surface.snapshots)

        assert solo.play((1, 1)) == []
        assert solo.play((5, 5)) == []
        assert len(surface.snapshots) == rendered

    def test_computer_blocks(self):
        solo = SoloMatch(MatchConfig(capacity=8), Difficulty.HARD)
        solo.play((0, 0))   # O takes center
        results = solo.play((0, 1))
        assert results[1].placed.position == (0, 2)

    def test_human_win_skips_reply(self, cues):
        solo = SoloMatch(MatchConfig(capacity=8), cues=cues)
        solo.match.place((0, 0))
        solo.match.place((1, 1))
        solo.match.place((0, 1))
        solo.match.place((2, 2))

        results = solo.play((0, 2))

        assert len(results) == 1
        assert results[0].winner is Mark.X
        assert solo.match.phase is Phase.ENDED
        assert cues.kinds[-1] is CueKind.WIN

    def test_computer_move_only_on_its_turn(self):
        solo = SoloMatch()
        assert solo.computer_move() is None
        assert solo.match.moves_played == 0

    def test_uses_given_rng(self):
        rng = MagicMock()
        rng.random.return_value = 0.0
        rng.choice.return_value = (2, 2)
        solo = SoloMatch(difficulty=Difficulty.EASY, rng=rng)
        results = solo.play((1, 1))
        assert results[1].placed.position == (2, 2)

    def test_reset_cancels_fades(self, surface):
        solo = SoloMatch(surface=surface)
        fades = MagicMock()
        solo.attach_fades(fades)
        solo.play((1, 1))

        solo.reset()

        fades.cancel_all.assert_called_once()
        assert solo.match.moves_played == 0
        assert surface.snapshots[-1].occupied == ()

    def test_eviction_scheduled_on_fades(self):
        solo = SoloMatch(MatchConfig(capacity=2))
        fades = MagicMock()
        solo.attach_fades(fades)
        solo.play((1, 1))
        solo.play((2, 1))

        fades.schedule.assert_any_call((1, 1))

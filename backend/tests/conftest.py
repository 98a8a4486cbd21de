import os
import sys
from typing import Optional, Sequence

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from golfbets.models import Hole, Player, PlayerScore

# A typical par 72 layout and its stroke index.
PARS = [4, 4, 3, 5, 4, 4, 3, 4, 5, 4, 3, 4, 5, 4, 4, 3, 5, 4]
HANDICAP_RANKS = [7, 15, 1, 11, 3, 17, 5, 13, 9, 8, 16, 2, 12, 4, 18, 6, 14, 10]


def build_holes() -> list[Hole]:
    return [
        Hole(hole_number=number, par=par, handicap_rank=rank)
        for number, (par, rank) in enumerate(zip(PARS, HANDICAP_RANKS), start=1)
    ]


def build_player(
    player_id: str,
    strokes: Sequence[Optional[int]] = (),
    *,
    handicap: Optional[float] = None,
    putts: Sequence[Optional[int]] = (),
) -> Player:
    """Build a player whose ``strokes[i]``/``putts[i]`` belong to hole ``i + 1``.

    ``None`` entries (and anything past the end of both lists) are unplayed.
    """

    scores = []
    for hole in range(1, 19):
        s = strokes[hole - 1] if hole <= len(strokes) else None
        p = putts[hole - 1] if hole <= len(putts) else None
        if s is None and p is None:
            continue
        scores.append(PlayerScore(hole_number=hole, strokes=s, putts=p))
    return Player(id=player_id, course_handicap=handicap, scores=scores)


@pytest.fixture()
def holes() -> list[Hole]:
    return build_holes()


@pytest.fixture()
def make_player():
    return build_player

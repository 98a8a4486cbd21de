import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from golfbets.games.handicap import (
    NetScoreCard,
    course_handicap,
    min_handicap,
    stableford_points,
    strokes_given,
)
from golfbets.models import Hole


@pytest.mark.parametrize(
    "player, floor, rank, expected",
    [
        (10, 0, 10, 1),
        (10, 0, 11, 0),
        (20, 0, 2, 2),
        (20, 0, 3, 1),
        (12, 12, 1, 0),
        (None, None, 1, 0),
        (5, None, 5, 1),
    ],
    ids=[
        "rank-inside-diff",
        "rank-outside-diff",
        "second-stroke",
        "one-stroke-past-18",
        "same-handicap",
        "no-handicaps",
        "missing-floor-is-scratch",
    ],
)
def test_strokes_given(player, floor, rank, expected):
    assert strokes_given(player, floor, rank) == expected


@pytest.mark.parametrize(
    "net, par, points",
    [(7, 4, 0), (6, 4, 0), (5, 4, 1), (4, 4, 2), (3, 4, 3), (2, 4, 4), (1, 4, 5), (1, 5, 5)],
)
def test_stableford_points_table(net, par, points):
    assert stableford_points(net, par) == points


def test_missing_course_handicap_plays_off_scratch(make_player):
    player = make_player("a", [4])
    assert course_handicap(player) == 0
    assert min_handicap([player, make_player("b", handicap=8)]) == 0
    assert min_handicap([]) == 0


def test_strokes_come_off_the_lowest_handicap_in_the_field(make_player, holes):
    low = make_player("low", [5] * 18, handicap=10)
    high = make_player("high", [5] * 18, handicap=12)
    card = NetScoreCard([low, high], holes)

    # Hole 3 is stroke index 1 and hole 12 stroke index 2.
    assert card.net("high", 3) == 4
    assert card.net("high", 12) == 4
    assert card.net("high", 1) == 5
    assert card.net("low", 3) == 5


def test_unplayed_holes_have_no_net_score(make_player, holes):
    card = NetScoreCard([make_player("a", [4, None, 5])], holes)
    assert card.nets(1) == {"a": 4}
    assert card.net("a", 2) is None
    assert card.complete(3) is True
    assert card.complete(4) is False
    assert card.gross("nobody", 1) is None


def test_par_defaults_to_four_without_hole_data(make_player):
    card = NetScoreCard([make_player("a", [3])], [])
    assert card.par(1) == 4
    assert card.net("a", 1) == 3


def test_rejects_duplicate_holes(make_player):
    holes = [
        Hole(hole_number=1, par=4, handicap_rank=1),
        Hole(hole_number=1, par=4, handicap_rank=2),
    ]
    with pytest.raises(ValueError, match="hole 1 is listed more than once"):
        NetScoreCard([make_player("a")], holes)


def test_rejects_duplicate_handicap_ranks(make_player):
    holes = [
        Hole(hole_number=1, par=4, handicap_rank=3),
        Hole(hole_number=2, par=4, handicap_rank=3),
    ]
    with pytest.raises(ValueError, match="handicap rank 3"):
        NetScoreCard([make_player("a")], holes)


def test_rejects_duplicate_players(make_player, holes):
    with pytest.raises(ValueError, match="listed more than once"):
        NetScoreCard([make_player("a"), make_player("a")], holes)

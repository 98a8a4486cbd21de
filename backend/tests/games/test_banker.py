import pytest

from golfbets.games import banker
from golfbets.models import BankerConfig, BankerDecision
from golfbets.schemas import GameErrorOut


def _money(result):
    return {s.user_id: s.money for s in result.standings}


def test_banker_rotates_through_the_field(make_player, holes):
    players = [
        make_player("a", [3, 4, 4]),
        make_player("b", [4, 5, 4]),
        make_player("c", [4, 4, 5]),
    ]
    result = banker.calculate(players, holes, BankerConfig(bet_amount=2))

    assert [h.banker_user_id for h in result.holes[:4]] == ["a", "b", "c", "a"]
    # a banks and wins hole 1, b banks and loses hole 2, c banks and loses hole 3.
    assert [h.banker_won for h in result.holes[:3]] == [True, False, False]
    assert _money(result) == {"a": 8, "b": -4, "c": -4}
    assert sum(_money(result).values()) == 0


def test_decision_overrides_rotation(make_player, holes):
    players = [make_player(pid, [score]) for pid, score in zip("abc", [4, 4, 3])]
    config = BankerConfig(
        bet_amount=1, decisions=[BankerDecision(hole_number=1, banker_user_id="c")]
    )
    result = banker.calculate(players, holes, config)
    assert result.holes[0].banker_user_id == "c"
    assert _money(result) == {"c": 2, "a": -1, "b": -1}


def test_tie_with_the_best_other_score_moves_nothing(make_player, holes):
    players = [make_player(pid, [score]) for pid, score in zip("abc", [4, 4, 5])]
    result = banker.calculate(players, holes, BankerConfig(bet_amount=1))
    assert result.holes[0].banker_won is None
    assert set(_money(result).values()) == {0}


def test_unknown_banker_is_rejected(make_player, holes):
    players = [make_player(pid, [4]) for pid in "abc"]
    config = BankerConfig(decisions=[BankerDecision(hole_number=1, banker_user_id="zed")])
    with pytest.raises(ValueError, match="not playing"):
        banker.calculate(players, holes, config)


def test_player_counts(make_player, holes):
    result = banker.calculate([make_player("a"), make_player("b")], holes, BankerConfig())
    assert isinstance(result, GameErrorOut)
    assert result.error == "Banker requires 3-16 players"

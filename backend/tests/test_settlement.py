import pytest

from golfbets.exceptions import SettlementImbalance
from golfbets.games import nassau
from golfbets.models import NassauConfig, SettlementEdge
from golfbets.schemas import GameErrorOut, StandingOut
from golfbets.services.settlement import (
    consolidate_settlements,
    debts_for_result,
    debts_from_standings,
    net_balances,
    to_cents,
    verify_balanced,
)


def edge(src, dst, amount):
    return SettlementEdge(from_user_id=src, to_user_id=dst, amount=amount)


def _triples(edges):
    return [(e.from_user_id, e.to_user_id, e.amount) for e in edges]


def test_opposite_debts_cancel():
    payments = consolidate_settlements([edge("a", "b", 10), edge("b", "a", 4)])
    assert _triples(payments) == [("a", "b", 6)]


def test_chains_collapse_to_a_direct_payment():
    payments = consolidate_settlements([edge("a", "b", 10), edge("b", "c", 10)])
    assert _triples(payments) == [("a", "c", 10)]


def test_fully_offsetting_debts_need_no_payments():
    assert consolidate_settlements([edge("a", "b", 5), edge("b", "a", 5)]) == []
    assert consolidate_settlements([]) == []


def test_largest_balances_matched_first_with_stable_ties():
    raw = [edge("b", "c", 5), edge("a", "c", 5), edge("d", "e", 1)]
    assert _triples(consolidate_settlements(raw)) == [
        ("a", "c", 5),
        ("b", "c", 5),
        ("d", "e", 1),
    ]


def test_consolidation_preserves_balances_in_cents():
    raw = [
        edge("a", "b", 0.1),
        edge("a", "b", 0.2),
        edge("b", "c", 12.345),
        edge("c", "a", 3.33),
        edge("d", "a", 7),
    ]
    payments = consolidate_settlements(raw)
    assert net_balances(payments) == net_balances(raw)
    pairs = {frozenset((p.from_user_id, p.to_user_id)) for p in payments}
    assert len(pairs) == len(payments)
    assert all(p.amount > 0 for p in payments)


def test_cents_round_half_up():
    assert to_cents(0.125) == 13
    assert to_cents(12.345) == 1235
    assert to_cents(10) == 1000


def test_unbalanced_books_raise():
    with pytest.raises(SettlementImbalance) as exc:
        verify_balanced({"a": 500, "b": -450})
    assert exc.value.residual_cents == 50
    assert exc.value.status_code == 500


def test_losers_pay_winners_in_proportion():
    standings = [
        StandingOut(user_id="a", money=30),
        StandingOut(user_id="b", money=10),
        StandingOut(user_id="c", money=-20),
        StandingOut(user_id="d", money=-20),
    ]
    assert _triples(debts_from_standings(standings)) == [
        ("c", "a", 15),
        ("c", "b", 5),
        ("d", "a", 15),
        ("d", "b", 5),
    ]


def test_proportional_split_keeps_every_cent():
    standings = [
        StandingOut(user_id="a", money=1 / 3),
        StandingOut(user_id="b", money=1 / 3),
        StandingOut(user_id="c", money=1 / 3),
        StandingOut(user_id="d", money=-1),
    ]
    assert _triples(debts_from_standings(standings)) == [
        ("d", "a", 0.34),
        ("d", "b", 0.33),
        ("d", "c", 0.33),
    ]


def test_standings_that_do_not_net_to_zero_raise():
    standings = [StandingOut(user_id="a", money=10), StandingOut(user_id="b", money=-4)]
    with pytest.raises(SettlementImbalance):
        debts_from_standings(standings)


def test_nobody_lost_means_no_debts():
    standings = [StandingOut(user_id="a", money=0), StandingOut(user_id="b", money=0)]
    assert debts_from_standings(standings) == []


def test_match_games_settle_with_their_own_edges(make_player, holes):
    a = make_player("a", [3] + [4] * 17)
    b = make_player("b", [4] * 18)
    result = nassau.calculate([a, b], holes, NassauConfig(bet_amount=5))
    assert debts_for_result(result) == result.settlements
    assert debts_for_result(GameErrorOut(game="WOLF", error="nope")) == []

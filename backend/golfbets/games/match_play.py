"""Head-to-head match play over 18 holes, with presses."""

import logging
from typing import List, Sequence, Union

from ..models import HOLE_NUMBERS, Hole, MatchPlayConfig, Player, SettlementEdge
from ..schemas import GameErrorOut, MatchHoleOut, MatchPlayerOut, MatchPlayOut
from .handicap import NetScoreCard
from .match import hole_outcomes, lead_text, leader, standings_from_edges, tally
from .press import (
    auto_presses,
    press_opening,
    root_press_starts,
    score_presses,
    validate_presses,
)

logger = logging.getLogger(__name__)

SEGMENTS = ("MATCH",)


def _result_text(state: str, t, holes_played: int) -> str:
    if holes_played == 0:
        return "No scores yet"
    if state == "HALVED":
        return "HALVED"
    if state == "WON":
        if t.holes_remaining > 0:
            return f"{t.margin} & {t.holes_remaining}"
        return f"{t.margin} UP"
    return f"{lead_text(t.p1_up)} thru {t.last_hole_played}"


def calculate(
    players: Sequence[Player], holes: Sequence[Hole], config: MatchPlayConfig
) -> Union[MatchPlayOut, GameErrorOut]:
    bet = config.bet_amount
    if len(players) > 2:
        return GameErrorOut(
            game="MATCH_PLAY", error="Match Play requires exactly 2 players"
        )
    if len(players) < 2:
        return MatchPlayOut(
            bet_amount=bet, status="Need 2 players", result_text="Need 2 players"
        )

    card = NetScoreCard(players, holes)
    p1, p2 = card.player_ids
    outcomes = hole_outcomes(card, p1, p2)

    hole_results: List[MatchHoleOut] = []
    for hole in HOLE_NUMBERS:
        p1_net = card.net(p1, hole)
        p2_net = card.net(p2, hole)
        winner = None
        if outcomes.get(hole) == 1:
            winner = p1
        elif outcomes.get(hole) == -1:
            winner = p2
        if hole not in outcomes:
            p1_net = p2_net = None
        hole_results.append(
            MatchHoleOut(hole=hole, p1_net=p1_net, p2_net=p2_net, winner_id=winner)
        )

    t = tally(outcomes, 1, 18)
    decided = t.holes_played > 0 and (t.closed_out or t.finished)
    state = "IN_PROGRESS"
    if decided:
        state = "HALVED" if t.p1_up == 0 else "WON"
    winner_id, loser_id = leader(t, p1, p2) if state == "WON" else (None, None)

    configured = list(config.presses)
    validate_presses(configured, SEGMENTS, resolve_parents=False)
    generated = (
        auto_presses(outcomes, SEGMENTS, configured, p1, p2) if config.is_auto_press else []
    )
    arena = validate_presses(configured + generated, SEGMENTS)
    press_results, press_edges = score_presses(
        arena,
        outcomes,
        p1,
        p2,
        bet,
        settle_when_decided=True,
        auto_ids=[p.id for p in generated],
    )

    edges: List[SettlementEdge] = []
    if winner_id and bet > 0:
        edges.append(
            SettlementEdge(from_user_id=loser_id, to_user_id=winner_id, amount=bet)
        )
    edges.extend(press_edges)

    opening = None if decided else press_opening(t, root_press_starts(arena, "MATCH"))
    money = {s.user_id: s.money for s in standings_from_edges([p1, p2], edges)}
    logger.debug("Match play %s vs %s: %s", p1, p2, state)

    return MatchPlayOut(
        bet_amount=bet,
        state=state,
        status=lead_text(t.p1_up),
        result_text=_result_text(state, t, t.holes_played),
        winner_id=winner_id,
        p1_up=t.p1_up,
        holes_played=t.holes_played,
        holes_remaining=t.holes_remaining,
        can_press=opening is not None,
        press_start_hole=opening,
        holes=hole_results,
        presses=press_results,
        standings=[
            MatchPlayerOut(user_id=p1, status=lead_text(t.p1_up), money=money[p1]),
            MatchPlayerOut(user_id=p2, status=lead_text(-t.p1_up), money=money[p2]),
        ],
        settlements=edges,
    )

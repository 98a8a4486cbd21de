"""Banker: one player per hole takes on the rest of the field."""

import logging
from typing import Dict, List, Sequence, Union

from ..models import HOLE_NUMBERS, BankerConfig, BankerDecision, Hole, Player
from ..schemas import BankerHoleOut, BankerOut, GameErrorOut, StandingOut
from .handicap import NetScoreCard

logger = logging.getLogger(__name__)

MIN_PLAYERS = 3
MAX_PLAYERS = 16


def banker_for_hole(
    player_ids: Sequence[str], hole_number: int, decisions: Dict[int, BankerDecision]
) -> str:
    decision = decisions.get(hole_number)
    if decision is not None:
        return decision.banker_user_id
    return player_ids[(hole_number - 1) % len(player_ids)]


def _index_decisions(
    decisions: Sequence[BankerDecision], player_ids: Sequence[str]
) -> Dict[int, BankerDecision]:
    by_hole: Dict[int, BankerDecision] = {}
    for decision in decisions:
        if decision.hole_number in by_hole:
            raise ValueError(f"more than one banker for hole {decision.hole_number}")
        if decision.banker_user_id not in player_ids:
            raise ValueError(
                f"hole {decision.hole_number}: banker {decision.banker_user_id!r} is not playing"
            )
        by_hole[decision.hole_number] = decision
    return by_hole


def calculate(
    players: Sequence[Player], holes: Sequence[Hole], config: BankerConfig
) -> Union[BankerOut, GameErrorOut]:
    bet = config.bet_amount
    if not players:
        return BankerOut(bet_amount=bet)
    if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
        return GameErrorOut(game="BANKER", error="Banker requires 3-16 players")

    card = NetScoreCard(players, holes)
    player_ids = card.player_ids
    decisions = _index_decisions(config.decisions, player_ids)
    money: Dict[str, float] = {pid: 0 for pid in player_ids}
    results: List[BankerHoleOut] = []

    for hole in HOLE_NUMBERS:
        banker = banker_for_hole(player_ids, hole, decisions)
        nets = card.nets(hole)
        if any(n is None for n in nets.values()):
            results.append(BankerHoleOut(hole=hole, banker_user_id=banker))
            continue
        others = [pid for pid in player_ids if pid != banker]
        best_other = min(nets[pid] for pid in others)
        banker_won = None
        if nets[banker] != best_other:
            banker_won = nets[banker] < best_other
            sign = 1 if banker_won else -1
            for pid in others:
                money[pid] -= sign * bet
                money[banker] += sign * bet
        results.append(
            BankerHoleOut(
                hole=hole,
                banker_user_id=banker,
                banker_won=banker_won,
                banker_net=nets[banker],
                best_other_net=best_other,
            )
        )

    standings = sorted(
        (StandingOut(user_id=pid, money=m) for pid, m in money.items()),
        key=lambda s: s.money,
        reverse=True,
    )
    logger.debug("Banker: %d explicit bankers", len(decisions))
    return BankerOut(bet_amount=bet, holes=results, standings=standings)

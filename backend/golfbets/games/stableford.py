"""Stableford points game. Playable solo; money is measured against the field average."""

import logging
from typing import Dict, List, Sequence, Union

from ..models import FRONT_NINE, HOLE_NUMBERS, Hole, Player, StablefordConfig
from ..schemas import (
    GameErrorOut,
    SplitStandingOut,
    StablefordHoleOut,
    StablefordOut,
    StablefordScoreOut,
)
from .handicap import NetScoreCard, stableford_points

logger = logging.getLogger(__name__)

MAX_PLAYERS = 16


def calculate(
    players: Sequence[Player], holes: Sequence[Hole], config: StablefordConfig
) -> Union[StablefordOut, GameErrorOut]:
    bet = config.bet_amount
    if not players:
        return StablefordOut(bet_amount=bet)
    if len(players) > MAX_PLAYERS:
        return GameErrorOut(game="STABLEFORD", error="Stableford requires 1-16 players")

    card = NetScoreCard(players, holes)
    front: Dict[str, int] = {pid: 0 for pid in card.player_ids}
    back: Dict[str, int] = {pid: 0 for pid in card.player_ids}
    results: List[StablefordHoleOut] = []

    for hole in HOLE_NUMBERS:
        par = card.par(hole)
        bucket = front if hole in FRONT_NINE else back
        scores = []
        for pid in card.player_ids:
            net = card.net(pid, hole)
            points = stableford_points(net, par) if net is not None else 0
            bucket[pid] += points
            scores.append(
                StablefordScoreOut(
                    user_id=pid, gross=card.gross(pid, hole), net=net, points=points
                )
            )
        results.append(StablefordHoleOut(hole=hole, par=par, scores=scores))

    total = {pid: front[pid] + back[pid] for pid in card.player_ids}
    average = sum(total.values()) / len(total)
    standings = sorted(
        (
            SplitStandingOut(
                user_id=pid,
                front=front[pid],
                back=back[pid],
                total=total[pid],
                money=(total[pid] - average) * bet,
            )
            for pid in card.player_ids
        ),
        key=lambda s: s.total,
        reverse=True,
    )
    logger.debug("Stableford: %d players, field average %.2f", len(total), average)
    return StablefordOut(bet_amount=bet, holes=results, standings=standings)

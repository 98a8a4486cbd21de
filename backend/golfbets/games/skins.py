"""Skins: the single lowest net score on a hole wins the pot.

Tied holes carry the hole's bet forward. The round is a fold over holes
1..18 with the carryover as the accumulator, so the result depends only on
the scores handed in.
"""

import logging
from collections import Counter, defaultdict
from functools import reduce
from typing import Dict, List, Sequence, Tuple, Union

from ..models import HOLE_NUMBERS, Hole, Player, SkinsConfig
from ..schemas import GameErrorOut, SkinOut, SkinsOut, SkinsStandingOut
from .handicap import NetScoreCard

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2
MAX_PLAYERS = 16

_Acc = Tuple[float, List[SkinOut]]


def calculate(
    players: Sequence[Player], holes: Sequence[Hole], config: SkinsConfig
) -> Union[SkinsOut, GameErrorOut]:
    bet = config.bet_amount
    if not players:
        return SkinsOut(bet_amount=bet)
    if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
        return GameErrorOut(game="SKINS", error="Skins requires 2-16 players")

    card = NetScoreCard(players, holes)

    def play_hole(acc: _Acc, hole: int) -> _Acc:
        carryover, skins = acc
        nets = card.nets(hole)
        if any(n is None for n in nets.values()):
            return carryover, skins + [SkinOut(hole=hole, carried=carryover, skipped=True)]
        low = min(nets.values())
        lowest = [pid for pid, n in nets.items() if n == low]
        if len(lowest) > 1:
            return carryover + bet, skins + [SkinOut(hole=hole, carried=carryover)]
        value = bet + carryover
        return 0, skins + [
            SkinOut(hole=hole, winner_id=lowest[0], value=value, carried=carryover)
        ]

    carryover, skins = reduce(play_hole, HOLE_NUMBERS, (0, []))

    won: Dict[str, float] = defaultdict(float)
    count: Counter = Counter()
    for skin in skins:
        if skin.winner_id is not None:
            won[skin.winner_id] += skin.value
            count[skin.winner_id] += 1

    total_pot = sum(won.values())
    share = total_pot / len(players)
    standings = [
        SkinsStandingOut(
            user_id=pid,
            skins=count[pid],
            won=won[pid],
            money=won[pid] - share,
        )
        for pid in card.player_ids
    ]
    standings.sort(key=lambda s: (s.skins, s.won), reverse=True)

    holes_compared = sum(1 for s in skins if not s.skipped)
    logger.debug(
        "Skins: %d holes compared, pot %.2f, carryover %.2f",
        holes_compared,
        total_pot,
        carryover,
    )
    return SkinsOut(
        bet_amount=bet,
        skins=skins,
        total_pot=total_pot,
        carryover=carryover,
        holes_compared=holes_compared,
        standings=standings,
    )

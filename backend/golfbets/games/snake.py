"""Snake: the last player to three-putt holds the snake and pays everyone."""

import logging
from collections import Counter
from functools import reduce
from typing import List, Optional, Sequence, Tuple, Union

from ..models import HOLE_NUMBERS, Hole, Player, SnakeConfig
from ..schemas import GameErrorOut, SnakeOut, SnakeStandingOut, ThreePuttOut

logger = logging.getLogger(__name__)

THREE_PUTT = 3
MIN_PLAYERS = 2
MAX_PLAYERS = 16

_Acc = Tuple[Optional[str], List[ThreePuttOut]]


def calculate(
    players: Sequence[Player], holes: Sequence[Hole], config: SnakeConfig
) -> Union[SnakeOut, GameErrorOut]:
    # Par and stroke index play no part; only putts matter.
    bet = config.bet_amount
    if not players:
        return SnakeOut(bet_amount=bet)
    if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
        return GameErrorOut(game="SNAKE", error="Snake requires 2-16 players")

    def play_hole(acc: _Acc, hole: int) -> _Acc:
        holder, history = acc
        for player in players:
            putts = player.putts_on(hole)
            if putts is not None and putts >= THREE_PUTT:
                holder = player.id
                history = history + [ThreePuttOut(hole=hole, user_id=player.id, putts=putts)]
        return holder, history

    holder, history = reduce(play_hole, HOLE_NUMBERS, (None, []))

    three_putts = Counter(entry.user_id for entry in history)
    others = len(players) - 1
    standings = []
    for player in players:
        if holder is None:
            money = 0.0
        elif player.id == holder:
            money = -bet * others
        else:
            money = bet
        standings.append(
            SnakeStandingOut(
                user_id=player.id,
                three_putts=three_putts[player.id],
                holds_snake=player.id == holder,
                money=money,
            )
        )
    standings.sort(key=lambda s: s.money, reverse=True)
    logger.debug("Snake: holder %s after %d three-putts", holder, len(history))
    return SnakeOut(
        bet_amount=bet,
        snake_holder=holder,
        three_putt_history=history,
        standings=standings,
    )

"""Run configured games against a round's players and settle the results."""

import logging
from typing import Callable, Dict, List, Sequence

from ..exceptions import UnsupportedGameType
from ..games import (
    banker,
    bingo_bango_bongo,
    match_play,
    nassau,
    nines,
    skins,
    snake,
    stableford,
    vegas,
    wolf,
)
from ..models import GameConfig, Hole, Player, SettlementEdge
from ..schemas import GameErrorOut, GameResult, RoundSettlementOut
from .settlement import consolidate_settlements, debts_for_result, net_balances

logger = logging.getLogger(__name__)

CALCULATORS: Dict[str, Callable[..., GameResult]] = {
    "NASSAU": nassau.calculate,
    "SKINS": skins.calculate,
    "MATCH_PLAY": match_play.calculate,
    "WOLF": wolf.calculate,
    "NINES": nines.calculate,
    "STABLEFORD": stableford.calculate,
    "SNAKE": snake.calculate,
    "VEGAS": vegas.calculate,
    "BANKER": banker.calculate,
    "BINGO_BANGO_BONGO": bingo_bango_bongo.calculate,
}


def select_participants(
    players: Sequence[Player], participant_ids: Sequence[str] | None
) -> List[Player]:
    """Return the round's players taking part in a game, in round order."""

    if participant_ids is None:
        return list(players)
    wanted = set(participant_ids)
    return [p for p in players if p.id in wanted]


def calculate_game(
    players: Sequence[Player], holes: Sequence[Hole], config: GameConfig
) -> GameResult:
    calculator = CALCULATORS.get(config.type)
    if calculator is None:
        raise UnsupportedGameType(config.type)
    field = select_participants(players, config.participant_ids)
    result = calculator(field, holes, config)
    if isinstance(result, GameErrorOut):
        logger.info("%s not calculated: %s", config.type, result.error)
    else:
        logger.debug("%s calculated for %d players", config.type, len(field))
    return result


def settle_round(
    players: Sequence[Player], holes: Sequence[Hole], games: Sequence[GameConfig]
) -> RoundSettlementOut:
    """Calculate every game, pool the raw debts and consolidate them.

    Games that cannot be played as configured are reported in ``results``
    and contribute no debts.
    """

    results: List[GameResult] = []
    raw: List[SettlementEdge] = []
    for config in games:
        result = calculate_game(players, holes, config)
        results.append(result)
        if isinstance(result, GameErrorOut):
            logger.warning("Skipping %s in settlement: %s", result.game, result.error)
            continue
        raw.extend(debts_for_result(result))

    payments = consolidate_settlements(raw)
    logger.info(
        "Settled %d games: %d raw debts consolidated into %d payments",
        len(games),
        len(raw),
        len(payments),
    )
    return RoundSettlementOut(
        results=results,
        raw_settlements=raw,
        payments=payments,
        net_by_player=net_balances(raw),
    )

"""Nines: nine points per hole, split by net-score rank."""

import logging
from fractions import Fraction
from itertools import groupby
from typing import Dict, List, Optional, Sequence, Union

from .. import config as settings
from ..models import FRONT_NINE, HOLE_NUMBERS, Hole, NinesConfig, Player
from ..schemas import GameErrorOut, NinesHoleOut, NinesOut, NinesStandingOut, RankedScoreOut
from .handicap import NetScoreCard

logger = logging.getLogger(__name__)

POINTS_PER_HOLE = 9
THREE_PLAYER_POINTS = (5, 3, 1)


def points_table_for(
    player_count: int, override: Optional[Sequence[float]] = None
) -> List[Fraction]:
    """Return the per-rank points table for a field of ``player_count``.

    ``override`` replaces the default table. Any table must have one entry per
    player, be non-negative and non-increasing, and sum to nine.
    """

    if override is not None:
        table = list(override)
    elif player_count == 3:
        table = list(THREE_PLAYER_POINTS)
    else:
        table = list(settings.NINES_FOUR_PLAYER_POINTS)

    if len(table) != player_count:
        raise ValueError(
            f"nines points table needs {player_count} entries, got {len(table)}"
        )
    points = [Fraction(p).limit_denominator() for p in table]
    if any(p < 0 for p in points):
        raise ValueError("nines points cannot be negative")
    if any(a < b for a, b in zip(points, points[1:])):
        raise ValueError("nines points must not increase with rank")
    if sum(points) != POINTS_PER_HOLE:
        raise ValueError(f"nines points table must sum to {POINTS_PER_HOLE}")
    return points


def split_points(nets: Dict[str, int], table: Sequence[Fraction]) -> Dict[str, Fraction]:
    """Award ``table`` by rank; tied players share the points of the ranks they span."""

    ranked = sorted(nets.items(), key=lambda item: item[1])
    awarded: Dict[str, Fraction] = {}
    rank = 0
    for _, group in groupby(ranked, key=lambda item: item[1]):
        tied = [pid for pid, _ in group]
        share = sum(table[rank : rank + len(tied)], Fraction(0)) / len(tied)
        for pid in tied:
            awarded[pid] = share
        rank += len(tied)
    return awarded


def _money(points: Dict[str, Fraction], bet: float) -> Dict[str, float]:
    if not points:
        return {}
    average = sum(points.values(), Fraction(0)) / len(points)
    return {pid: float((p - average) * Fraction(bet)) for pid, p in points.items()}


def calculate(
    players: Sequence[Player], holes: Sequence[Hole], config: NinesConfig
) -> Union[NinesOut, GameErrorOut]:
    bet = config.bet_amount
    if not players:
        return NinesOut(bet_amount=bet)
    if not 3 <= len(players) <= 4:
        return GameErrorOut(game="NINES", error="Nines requires 3-4 players")

    table = points_table_for(len(players), config.points_table)
    card = NetScoreCard(players, holes)
    front = {pid: Fraction(0) for pid in card.player_ids}
    back = {pid: Fraction(0) for pid in card.player_ids}
    results: List[NinesHoleOut] = []

    for hole in HOLE_NUMBERS:
        nets = card.nets(hole)
        if any(n is None for n in nets.values()):
            results.append(
                NinesHoleOut(
                    hole=hole,
                    scores=[RankedScoreOut(user_id=pid, net_score=n) for pid, n in nets.items()],
                )
            )
            continue
        awarded = split_points(nets, table)
        bucket = front if hole in FRONT_NINE else back
        for pid, p in awarded.items():
            bucket[pid] += p
        results.append(
            NinesHoleOut(
                hole=hole,
                complete=True,
                scores=[
                    RankedScoreOut(user_id=pid, net_score=nets[pid], points=float(awarded[pid]))
                    for pid in card.player_ids
                ],
            )
        )

    total = {pid: front[pid] + back[pid] for pid in card.player_ids}
    front_money = _money(front, bet)
    back_money = _money(back, bet)
    money = _money(total, bet)
    standings = sorted(
        (
            NinesStandingOut(
                user_id=pid,
                front=float(front[pid]),
                back=float(back[pid]),
                total=float(total[pid]),
                front_money=front_money[pid],
                back_money=back_money[pid],
                money=money[pid],
            )
            for pid in card.player_ids
        ),
        key=lambda s: s.total,
        reverse=True,
    )
    logger.debug("Nines: %d complete holes", sum(1 for r in results if r.complete))
    return NinesOut(
        bet_amount=bet,
        points_table=[float(p) for p in table],
        holes=results,
        standings=standings,
    )

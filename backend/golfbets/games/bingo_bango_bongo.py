"""Bingo Bango Bongo: three points a hole for first on, closest and first in."""

import logging
from typing import Dict, List, Sequence, Union

from ..models import HOLE_NUMBERS, BingoBangoBongoAward, BingoBangoBongoConfig, Hole, Player
from ..schemas import (
    BingoBangoBongoHoleOut,
    BingoBangoBongoOut,
    BingoBangoBongoStandingOut,
    GameErrorOut,
)

logger = logging.getLogger(__name__)

MIN_PLAYERS = 3
MAX_PLAYERS = 16
AWARDS = ("bingo", "bango", "bongo")


def calculate(
    players: Sequence[Player], holes: Sequence[Hole], config: BingoBangoBongoConfig
) -> Union[BingoBangoBongoOut, GameErrorOut]:
    bet = config.bet_amount
    if not players:
        return BingoBangoBongoOut(bet_amount=bet)
    if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
        return GameErrorOut(
            game="BINGO_BANGO_BONGO", error="Bingo Bango Bongo requires 3-16 players"
        )

    player_ids = [p.id for p in players]
    by_hole: Dict[int, BingoBangoBongoAward] = {}
    for award in config.awards:
        if award.hole_number in by_hole:
            raise ValueError(f"more than one award entry for hole {award.hole_number}")
        by_hole[award.hole_number] = award

    tallies: Dict[str, Dict[str, int]] = {
        pid: {name: 0 for name in AWARDS} for pid in player_ids
    }
    results: List[BingoBangoBongoHoleOut] = []
    for hole in HOLE_NUMBERS:
        award = by_hole.get(hole)
        if award is None:
            continue
        winners = {}
        for name in AWARDS:
            pid = getattr(award, f"{name}_user_id")
            # Points to someone outside this game are dropped.
            if pid in tallies:
                tallies[pid][name] += 1
                winners[f"{name}_user_id"] = pid
        results.append(BingoBangoBongoHoleOut(hole=hole, **winners))

    totals = {pid: sum(t.values()) for pid, t in tallies.items()}
    average = sum(totals.values()) / len(totals)
    standings = sorted(
        (
            BingoBangoBongoStandingOut(
                user_id=pid,
                total=totals[pid],
                money=(totals[pid] - average) * bet,
                **tallies[pid],
            )
            for pid in player_ids
        ),
        key=lambda s: s.total,
        reverse=True,
    )
    logger.debug("Bingo Bango Bongo: %d points awarded", sum(totals.values()))
    return BingoBangoBongoOut(bet_amount=bet, holes=results, standings=standings)

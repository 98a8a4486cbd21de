"""Wolf scoring engine.

Four players take turns as the wolf. Before the hole the wolf either picks
a partner or goes alone against the other three. Each side's best net score
decides the hole.
"""

import logging
from fractions import Fraction
from typing import Dict, List, Optional, Sequence, Union

from ..models import HOLE_NUMBERS, Hole, Player, WolfConfig, WolfDecision
from ..schemas import GameErrorOut, WolfHoleOut, WolfOut, WolfStandingOut
from .handicap import NetScoreCard

logger = logging.getLogger(__name__)

PLAYERS = 4
LONE_WOLF_OPPONENTS = PLAYERS - 1


def wolf_for_hole(
    player_ids: Sequence[str], hole_number: int, rotation: Optional[Sequence[str]] = None
) -> str:
    """Return the player expected to be the wolf on ``hole_number``."""

    order = rotation or player_ids
    return order[(hole_number - 1) % len(order)]


def _index_decisions(
    decisions: Sequence[WolfDecision], player_ids: Sequence[str]
) -> Dict[int, WolfDecision]:
    members = set(player_ids)
    by_hole: Dict[int, WolfDecision] = {}
    for decision in decisions:
        if decision.hole_number in by_hole:
            raise ValueError(f"more than one wolf decision for hole {decision.hole_number}")
        if decision.wolf_user_id not in members:
            raise ValueError(
                f"hole {decision.hole_number}: wolf {decision.wolf_user_id!r} is not playing"
            )
        partner = decision.partner_user_id
        if partner is not None and (partner not in members or partner == decision.wolf_user_id):
            raise ValueError(
                f"hole {decision.hole_number}: partner {partner!r} must be one of the other players"
            )
        by_hole[decision.hole_number] = decision
    return by_hole


def _check_rotation(rotation: Optional[Sequence[str]], player_ids: Sequence[str]) -> None:
    if rotation is None:
        return
    if sorted(rotation) != sorted(player_ids):
        raise ValueError("wolf rotation must list each player exactly once")


def calculate(
    players: Sequence[Player], holes: Sequence[Hole], config: WolfConfig
) -> Union[WolfOut, GameErrorOut]:
    bet = config.bet_amount
    if not players:
        return WolfOut(bet_amount=bet)
    if len(players) != PLAYERS:
        return GameErrorOut(game="WOLF", error="Wolf requires exactly 4 players")

    card = NetScoreCard(players, holes)
    player_ids = card.player_ids
    _check_rotation(config.rotation, player_ids)
    decisions = _index_decisions(config.decisions, player_ids)
    points: Dict[str, Fraction] = {pid: Fraction(0) for pid in player_ids}
    results: List[WolfHoleOut] = []

    for hole in HOLE_NUMBERS:
        decision = decisions.get(hole)
        expected = wolf_for_hole(player_ids, hole, config.rotation)
        if decision is not None and decision.wolf_user_id != expected:
            raise ValueError(
                f"hole {hole}: the wolf is {expected!r}, not {decision.wolf_user_id!r}"
            )
        nets = card.nets(hole)
        if any(n is None for n in nets.values()):
            results.append(WolfHoleOut(hole=hole, wolf_user_id=expected))
            continue
        if decision is None:
            raise ValueError(f"hole {hole} is fully scored but has no wolf decision")

        wolf_side = [decision.wolf_user_id]
        if decision.partner_user_id is not None:
            wolf_side.append(decision.partner_user_id)
        pack = [pid for pid in player_ids if pid not in wolf_side]
        wolf_best = min(nets[pid] for pid in wolf_side)
        pack_best = min(nets[pid] for pid in pack)

        # Each member of the pack wins or loses the stake.
        stake = Fraction(bet)
        if decision.is_blind:
            stake = Fraction(bet) * Fraction(config.blind_multiplier) / LONE_WOLF_OPPONENTS
        winner = None
        if wolf_best < pack_best:
            winner = "wolf"
        elif pack_best < wolf_best:
            winner = "pack"

        if winner is not None:
            sign = 1 if winner == "wolf" else -1
            if decision.is_lone_wolf:
                points[decision.wolf_user_id] += sign * stake * LONE_WOLF_OPPONENTS
            else:
                for pid in wolf_side:
                    points[pid] += sign * stake * len(pack) / len(wolf_side)
            for pid in pack:
                points[pid] -= sign * stake

        results.append(
            WolfHoleOut(
                hole=hole,
                wolf_user_id=decision.wolf_user_id,
                partner_user_id=decision.partner_user_id,
                is_lone_wolf=decision.is_lone_wolf,
                is_blind=decision.is_blind,
                wolf_team_score=wolf_best,
                other_team_score=pack_best,
                winner=winner,
                stake=float(stake),
            )
        )

    standings = sorted(
        (
            WolfStandingOut(user_id=pid, points=float(p), money=float(p))
            for pid, p in points.items()
        ),
        key=lambda s: s.points,
        reverse=True,
    )
    logger.debug("Wolf: %d decisions applied", len(decisions))
    return WolfOut(bet_amount=bet, holes=results, standings=standings)

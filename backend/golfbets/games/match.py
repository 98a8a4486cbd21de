"""Hole-by-hole match play tally shared by Nassau, Match Play and presses."""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models import HOLE_NUMBERS, SettlementEdge
from ..schemas import StandingOut
from .handicap import NetScoreCard


@dataclass(frozen=True)
class Tally:
    """Running state of a two-player match over ``[start_hole, end_hole]``."""

    start_hole: int
    end_hole: int
    p1_up: int = 0
    holes_played: int = 0
    last_hole_played: int = 0

    @property
    def holes_remaining(self) -> int:
        return (self.end_hole - self.start_hole + 1) - self.holes_played

    @property
    def margin(self) -> int:
        return abs(self.p1_up)

    @property
    def closed_out(self) -> bool:
        return self.margin > self.holes_remaining

    @property
    def finished(self) -> bool:
        return self.holes_remaining == 0


def hole_outcomes(card: NetScoreCard, p1_id: str, p2_id: str) -> Dict[int, int]:
    """Map each hole both players have scored to +1 (p1 won), -1 or 0."""

    outcomes: Dict[int, int] = {}
    for hole in HOLE_NUMBERS:
        p1_net = card.net(p1_id, hole)
        p2_net = card.net(p2_id, hole)
        if p1_net is None or p2_net is None:
            continue
        if p1_net < p2_net:
            outcomes[hole] = 1
        elif p2_net < p1_net:
            outcomes[hole] = -1
        else:
            outcomes[hole] = 0
    return outcomes


def tally(outcomes: Dict[int, int], start_hole: int, end_hole: int) -> Tally:
    played = [h for h in range(start_hole, end_hole + 1) if h in outcomes]
    return Tally(
        start_hole=start_hole,
        end_hole=end_hole,
        p1_up=sum(outcomes[h] for h in played),
        holes_played=len(played),
        last_hole_played=played[-1] if played else start_hole - 1,
    )


def leader(t: Tally, p1_id: str, p2_id: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(winner_id, loser_id)`` for the current state, or ``(None, None)``."""

    if t.p1_up > 0:
        return p1_id, p2_id
    if t.p1_up < 0:
        return p2_id, p1_id
    return None, None


def lead_text(p1_up: int) -> str:
    if p1_up == 0:
        return "AS"
    return f"{abs(p1_up)} {'UP' if p1_up > 0 else 'DOWN'}"


def status_text(t: Tally) -> str:
    if t.holes_played == 0:
        return "No scores yet"
    if t.holes_remaining > 0:
        return f"{lead_text(t.p1_up)} ({t.holes_remaining} to play)"
    return "TIED" if t.p1_up == 0 else lead_text(t.p1_up)


def tally_fields(t: Tally, p1_id: str, p2_id: str) -> dict:
    winner_id, loser_id = leader(t, p1_id, p2_id)
    return {
        "start_hole": t.start_hole,
        "end_hole": t.end_hole,
        "winner_id": winner_id,
        "loser_id": loser_id,
        "margin": t.margin,
        "p1_up": t.p1_up,
        "holes_played": t.holes_played,
        "holes_remaining": t.holes_remaining,
        "status": status_text(t),
    }


def standings_from_edges(
    player_ids: Sequence[str], edges: Iterable[SettlementEdge]
) -> List[StandingOut]:
    money: Dict[str, float] = defaultdict(float)
    for pid in player_ids:
        money[pid] = 0
    for edge in edges:
        money[edge.to_user_id] += edge.amount
        money[edge.from_user_id] -= edge.amount
    return sorted(
        (StandingOut(user_id=pid, money=amount) for pid, amount in money.items()),
        key=lambda s: s.money,
        reverse=True,
    )

"""Handicap stroke allocation and net scoring shared by every game."""

from typing import Dict, Iterable, List, Optional, Sequence

from ..models import Hole, Player

DEFAULT_PAR = 4
HOLES_PER_ROUND = 18
STABLEFORD_PAR_POINTS = 2
STABLEFORD_MAX_POINTS = 5


def course_handicap(player: Player) -> float:
    # A missing handicap plays off scratch.
    return player.course_handicap or 0


def min_handicap(players: Iterable[Player]) -> float:
    handicaps = [course_handicap(p) for p in players]
    return min(handicaps) if handicaps else 0


def strokes_given(
    player_handicap: Optional[float],
    min_handicap: Optional[float],
    hole_handicap_rank: int,
) -> int:
    """Return the strokes (0, 1 or 2) a player receives on a hole.

    Strokes are allocated off the lowest handicap in the field. A player
    whose differential exceeds 18 gets a second stroke on the hardest
    ``diff - 18`` holes.
    """

    diff = (player_handicap or 0) - (min_handicap or 0)
    if diff <= 0:
        return 0
    strokes = 1 if hole_handicap_rank <= diff else 0
    if diff > HOLES_PER_ROUND and hole_handicap_rank <= diff - HOLES_PER_ROUND:
        strokes += 1
    return strokes


def net_score(gross: int, strokes: int) -> int:
    return gross - strokes


def stableford_points(net: int, par: int) -> int:
    """Points for a net score: 0 for double bogey or worse up to 5 for albatross."""

    return max(0, min(STABLEFORD_MAX_POINTS, par - net + STABLEFORD_PAR_POINTS))


def index_holes(holes: Sequence[Hole]) -> Dict[int, Hole]:
    by_number: Dict[int, Hole] = {}
    ranks: set[int] = set()
    for hole in holes:
        if hole.hole_number in by_number:
            raise ValueError(f"hole {hole.hole_number} is listed more than once")
        if hole.handicap_rank in ranks:
            raise ValueError(
                f"handicap rank {hole.handicap_rank} is used by more than one hole"
            )
        by_number[hole.hole_number] = hole
        ranks.add(hole.handicap_rank)
    return by_number


class NetScoreCard:
    """Net scores for one game's field.

    Strokes are given relative to the lowest course handicap among the
    players handed in, so the same player can receive different strokes in
    two games of the same round.
    """

    def __init__(self, players: Sequence[Player], holes: Sequence[Hole]) -> None:
        self.players: List[Player] = list(players)
        self.holes = index_holes(holes)
        self.min_handicap = min_handicap(self.players)
        self._by_id: Dict[str, Player] = {}
        for player in self.players:
            if player.id in self._by_id:
                raise ValueError(f"player {player.id!r} is listed more than once")
            self._by_id[player.id] = player

    @property
    def player_ids(self) -> List[str]:
        return [p.id for p in self.players]

    def par(self, hole_number: int) -> int:
        hole = self.holes.get(hole_number)
        return hole.par if hole else DEFAULT_PAR

    def strokes(self, player: Player, hole_number: int) -> int:
        hole = self.holes.get(hole_number)
        if hole is None:
            return 0
        return strokes_given(
            course_handicap(player), self.min_handicap, hole.handicap_rank
        )

    def gross(self, player_id: str, hole_number: int) -> Optional[int]:
        player = self._by_id.get(player_id)
        return player.strokes_on(hole_number) if player else None

    def net(self, player_id: str, hole_number: int) -> Optional[int]:
        player = self._by_id.get(player_id)
        if player is None:
            return None
        gross = player.strokes_on(hole_number)
        if gross is None:
            return None
        return net_score(gross, self.strokes(player, hole_number))

    def nets(self, hole_number: int) -> Dict[str, Optional[int]]:
        return {p.id: self.net(p.id, hole_number) for p in self.players}

    def complete(self, hole_number: int) -> bool:
        return all(n is not None for n in self.nets(hole_number).values())

"""Vegas: two teams of two, each hole's net scores read as a two-part number."""

import logging
from typing import Dict, List, Sequence, Union

from ..models import HOLE_NUMBERS, Hole, Player, VegasConfig, VegasTeam
from ..schemas import GameErrorOut, StandingOut, VegasHoleOut, VegasOut, VegasTeamOut
from .handicap import NetScoreCard

logger = logging.getLogger(__name__)

PLAYERS = 4


def team_number(first: int, second: int) -> int:
    """Write the low score then the high score: (5, 4) -> 45, (4, 10) -> 410.

    A double-digit score is written out in full. Some clubs instead count
    it as ``low * 10 + high``, which would make (4, 10) worth 50.
    """

    low, high = sorted((first, second))
    return int(f"{low}{high}")


def _check_teams(teams: Sequence[VegasTeam], player_ids: Sequence[str]) -> str:
    if sorted(t.team_number for t in teams) != [1, 2]:
        return "Vegas requires two teams numbered 1 and 2"
    members = [pid for t in teams for pid in (t.player1_id, t.player2_id)]
    if sorted(members) != sorted(player_ids):
        return "Vegas teams must split the four players into two pairs"
    return ""


def calculate(
    players: Sequence[Player], holes: Sequence[Hole], config: VegasConfig
) -> Union[VegasOut, GameErrorOut]:
    bet = config.bet_amount
    if not players:
        return VegasOut(bet_amount=bet)
    if len(players) != PLAYERS:
        return GameErrorOut(
            game="VEGAS", error="Vegas requires exactly 4 players (2 teams of 2)"
        )
    card = NetScoreCard(players, holes)
    error = _check_teams(config.teams, card.player_ids)
    if error:
        return GameErrorOut(game="VEGAS", error=error)

    team1, team2 = sorted(config.teams, key=lambda t: t.team_number)
    results: List[VegasHoleOut] = []
    team1_swing = 0
    for hole in HOLE_NUMBERS:
        nets = card.nets(hole)
        if any(n is None for n in nets.values()):
            results.append(VegasHoleOut(hole=hole))
            continue
        n1 = team_number(nets[team1.player1_id], nets[team1.player2_id])
        n2 = team_number(nets[team2.player1_id], nets[team2.player2_id])
        team1_swing += n2 - n1
        results.append(
            VegasHoleOut(hole=hole, team1_number=n1, team2_number=n2, swing=n2 - n1)
        )

    team1_money = team1_swing * bet
    teams = [
        VegasTeamOut(
            team_number=1,
            player_ids=[team1.player1_id, team1.player2_id],
            total_swing=team1_swing,
            money=team1_money,
        ),
        VegasTeamOut(
            team_number=2,
            player_ids=[team2.player1_id, team2.player2_id],
            total_swing=-team1_swing,
            money=-team1_money,
        ),
    ]
    money: Dict[str, float] = {}
    for team in teams:
        for pid in team.player_ids:
            money[pid] = team.money / 2
    standings = sorted(
        (StandingOut(user_id=pid, money=money[pid]) for pid in card.player_ids),
        key=lambda s: s.money,
        reverse=True,
    )
    logger.debug("Vegas: team 1 swing %d", team1_swing)
    return VegasOut(bet_amount=bet, holes=results, teams=teams, standings=standings)

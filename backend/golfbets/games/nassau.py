"""Nassau: three two-player match play bets over the front, back and full 18."""

import logging
from typing import List, Sequence, Union

from ..models import Hole, NassauConfig, Player, SettlementEdge
from ..schemas import GameErrorOut, NassauOut, SegmentOut
from .handicap import NetScoreCard
from .match import hole_outcomes, standings_from_edges, tally, tally_fields
from .press import (
    auto_presses,
    press_opening,
    root_press_starts,
    score_presses,
    segment_window,
    validate_presses,
)

logger = logging.getLogger(__name__)

SEGMENTS = ("FRONT", "BACK", "OVERALL")
NEED_PLAYERS = "Need 2 players"


def _waiting_segment(segment: str) -> SegmentOut:
    start, end = segment_window(segment)
    return SegmentOut(
        segment=segment,
        start_hole=start,
        end_hole=end,
        holes_remaining=end - start + 1,
        status=NEED_PLAYERS,
    )


def calculate(
    players: Sequence[Player], holes: Sequence[Hole], config: NassauConfig
) -> Union[NassauOut, GameErrorOut]:
    bet = config.bet_amount
    if len(players) > 2:
        return GameErrorOut(game="NASSAU", error="Nassau requires exactly 2 players")
    if len(players) < 2:
        return NassauOut(
            bet_amount=bet,
            front=_waiting_segment("FRONT"),
            back=_waiting_segment("BACK"),
            overall=_waiting_segment("OVERALL"),
        )

    card = NetScoreCard(players, holes)
    p1, p2 = card.player_ids
    outcomes = hole_outcomes(card, p1, p2)

    configured = list(config.presses)
    validate_presses(configured, SEGMENTS, resolve_parents=False)
    generated = (
        auto_presses(outcomes, SEGMENTS, configured, p1, p2) if config.is_auto_press else []
    )
    arena = validate_presses(configured + generated, SEGMENTS)

    edges: List[SettlementEdge] = []
    segments = {}
    for segment in SEGMENTS:
        start, end = segment_window(segment)
        t = tally(outcomes, start, end)
        fields = tally_fields(t, p1, p2)
        opening = press_opening(t, root_press_starts(arena, segment))
        money = bet if fields["winner_id"] else 0
        segments[segment] = SegmentOut(
            **fields,
            segment=segment,
            money=money,
            can_press=opening is not None,
            press_start_hole=opening,
        )
        if money > 0:
            edges.append(
                SettlementEdge(
                    from_user_id=fields["loser_id"],
                    to_user_id=fields["winner_id"],
                    amount=money,
                )
            )

    press_results, press_edges = score_presses(
        arena,
        outcomes,
        p1,
        p2,
        bet,
        settle_when_decided=False,
        auto_ids=[p.id for p in generated],
    )
    edges.extend(press_edges)
    logger.debug(
        "Nassau %s vs %s: %d holes compared, %d presses",
        p1,
        p2,
        len(outcomes),
        len(press_results),
    )

    return NassauOut(
        bet_amount=bet,
        front=segments["FRONT"],
        back=segments["BACK"],
        overall=segments["OVERALL"],
        presses=press_results,
        standings=standings_from_edges([p1, p2], edges),
        settlements=edges,
    )

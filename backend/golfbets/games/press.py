"""Press sub-engine for Nassau and Match Play.

A press is a new bet opened when one side falls two holes behind. It is
scored exactly like its parent match, but only over ``[start_hole,
segment_end]``. Presses may themselves be pressed, so the configured list
forms a forest linked through ``parent_press_id``; it is kept as a flat
arena keyed by press id.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models import Press, SettlementEdge
from ..schemas import PressOut
from .match import Tally, tally, tally_fields

SEGMENT_WINDOWS: Dict[str, Tuple[int, int]] = {
    "FRONT": (1, 9),
    "BACK": (10, 18),
    "OVERALL": (1, 18),
    "MATCH": (1, 18),
}
SEGMENT_ORDER = ("FRONT", "BACK", "OVERALL", "MATCH")
PRESS_THRESHOLD = 2
AUTO_PREFIX = "auto"


def segment_window(segment: str) -> Tuple[int, int]:
    try:
        return SEGMENT_WINDOWS[segment]
    except KeyError:
        raise ValueError(f"unknown press segment {segment!r}") from None


def validate_presses(
    presses: Sequence[Press],
    allowed_segments: Iterable[str],
    *,
    resolve_parents: bool = True,
) -> Dict[str, Press]:
    """Check the press forest and return it as an arena keyed by id.

    Raises ``ValueError`` for duplicate ids, two presses opened under the
    same parent on the same segment and hole, segments the game does not
    have, and start holes outside the segment. With ``resolve_parents`` it
    also rejects unknown or mismatched parents, children starting before
    their parent, and parent cycles. Turn it off to check caller presses
    whose parents may be auto presses that have not been generated yet.
    """

    allowed = set(allowed_segments)
    arena: Dict[str, Press] = {}
    opened: Dict[Tuple[Optional[str], str, int], str] = {}
    for press in presses:
        if press.id in arena:
            raise ValueError(f"press {press.id!r} is listed more than once")
        if press.segment not in allowed:
            raise ValueError(
                f"press {press.id!r} uses segment {press.segment}; "
                f"must be one of: {', '.join(s for s in SEGMENT_ORDER if s in allowed)}"
            )
        start, end = segment_window(press.segment)
        if not start <= press.start_hole <= end:
            raise ValueError(
                f"{press.segment.title()} press {press.id!r} must start on holes {start}-{end}"
            )
        key = (press.parent_press_id, press.segment, press.start_hole)
        if key in opened:
            raise ValueError(
                f"press {press.id!r} duplicates {opened[key]!r}: a press already exists "
                f"for {press.segment} starting at hole {press.start_hole}"
            )
        opened[key] = press.id
        arena[press.id] = press

    if not resolve_parents:
        return arena

    for press in arena.values():
        if press.parent_press_id is None:
            continue
        parent = arena.get(press.parent_press_id)
        if parent is None:
            raise ValueError(
                f"press {press.id!r} refers to unknown parent {press.parent_press_id!r}"
            )
        if parent.segment != press.segment:
            raise ValueError(
                f"press {press.id!r} and its parent {parent.id!r} are on different segments"
            )
        if press.start_hole < parent.start_hole:
            raise ValueError(
                f"press {press.id!r} starts before its parent {parent.id!r}"
            )

    for press in arena.values():
        seen = {press.id}
        node = press
        while node.parent_press_id is not None:
            node = arena[node.parent_press_id]
            if node.id in seen:
                raise ValueError(f"press {press.id!r} is part of a parent cycle")
            seen.add(node.id)

    return arena


def press_opening(t: Tally, child_starts: Iterable[int]) -> Optional[int]:
    """Return the hole a new press would start on, or ``None`` if not allowed.

    A side must be at least two down with holes left in the window, and no
    press under the same parent may already cover the next hole.
    """

    if t.margin < PRESS_THRESHOLD or t.holes_remaining <= 0:
        return None
    next_hole = t.last_hole_played + 1
    if next_hole > t.end_hole:
        return None
    if any(start >= t.last_hole_played for start in child_starts):
        return None
    return next_hole


def _auto_id(segment: str, parent_id: Optional[str], start_hole: int) -> str:
    if parent_id is None:
        return f"{AUTO_PREFIX}:{segment}:{start_hole}"
    return f"{parent_id}>{start_hole}"


def _auto_presses_for(
    outcomes: Dict[int, int],
    segment: str,
    parent_id: Optional[str],
    start_hole: int,
    taken: Dict[Tuple[Optional[str], str, int], str],
    p1_id: str,
    p2_id: str,
) -> List[Press]:
    _, end_hole = segment_window(segment)
    generated: List[Press] = []
    p1_up = 0
    for hole in range(start_hole, end_hole + 1):
        if hole not in outcomes:
            continue
        before = abs(p1_up)
        p1_up += outcomes[hole]
        # Fire on the crossing only, not on every hole spent two down.
        if not before < PRESS_THRESHOLD <= abs(p1_up) or hole >= end_hole:
            continue
        key = (parent_id, segment, hole + 1)
        if key in taken:
            continue
        press = Press(
            id=_auto_id(segment, parent_id, hole + 1),
            parent_press_id=parent_id,
            segment=segment,
            start_hole=hole + 1,
            initiated_by=p2_id if p1_up > 0 else p1_id,
        )
        taken[key] = press.id
        generated.append(press)
        generated.extend(
            _auto_presses_for(
                outcomes, segment, press.id, press.start_hole, taken, p1_id, p2_id
            )
        )
    return generated


def auto_presses(
    outcomes: Dict[int, int],
    segments: Sequence[str],
    configured: Sequence[Press],
    p1_id: str,
    p2_id: str,
) -> List[Press]:
    """Generate the presses an auto-press game opens on its own.

    Every segment and every configured press gets a new child press the
    hole after its running margin reaches two, and each generated press is
    in turn auto-pressed. A press already configured with the same parent,
    segment and start hole is not generated twice.
    """

    taken = {(p.parent_press_id, p.segment, p.start_hole): p.id for p in configured}
    generated: List[Press] = []
    for segment in segments:
        start, _ = segment_window(segment)
        generated.extend(
            _auto_presses_for(outcomes, segment, None, start, taken, p1_id, p2_id)
        )
    for press in configured:
        generated.extend(
            _auto_presses_for(
                outcomes, press.segment, press.id, press.start_hole, taken, p1_id, p2_id
            )
        )
    return generated


def _depth_first(arena: Dict[str, Press]) -> List[Tuple[Press, int]]:
    children: Dict[Optional[str], List[Press]] = defaultdict(list)
    for press in arena.values():
        children[press.parent_press_id].append(press)
    for siblings in children.values():
        siblings.sort(key=lambda p: (SEGMENT_ORDER.index(p.segment), p.start_hole, p.id))

    ordered: List[Tuple[Press, int]] = []
    stack = [(p, 0) for p in reversed(children[None])]
    while stack:
        press, depth = stack.pop()
        ordered.append((press, depth))
        stack.extend((c, depth + 1) for c in reversed(children[press.id]))
    return ordered


def _initiator_result(
    press: Press, winner_id: Optional[str], settled: bool
) -> Optional[str]:
    """WON, LOST or PUSHED as seen by the player who opened the press."""

    if press.initiated_by is None or not settled:
        return None
    if winner_id is None:
        return "PUSHED"
    return "WON" if winner_id == press.initiated_by else "LOST"


def score_presses(
    arena: Dict[str, Press],
    outcomes: Dict[int, int],
    p1_id: str,
    p2_id: str,
    bet_amount: float,
    *,
    settle_when_decided: bool,
    auto_ids: Iterable[str] = (),
) -> Tuple[List[PressOut], List[SettlementEdge]]:
    """Score every press in the arena and return results plus raw debts.

    Each press pays ``bet_amount * bet_multiplier`` to the leader of its own
    window. With ``settle_when_decided`` (Match Play) a press pays only once
    it is closed out or its window is finished; otherwise (Nassau) the
    current leader is paid, like the parent segment.
    """

    auto = set(auto_ids)
    child_starts: Dict[str, List[int]] = defaultdict(list)
    for press in arena.values():
        if press.parent_press_id is not None:
            child_starts[press.parent_press_id].append(press.start_hole)

    results: List[PressOut] = []
    edges: List[SettlementEdge] = []
    for press, depth in _depth_first(arena):
        _, end_hole = segment_window(press.segment)
        t = tally(outcomes, press.start_hole, end_hole)
        fields = tally_fields(t, p1_id, p2_id)
        amount = bet_amount * press.bet_multiplier
        decided = t.holes_played > 0 and (t.finished or t.closed_out)
        pays = fields["winner_id"] is not None and (decided or not settle_when_decided)
        money_awarded = amount if pays else 0
        opening = None if (settle_when_decided and decided) else press_opening(
            t, child_starts[press.id]
        )
        settled = t.holes_played > 0 and (decided or not settle_when_decided)
        results.append(
            PressOut(
                **fields,
                id=press.id,
                parent_press_id=press.parent_press_id,
                segment=press.segment,
                bet_multiplier=press.bet_multiplier,
                amount=amount,
                depth=depth,
                is_auto=press.id in auto,
                initiated_by=press.initiated_by,
                decided=decided,
                money_awarded=money_awarded,
                initiator_result=_initiator_result(press, fields["winner_id"], settled),
                can_press=opening is not None,
                press_start_hole=opening,
            )
        )
        if money_awarded > 0:
            edges.append(
                SettlementEdge(
                    from_user_id=fields["loser_id"],
                    to_user_id=fields["winner_id"],
                    amount=money_awarded,
                )
            )
    return results, edges


def root_press_starts(arena: Dict[str, Press], segment: str) -> List[int]:
    return [
        p.start_hole
        for p in arena.values()
        if p.segment == segment and p.parent_press_id is None
    ]

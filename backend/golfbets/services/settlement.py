"""Turn per-game results into debts and collapse debts into payments.

All arithmetic happens in integer cents so balances net to exactly zero.
"""

import logging
from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Sequence

from ..exceptions import SettlementImbalance
from ..models import SettlementEdge
from ..schemas import GameErrorOut, GameResult, StandingOut

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def to_cents(amount: float) -> int:
    return int(Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP) * 100)


def from_cents(cents: int) -> float:
    return float(Decimal(cents) / 100)


def balances_in_cents(edges: Iterable[SettlementEdge]) -> Dict[str, int]:
    balances: Dict[str, int] = defaultdict(int)
    for edge in edges:
        cents = to_cents(edge.amount)
        balances[edge.to_user_id] += cents
        balances[edge.from_user_id] -= cents
    return dict(balances)


def verify_balanced(balances: Dict[str, int]) -> None:
    residual = sum(balances.values())
    if residual != 0:
        logger.error("Settlement balances are off by %d cents: %s", residual, balances)
        raise SettlementImbalance(residual)


def net_balances(edges: Iterable[SettlementEdge]) -> Dict[str, float]:
    return {pid: from_cents(c) for pid, c in balances_in_cents(edges).items()}


def consolidate_settlements(edges: Iterable[SettlementEdge]) -> List[SettlementEdge]:
    """Collapse raw debts into the fewest direct payments the greedy match finds.

    The largest creditor is paired with the largest debtor until every
    balance is zero. Ties go to the lower user id so the output is stable.
    """

    balances = balances_in_cents(edges)
    verify_balanced(balances)

    creditors = {pid: c for pid, c in balances.items() if c > 0}
    debtors = {pid: -c for pid, c in balances.items() if c < 0}
    payments: List[SettlementEdge] = []
    while creditors and debtors:
        creditor = min(creditors, key=lambda pid: (-creditors[pid], pid))
        debtor = min(debtors, key=lambda pid: (-debtors[pid], pid))
        cents = min(creditors[creditor], debtors[debtor])
        payments.append(
            SettlementEdge(
                from_user_id=debtor, to_user_id=creditor, amount=from_cents(cents)
            )
        )
        creditors[creditor] -= cents
        debtors[debtor] -= cents
        if creditors[creditor] == 0:
            del creditors[creditor]
        if debtors[debtor] == 0:
            del debtors[debtor]
    return payments


def _split_cents(total: int, weights: Dict[str, int]) -> Dict[str, int]:
    """Split ``total`` cents in proportion to ``weights`` by largest remainder."""

    weight_sum = sum(weights.values())
    shares = {pid: total * w // weight_sum for pid, w in weights.items()}
    leftover = total - sum(shares.values())
    by_remainder = sorted(weights, key=lambda pid: (-(total * weights[pid] % weight_sum), pid))
    for pid in by_remainder[:leftover]:
        shares[pid] += 1
    return shares


def debts_from_standings(standings: Sequence[StandingOut]) -> List[SettlementEdge]:
    """Every loser pays every winner in proportion to that winner's share of the winnings."""

    cents = {s.user_id: to_cents(s.money) for s in standings}
    winners = {pid: c for pid, c in cents.items() if c > 0}
    losers = {pid: -c for pid, c in cents.items() if c < 0}
    drift = sum(cents.values())
    # Each standing may round by half a cent; anything more is a calculator bug.
    if abs(drift) > len(standings):
        raise SettlementImbalance(drift)
    if not winners or not losers:
        return []

    edges: List[SettlementEdge] = []
    for loser in sorted(losers):
        for winner, share in sorted(_split_cents(losers[loser], winners).items()):
            if share > 0:
                edges.append(
                    SettlementEdge(
                        from_user_id=loser, to_user_id=winner, amount=from_cents(share)
                    )
                )
    return edges


def debts_for_result(result: GameResult) -> List[SettlementEdge]:
    """Raw debts for one game result.

    Nassau and Match Play report explicit per-bet settlements. Every other
    game settles off its money standings.
    """

    if isinstance(result, GameErrorOut):
        return []
    explicit = getattr(result, "settlements", None)
    if explicit is not None:
        return list(explicit)
    return debts_from_standings(result.standings)

"""Services around the calculators (pure helpers, no I/O)."""

from .validation import ValidationError, validate_bet_amount, validate_participants_for_game
from .settlement import consolidate_settlements, debts_for_result, net_balances
from .rounds import calculate_game, select_participants, settle_round

__all__ = [
    "ValidationError",
    "validate_bet_amount",
    "validate_participants_for_game",
    "consolidate_settlements",
    "debts_for_result",
    "net_balances",
    "calculate_game",
    "select_participants",
    "settle_round",
]

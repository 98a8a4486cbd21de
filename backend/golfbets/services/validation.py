from typing import Any, Optional, Sequence

from .. import config as settings


class ValidationError(Exception):
    """Raised when a game setup fails a caller-side precondition."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


GAME_PLAYER_RULES: dict[str, dict[str, object]] = {
    "NASSAU": {
        "min": 2,
        "max": 2,
        "message": "Nassau requires exactly 2 players (head-to-head match play)",
    },
    "MATCH_PLAY": {
        "min": 2,
        "max": 2,
        "message": "Match Play requires exactly 2 players",
    },
    "SKINS": {"min": 2, "max": 16, "message": "Skins requires 2-16 players"},
    "WOLF": {"min": 4, "max": 4, "message": "Wolf requires exactly 4 players"},
    "NINES": {"min": 3, "max": 4, "message": "Nines requires 3-4 players"},
    "STABLEFORD": {"min": 1, "max": 16, "message": "Stableford requires 1-16 players"},
    "SNAKE": {"min": 2, "max": 16, "message": "Snake requires 2-16 players"},
    "VEGAS": {
        "min": 4,
        "max": 4,
        "message": "Vegas requires exactly 4 players (2 teams of 2)",
    },
    "BANKER": {"min": 3, "max": 16, "message": "Banker requires 3-16 players"},
    "BINGO_BANGO_BONGO": {
        "min": 3,
        "max": 16,
        "message": "Bingo Bango Bongo requires 3-16 players",
    },
}


def _game_label(game_type: str) -> str:
    return game_type.replace("_", " ").title() or "Game"


def validate_participants_for_game(
    game_type: str,
    participant_ids: Sequence[str],
    round_player_ids: Optional[Sequence[str]] = None,
) -> None:
    """Check the player count for ``game_type`` and that everyone is in the round.

    Unknown game types are not checked here; dispatch rejects them.
    """

    if len(set(participant_ids)) != len(participant_ids):
        raise ValidationError(
            f"{_game_label(game_type)} participants must not repeat a player."
        )
    if round_player_ids is not None:
        outsiders = [pid for pid in participant_ids if pid not in set(round_player_ids)]
        if outsiders:
            raise ValidationError(
                f"{_game_label(game_type)} participants are not in this round: "
                f"{', '.join(outsiders)}."
            )

    rules = GAME_PLAYER_RULES.get(game_type)
    if not rules:
        return
    count = len(participant_ids)
    min_players = rules.get("min")
    max_players = rules.get("max")
    if isinstance(min_players, int) and count < min_players:
        raise ValidationError(str(rules["message"]))
    if isinstance(max_players, int) and count > max_players:
        raise ValidationError(str(rules["message"]))


def validate_bet_amount(amount: Any, *, max_amount: Optional[float] = None) -> float:
    """Return ``amount`` as a float if it is a bet the service accepts.

    Rules:
    - Must be a number (booleans are rejected)
    - Must be >= 0
    - Must be <= ``max_amount`` (``MAX_BET_AMOUNT`` when not given)
    """

    if max_amount is None:
        max_amount = settings.MAX_BET_AMOUNT

    # Reject booleans explicitly (bool is a subclass of int in Python)
    if isinstance(amount, bool):
        raise ValidationError("Bet amount must be a number (not a boolean).")
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise ValidationError("Bet amount must be a number.")

    if value != value:
        raise ValidationError("Bet amount must be a number.")
    if value < 0:
        raise ValidationError("Bet amount must be >= 0.")
    if value > max_amount:
        raise ValidationError(f"Bet amount must be <= {max_amount:g}.")
    return value

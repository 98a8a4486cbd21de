import logging
from typing import Sequence

from fastapi import APIRouter

from ..exceptions import http_problem
from ..models import GameConfig, Player
from ..schemas import CalculateGameRequest, SettleRoundRequest
from ..services.rounds import calculate_game, settle_round
from ..services.validation import (
    ValidationError,
    validate_bet_amount,
    validate_participants_for_game,
)

router = APIRouter(prefix="/games", tags=["games"])
logger = logging.getLogger(__name__)


def _check_game_setup(players: Sequence[Player], game: GameConfig) -> None:
    round_ids = [p.id for p in players]
    participant_ids = game.participant_ids if game.participant_ids is not None else round_ids
    try:
        validate_participants_for_game(game.type, participant_ids, round_ids)
        validate_bet_amount(game.bet_amount)
    except ValidationError as exc:
        logger.warning("Rejected %s setup: %s", game.type, exc.detail)
        raise http_problem(
            status_code=400,
            detail=str(exc),
            code="game_invalid_setup",
        )


def _invalid_game_data(exc: ValueError):
    logger.warning("Invalid game data: %s", exc)
    return http_problem(
        status_code=422,
        detail=str(exc),
        code="invalid_game_data",
    )


# POST /api/v0/games/calculate
@router.post("/calculate")
def calculate(body: CalculateGameRequest):
    _check_game_setup(body.players, body.game)
    try:
        return calculate_game(body.players, body.holes, body.game)
    except ValueError as exc:
        raise _invalid_game_data(exc)


# POST /api/v0/games/settle
@router.post("/settle")
def settle(body: SettleRoundRequest):
    for game in body.games:
        _check_game_setup(body.players, game)
    try:
        return settle_round(body.players, body.holes, body.games)
    except ValueError as exc:
        raise _invalid_game_data(exc)

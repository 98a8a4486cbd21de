import pytest

from golfbets import config as settings
from golfbets.services.validation import (
    GAME_PLAYER_RULES,
    ValidationError,
    validate_bet_amount,
    validate_participants_for_game,
)


@pytest.mark.parametrize(
    "game_type, count",
    [
        ("NASSAU", 2),
        ("MATCH_PLAY", 2),
        ("SKINS", 16),
        ("WOLF", 4),
        ("NINES", 3),
        ("STABLEFORD", 1),
        ("SNAKE", 2),
        ("VEGAS", 4),
        ("BANKER", 3),
        ("BINGO_BANGO_BONGO", 16),
    ],
)
def test_accepts_valid_player_counts(game_type, count) -> None:
    validate_participants_for_game(game_type, [f"p{i}" for i in range(count)])


@pytest.mark.parametrize(
    "game_type, count, msg",
    [
        ("NASSAU", 3, "Nassau requires exactly 2 players (head-to-head match play)"),
        ("MATCH_PLAY", 1, "Match Play requires exactly 2 players"),
        ("SKINS", 17, "Skins requires 2-16 players"),
        ("WOLF", 5, "Wolf requires exactly 4 players"),
        ("NINES", 2, "Nines requires 3-4 players"),
        ("STABLEFORD", 0, "Stableford requires 1-16 players"),
        ("VEGAS", 3, "Vegas requires exactly 4 players (2 teams of 2)"),
    ],
    ids=["nassau", "match-play", "skins", "wolf", "nines", "stableford", "vegas"],
)
def test_rejects_bad_player_counts(game_type, count, msg) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_participants_for_game(game_type, [f"p{i}" for i in range(count)])
    assert exc.value.detail == msg


def test_every_game_type_has_a_rule() -> None:
    assert set(GAME_PLAYER_RULES) == {
        "NASSAU",
        "MATCH_PLAY",
        "SKINS",
        "WOLF",
        "NINES",
        "STABLEFORD",
        "SNAKE",
        "VEGAS",
        "BANKER",
        "BINGO_BANGO_BONGO",
    }


def test_participants_must_be_in_the_round() -> None:
    with pytest.raises(ValidationError, match="not in this round: zed"):
        validate_participants_for_game("SKINS", ["a", "zed"], ["a", "b"])


def test_participants_must_not_repeat() -> None:
    with pytest.raises(ValidationError, match="must not repeat"):
        validate_participants_for_game("SKINS", ["a", "a"])


@pytest.mark.parametrize("amount", [0, 5, 2.5, "10", 1000])
def test_accepts_valid_bets(amount) -> None:
    assert validate_bet_amount(amount) == float(amount)


@pytest.mark.parametrize(
    "amount, msg",
    [
        (-1, ">= 0"),
        (1000.01, "<= 1000"),
        (True, "not a boolean"),
        ("ten", "must be a number"),
        (None, "must be a number"),
        (float("nan"), "must be a number"),
    ],
    ids=["negative", "above-max", "boolean", "text", "missing", "nan"],
)
def test_rejects_invalid_bets(amount, msg) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_bet_amount(amount)
    assert msg.lower() in str(exc.value).lower()


def test_bet_ceiling_comes_from_config(monkeypatch) -> None:
    monkeypatch.setattr(settings, "MAX_BET_AMOUNT", 50.0)
    with pytest.raises(ValidationError, match="<= 50"):
        validate_bet_amount(51)
    assert validate_bet_amount(60, max_amount=100) == 60

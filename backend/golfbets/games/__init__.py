"""Calculators for the golf side games."""

from . import (
    banker,
    bingo_bango_bongo,
    match_play,
    nassau,
    nines,
    skins,
    snake,
    stableford,
    vegas,
    wolf,
)

__all__ = [
    "banker",
    "bingo_bango_bongo",
    "match_play",
    "nassau",
    "nines",
    "skins",
    "snake",
    "stableford",
    "vegas",
    "wolf",
]

import logging
import os

logger = logging.getLogger(__name__)


def _canon_prefix(val):
    """
    Normalize API prefix to always be exactly like '/api':
      - defaults to '/api' when unset/empty
      - ensures a single leading slash
      - removes any trailing slash (except for root)
    """
    val = (val or "/api").strip()
    if not val.startswith("/"):
        val = "/" + val
    if len(val) > 1 and val.endswith("/"):
        val = val[:-1]
    return val


def _parse_amount(env_var: str, default: float) -> float:
    raw_value = os.getenv(env_var)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        value = float(raw_value)
    except ValueError:
        logger.warning(
            "%s is not a valid number (got %r); defaulting to %.2f",
            env_var,
            raw_value,
            default,
        )
        return default
    if value < 0:
        logger.warning("%s cannot be negative; defaulting to %.2f", env_var, default)
        return default
    return value


def _parse_points_table(env_var: str, default: list[float]) -> list[float]:
    raw_value = os.getenv(env_var)
    if raw_value is None or not raw_value.strip():
        return list(default)
    try:
        table = [float(part) for part in raw_value.split(",") if part.strip()]
    except ValueError:
        logger.warning(
            "%s must be a comma-separated list of numbers (got %r); using %s",
            env_var,
            raw_value,
            default,
        )
        return list(default)
    ordered = all(a >= b >= 0 for a, b in zip(table, table[1:]))
    if len(table) != 4 or sum(table) != 9 or not ordered:
        logger.warning(
            "%s must list 4 non-increasing values summing to 9 (got %r); using %s",
            env_var,
            raw_value,
            default,
        )
        return list(default)
    return table


def _parse_log_level(raw: str | None) -> str:
    level = (raw or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("LOG_LEVEL %r is not a logging level; defaulting to INFO", raw)
        return "INFO"
    return level


def _parse_origins(raw: str | None) -> list[str]:
    return [o.strip() for o in (raw or "").split(",") if o.strip()]


API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))

LOG_LEVEL = _parse_log_level(os.getenv("LOG_LEVEL"))

# Ceiling enforced by the HTTP layer before a game is calculated.
MAX_BET_AMOUNT = _parse_amount("MAX_BET_AMOUNT", 1000.0)

NINES_FOUR_PLAYER_POINTS = _parse_points_table(
    "NINES_FOUR_PLAYER_POINTS", [5, 3, 1, 0]
)

ALLOWED_ORIGINS = _parse_origins(os.getenv("ALLOWED_ORIGINS"))
ALLOW_CREDENTIALS = os.getenv("ALLOW_CREDENTIALS", "false").lower() == "true"

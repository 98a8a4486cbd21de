from fastapi import HTTPException
from pydantic import BaseModel
from typing import Optional


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code


class UnsupportedGameType(DomainException):
    def __init__(self, game_type: str) -> None:
        super().__init__(
            status_code=400,
            title="Unsupported game",
            detail=f"game type '{game_type}' is not supported",
            code="unsupported_game_type",
        )


class SettlementImbalance(DomainException):
    """Raised when raw debts do not net to zero.

    This can only happen through a calculator bug, so it surfaces as a 500.
    """

    def __init__(self, residual_cents: int) -> None:
        super().__init__(
            status_code=500,
            title="Settlement imbalance",
            detail=f"balances do not sum to zero (residual {residual_cents} cents)",
            code="settlement_imbalance",
        )
        self.residual_cents = residual_cents


def http_problem(
    status_code: int,
    detail: str,
    code: str,
    *,
    headers: Optional[dict[str, str]] = None,
) -> HTTPException:
    """Create an HTTPException with an attached problem code."""

    exc = HTTPException(status_code=status_code, detail=detail, headers=headers)
    setattr(exc, "code", code)
    return exc

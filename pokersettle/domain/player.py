from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Number = Union[Decimal, float, int]

CENT = Decimal("0.01")
# Balances at or below one cent are treated as settled.
SETTLED_TOLERANCE = CENT


class DomainValidationError(ValueError):
    """Raised when a ledger rule is violated."""


class PlayerNotFoundError(DomainValidationError):
    """Raised when a player id is not part of the ledger."""


def to_money(value: Number) -> Decimal:
    """Convert a plain number to ``Decimal`` through its shortest repr."""
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation as exc:
            raise DomainValidationError(f"not a monetary amount: {value!r}") from exc
    if not amount.is_finite():
        raise DomainValidationError(f"amount must be finite: {value!r}")
    return amount


def round_money(value: Number) -> Decimal:
    return to_money(value).quantize(CENT, rounding=ROUND_HALF_UP)


def normalize_name(name: str) -> str:
    value = name.strip()
    if not value:
        raise DomainValidationError("player name must be non-empty")
    return value


@dataclass(slots=True, frozen=True)
class Player:
    id: str
    name: str
    buy_in: Decimal = Decimal("0")
    cash_out: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        object.__setattr__(self, "buy_in", to_money(self.buy_in))
        object.__setattr__(self, "cash_out", to_money(self.cash_out))

    @property
    def net(self) -> Decimal:
        return self.cash_out - self.buy_in

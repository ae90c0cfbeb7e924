from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from deposito.errors import InvalidInputError

_QUANT = Decimal("0.01")
_RATE_QUANT = Decimal("0.000001")


def parse_decimal(value: str | int | Decimal) -> Decimal:
    """
    Parse robuste.
    Accepts "12.34", "12", "12,34" (comma decimal separator), ints and Decimals.
    Floats are refused: they would bring binary drift into cents.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidInputError("Amount must be provided as a string or Decimal")
    if isinstance(value, Decimal):
        dec = value
    elif isinstance(value, int):
        dec = Decimal(value)
    elif isinstance(value, str):
        raw = value.strip()
        if raw == "":
            raise InvalidInputError("Amount cannot be empty")

        raw = raw.replace(",", ".")

        try:
            dec = Decimal(raw)
        except InvalidOperation as exc:
            raise InvalidInputError(f"Invalid decimal amount: {value!r}") from exc
    else:
        raise InvalidInputError("Amount must be provided as a string or Decimal")

    if not dec.is_finite():
        raise InvalidInputError(f"Invalid decimal amount: {value!r}")
    return dec


def quantize_money(amount: Decimal) -> Decimal:
    # Arrondi comptable classique
    return amount.quantize(_QUANT, rounding=ROUND_HALF_UP)


def parse_rate(value: str | int | Decimal) -> Decimal:
    """Yearly return as a fraction in [0, 1], stored with 6 decimals."""
    rate = parse_decimal(value).quantize(_RATE_QUANT, rounding=ROUND_HALF_UP)
    if rate < 0 or rate > 1:
        raise InvalidInputError("Yearly return must be between 0 and 1")
    return rate


@dataclass(frozen=True, order=True)
class Money:
    """
    Non-negative amount of money, always held at cent precision.
    Balances and ledger amounts are both Money.
    """
    amount: Decimal

    @classmethod
    def from_str(cls, amount: str | int | Decimal) -> "Money":
        return cls(amount=quantize_money(parse_decimal(amount)))

    @classmethod
    def zero(cls) -> "Money":
        return cls(amount=Decimal("0.00"))

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise TypeError("Money.amount must be a Decimal")

        # normalisation même si créé autrement que from_str
        q = quantize_money(self.amount)
        object.__setattr__(self, "amount", q)

        if self.amount < 0:
            raise InvalidInputError("Money amount cannot be negative")

    def is_zero(self) -> bool:
        return self.amount == Decimal("0.00")

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(amount=self.amount + other.amount)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(amount=self.amount - other.amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

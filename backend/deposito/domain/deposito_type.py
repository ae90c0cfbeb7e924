from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID, uuid4

from deposito.domain.customer import normalize_name
from deposito.domain.money import parse_rate


@dataclass(frozen=True, slots=True)
class DepositoType:
    """
    Interest tier. yearly_return is a fraction (0.05 = 5% per year).
    The rate is read live at withdrawal time: there is no rate history.
    """
    id: UUID
    name: str
    yearly_return: Decimal

    @staticmethod
    def create(
        *,
        name: str,
        yearly_return: str | int | Decimal,
        id: UUID | None = None,
    ) -> "DepositoType":
        return DepositoType(
            id=id or uuid4(),
            name=normalize_name(name, field="name"),
            yearly_return=parse_rate(yearly_return),
        )

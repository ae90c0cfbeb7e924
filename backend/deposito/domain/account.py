from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from uuid import UUID, uuid4

from deposito.domain.customer import Customer, normalize_name
from deposito.domain.deposito_type import DepositoType
from deposito.domain.money import Money
from deposito.domain.timestamps import as_utc, utc_now


@dataclass(frozen=True, slots=True)
class Account:
    """
    Savings account.
    - balance: Money (never negative once committed)
    - created_at: anchor for interest accrual (months since opening)
    - deposito_type_id: fixed once the account exists
    """
    id: UUID
    packet: str
    balance: Money
    customer_id: UUID
    deposito_type_id: UUID
    created_at: dt.datetime

    def __post_init__(self) -> None:
        if not isinstance(self.balance, Money):
            raise ValueError("account.balance must be a Money")
        object.__setattr__(self, "created_at", as_utc(self.created_at))

    @staticmethod
    def create(
        *,
        packet: str,
        balance: Money,
        customer_id: UUID,
        deposito_type_id: UUID,
        created_at: dt.datetime | None = None,
        id: UUID | None = None,
    ) -> "Account":
        return Account(
            id=id or uuid4(),
            packet=normalize_name(packet, field="packet"),
            balance=balance,
            customer_id=customer_id,
            deposito_type_id=deposito_type_id,
            created_at=created_at if created_at is not None else utc_now(),
        )


@dataclass(frozen=True, slots=True)
class AccountDetails:
    account: Account
    customer: Customer | None
    deposito_type: DepositoType | None

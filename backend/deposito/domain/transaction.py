from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from deposito.domain.money import Money
from deposito.domain.timestamps import as_utc
from deposito.errors import InvalidInputError


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


@dataclass(frozen=True)
class Transaction:
    """
    Ledger entry. Direction lives in `type`; `amount` is always > 0.
    Entries are append-only.
    """
    id: UUID
    type: TransactionType
    amount: Money
    date: dt.datetime
    account_id: UUID

    @staticmethod
    def create(
        *,
        type: TransactionType,
        amount: Money,
        date: dt.datetime,
        account_id: UUID,
        id: Optional[UUID] = None,
    ) -> "Transaction":
        if not isinstance(type, TransactionType):
            raise InvalidInputError("type must be a TransactionType")

        if not isinstance(amount, Money):
            raise InvalidInputError("amount must be a Money")

        if amount.is_zero():
            raise InvalidInputError("Amount must be positive")

        if not isinstance(account_id, UUID):
            raise InvalidInputError("account_id must be a UUID")

        return Transaction(
            id=id or uuid4(),
            type=type,
            amount=amount,
            date=as_utc(date),
            account_id=account_id,
        )

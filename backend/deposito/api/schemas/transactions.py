from __future__ import annotations

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, Field

from deposito.domain.transaction import TransactionType


class TransactionCreateRequest(BaseModel):
    account_id: UUID
    amount: str = Field(
        ...,
        min_length=1,
        pattern=r"^\d+(\.\d{1,2})?$",
        examples=["500000", "12.34"],
        description="Positive amount as string; direction comes from the endpoint",
    )
    # accepts ISO-8601, including the datetime-local form YYYY-MM-DDTHH:MM
    date: dt.datetime


class TransactionResponse(BaseModel):
    id: UUID
    type: TransactionType
    amount: str
    date: dt.datetime
    account_id: UUID


class CalculationResponse(BaseModel):
    starting_balance: str
    months: int
    yearly_return: str
    monthly_return: str
    ending_balance: str


class WithdrawResponse(BaseModel):
    transaction: TransactionResponse
    calculation: CalculationResponse

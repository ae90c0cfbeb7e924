from __future__ import annotations

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, Field

from deposito.api.schemas.customers import CustomerResponse
from deposito.api.schemas.deposito_types import DepositoTypeResponse


class AccountCreateRequest(BaseModel):
    packet: str = Field(min_length=1, max_length=255)
    balance: str = Field(
        ...,
        min_length=1,
        pattern=r"^\d+(\.\d{1,2})?$",
        examples=["1000000.00"],
        description="Opening balance as string, e.g. '1000' or '1000.50'",
    )
    customer_id: UUID
    deposito_type_id: UUID
    # back-dated openings; defaults to now
    created_at: dt.datetime | None = None


class AccountUpdateRequest(BaseModel):
    packet: str | None = Field(default=None, min_length=1, max_length=255)
    customer_id: UUID | None = None


class AccountResponse(BaseModel):
    id: UUID
    packet: str
    balance: str
    customer_id: UUID
    deposito_type_id: UUID
    created_at: dt.datetime
    customer: CustomerResponse | None = None
    deposito_type: DepositoTypeResponse | None = None

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field


class DepositoTypeCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    yearly_return: Decimal = Field(
        ...,
        ge=0,
        le=1,
        examples=["0.05"],
        description="Yearly return as a fraction, 0.05 = 5%",
    )


class DepositoTypeUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    yearly_return: Decimal | None = Field(default=None, ge=0, le=1)


class DepositoTypeResponse(BaseModel):
    id: UUID
    name: str
    yearly_return: str

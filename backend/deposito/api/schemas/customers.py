from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field


class CustomerCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)


class CustomerUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)


class CustomerResponse(BaseModel):
    id: UUID
    name: str

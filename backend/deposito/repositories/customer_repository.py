from __future__ import annotations

from typing import Protocol
from uuid import UUID

from deposito.domain.customer import Customer


class CustomerRepository(Protocol):
    def list_customers(self) -> list[Customer]: ...
    def get_customer(self, customer_id: UUID) -> Customer: ...
    def add(self, customer: Customer) -> None: ...
    def update(self, *, customer_id: UUID, name: str | None = None) -> Customer: ...
    def delete(self, *, customer_id: UUID) -> None: ...

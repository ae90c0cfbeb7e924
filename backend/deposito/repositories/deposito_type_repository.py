from __future__ import annotations

from decimal import Decimal
from typing import Protocol
from uuid import UUID

from deposito.domain.deposito_type import DepositoType


class DepositoTypeRepository(Protocol):
    def list_deposito_types(self) -> list[DepositoType]: ...
    def get_deposito_type(self, deposito_type_id: UUID) -> DepositoType: ...
    def add(self, deposito_type: DepositoType) -> None: ...

    def update(
        self,
        *,
        deposito_type_id: UUID,
        name: str | None = None,
        yearly_return: Decimal | None = None,
    ) -> DepositoType:
        ...

    def delete(self, *, deposito_type_id: UUID) -> None: ...

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from deposito.domain.transaction import Transaction


class TransactionRepository(Protocol):
    def list(self, account_id: UUID | None = None) -> list[Transaction]:
        """Ledger entries ordered by date ascending."""
        ...

    def get(self, tx_id: UUID) -> Transaction | None:
        ...

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from deposito.domain.account import Account, AccountDetails


class AccountRepository(Protocol):
    def list_accounts(self) -> list[AccountDetails]: ...
    def get_account(self, account_id: UUID) -> Account: ...
    def get_account_details(self, account_id: UUID) -> AccountDetails: ...
    def add(self, account: Account) -> None: ...

    def update(
        self,
        *,
        account_id: UUID,
        packet: str | None = None,
        customer_id: UUID | None = None,
    ) -> Account:
        ...

    def delete(self, *, account_id: UUID) -> None: ...

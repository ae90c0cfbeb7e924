from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select

from deposito.db import init_db, new_session
from deposito.domain.account import Account, AccountDetails
from deposito.domain.customer import normalize_name
from deposito.domain.ids import parse_id
from deposito.domain.money import Money
from deposito.domain.timestamps import as_utc
from deposito.errors import ConflictError, NotFoundError
from deposito.repositories.account_repository import AccountRepository
from deposito.repositories.sql_customer_repository import customer_to_domain
from deposito.repositories.sql_deposito_type_repository import deposito_type_to_domain
from deposito.repositories.sql_models import AccountRow, CustomerRow, DepositoTypeRow, TransactionRow


class SqlAccountRepository(AccountRepository):
    """
    - get_account(): raises NotFoundError if unknown
    - add(): customer and deposito type must exist
    - update(): packet and customer only; the balance moves through the
      transaction service and the deposito type is fixed
    - delete(): refuses accounts that have ledger entries
    """

    def __init__(self) -> None:
        init_db()

    def list_accounts(self) -> list[AccountDetails]:
        with new_session() as s:
            rows = s.execute(
                select(AccountRow, CustomerRow, DepositoTypeRow)
                .outerjoin(CustomerRow, AccountRow.customer_id == CustomerRow.id)
                .outerjoin(DepositoTypeRow, AccountRow.deposito_type_id == DepositoTypeRow.id)
                .order_by(AccountRow.created_at.asc(), AccountRow.id.asc())
            ).all()
            return [self._details(a, c, d) for a, c, d in rows]

    def get_account(self, account_id: UUID | str) -> Account:
        aid = parse_id(account_id, field="account_id")
        with new_session() as s:
            row = s.get(AccountRow, str(aid))
            if row is None:
                raise NotFoundError("Account", aid)
            return account_to_domain(row)

    def get_account_details(self, account_id: UUID | str) -> AccountDetails:
        aid = parse_id(account_id, field="account_id")
        with new_session() as s:
            found = s.execute(
                select(AccountRow, CustomerRow, DepositoTypeRow)
                .outerjoin(CustomerRow, AccountRow.customer_id == CustomerRow.id)
                .outerjoin(DepositoTypeRow, AccountRow.deposito_type_id == DepositoTypeRow.id)
                .where(AccountRow.id == str(aid))
            ).first()
            if found is None:
                raise NotFoundError("Account", aid)
            a, c, d = found
            return self._details(a, c, d)

    def add(self, account: Account) -> None:
        if not isinstance(account, Account):
            raise TypeError("account must be an Account")

        with new_session() as s:
            if s.get(CustomerRow, str(account.customer_id)) is None:
                raise NotFoundError("Customer", account.customer_id)
            if s.get(DepositoTypeRow, str(account.deposito_type_id)) is None:
                raise NotFoundError("Deposito Type", account.deposito_type_id)
            if s.get(AccountRow, str(account.id)) is not None:
                raise ConflictError(f"account id '{account.id}' already exists")

            s.add(
                AccountRow(
                    id=str(account.id),
                    packet=account.packet,
                    balance=account.balance.amount,
                    customer_id=str(account.customer_id),
                    deposito_type_id=str(account.deposito_type_id),
                    created_at=account.created_at,
                )
            )
            s.commit()

    def update(
        self,
        *,
        account_id: UUID | str,
        packet: str | None = None,
        customer_id: UUID | str | None = None,
    ) -> Account:
        aid = parse_id(account_id, field="account_id")

        with new_session() as s:
            row = s.get(AccountRow, str(aid))
            if row is None:
                raise NotFoundError("Account", aid)

            if packet is not None:
                row.packet = normalize_name(packet, field="packet")

            if customer_id is not None:
                cid = parse_id(customer_id, field="customer_id")
                if s.get(CustomerRow, str(cid)) is None:
                    raise NotFoundError("Customer", cid)
                row.customer_id = str(cid)

            s.commit()
            s.refresh(row)
            return account_to_domain(row)

    def delete(self, *, account_id: UUID | str) -> None:
        aid = parse_id(account_id, field="account_id")

        with new_session() as s:
            row = s.get(AccountRow, str(aid))
            if row is None:
                raise NotFoundError("Account", aid)

            entries = s.execute(
                select(func.count()).select_from(TransactionRow).where(TransactionRow.account_id == row.id)
            ).scalar_one()
            if entries:
                raise ConflictError("Account has transactions and cannot be deleted")

            s.delete(row)
            s.commit()

    @staticmethod
    def _details(
        a: AccountRow,
        c: CustomerRow | None,
        d: DepositoTypeRow | None,
    ) -> AccountDetails:
        return AccountDetails(
            account=account_to_domain(a),
            customer=customer_to_domain(c) if c is not None else None,
            deposito_type=deposito_type_to_domain(d) if d is not None else None,
        )


def account_to_domain(row: AccountRow) -> Account:
    return Account(
        id=UUID(row.id),
        packet=row.packet,
        balance=Money(amount=row.balance),
        customer_id=UUID(row.customer_id),
        deposito_type_id=UUID(row.deposito_type_id),
        created_at=as_utc(row.created_at),
    )

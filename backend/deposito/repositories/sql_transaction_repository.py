from __future__ import annotations

from uuid import UUID

from sqlalchemy import select

from deposito.db import init_db, new_session
from deposito.domain.ids import parse_id
from deposito.domain.money import Money
from deposito.domain.timestamps import as_utc
from deposito.domain.transaction import Transaction, TransactionType
from deposito.repositories.sql_models import TransactionRow
from deposito.repositories.transaction_repository import TransactionRepository


class SqlTransactionRepository(TransactionRepository):
    """
    Read side of the ledger. Entries are written only by the transaction
    service, in the same database transaction as the balance update.
    """

    def __init__(self) -> None:
        init_db()

    def list(self, account_id: UUID | str | None = None) -> list[Transaction]:
        # effective date, not insertion order; id keeps ties deterministic
        stmt = select(TransactionRow).order_by(TransactionRow.date.asc(), TransactionRow.id.asc())
        if account_id is not None:
            aid = parse_id(account_id, field="account_id")
            stmt = stmt.where(TransactionRow.account_id == str(aid))

        with new_session() as s:
            rows = s.execute(stmt).scalars().all()
            return [transaction_to_domain(r) for r in rows]

    def get(self, tx_id: UUID) -> Transaction | None:
        with new_session() as s:
            row = s.get(TransactionRow, str(tx_id))
            return transaction_to_domain(row) if row else None


def transaction_to_row(tx: Transaction) -> TransactionRow:
    return TransactionRow(
        id=str(tx.id),
        type=tx.type.value,
        amount=tx.amount.amount,
        date=tx.date,
        account_id=str(tx.account_id),
    )


def transaction_to_domain(row: TransactionRow) -> Transaction:
    return Transaction.create(
        id=UUID(row.id),
        type=TransactionType(row.type),
        amount=Money(amount=row.amount),
        date=as_utc(row.date),
        account_id=UUID(row.account_id),
    )

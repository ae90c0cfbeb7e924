from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
import datetime as dt
from decimal import Decimal
import logging
from typing import Iterator
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from deposito.db import new_session
from deposito.domain.ids import parse_id
from deposito.domain.money import Money, quantize_money
from deposito.domain.timestamps import as_utc
from deposito.domain.transaction import Transaction, TransactionType
from deposito.engine.interest import InterestCalculation, compute_interest
from deposito.errors import (
    ConflictError,
    InsufficientFundsError,
    InvalidInputError,
    NotFoundError,
    StoreError,
)
from deposito.repositories.account_repository import AccountRepository
from deposito.repositories.sql_account_repository import SqlAccountRepository
from deposito.repositories.sql_models import AccountRow, DepositoTypeRow
from deposito.repositories.sql_transaction_repository import SqlTransactionRepository, transaction_to_row
from deposito.repositories.transaction_repository import TransactionRepository


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class WithdrawalResult:
    transaction: Transaction
    calculation: InterestCalculation


@contextmanager
def _unit_of_work() -> Iterator[Session]:
    """
    One session, one database transaction: commits when the block exits
    cleanly, rolls back otherwise. Nothing is visible until commit.
    """
    with new_session() as s:
        try:
            with s.begin():
                yield s
        except StaleDataError as exc:
            # version column moved under us: another request committed first
            raise ConflictError("Account was modified concurrently, retry the operation") from exc
        except SQLAlchemyError as exc:
            log.exception("Store failure, operation rolled back")
            raise StoreError("Store failure, operation not applied") from exc


def _lock_account(s: Session, account_id: UUID) -> AccountRow:
    row = s.execute(
        select(AccountRow).where(AccountRow.id == str(account_id)).with_for_update()
    ).scalar_one_or_none()
    if row is None:
        raise NotFoundError("Account", account_id)
    return row


def _positive_amount(amount: str | Decimal | Money) -> Money:
    money = amount if isinstance(amount, Money) else Money.from_str(amount)
    if money.is_zero():
        raise InvalidInputError("Amount must be positive")
    return money


def deposit(
    *,
    account_id: UUID | str,
    amount: str | Decimal | Money,
    date: dt.datetime,
) -> Transaction:
    aid = parse_id(account_id, field="account_id")
    money = _positive_amount(amount)
    when = as_utc(date)

    with _unit_of_work() as s:
        row = _lock_account(s, aid)

        new_balance = Money(amount=row.balance) + money
        tx = Transaction.create(
            type=TransactionType.DEPOSIT,
            amount=money,
            date=when,
            account_id=aid,
        )

        row.balance = new_balance.amount
        s.add(transaction_to_row(tx))

    log.info("deposit account=%s amount=%s balance=%s", aid, money, new_balance)
    return tx


def withdraw(
    *,
    account_id: UUID | str,
    amount: str | Decimal | Money,
    date: dt.datetime,
) -> WithdrawalResult:
    """
    Accrue simple interest since the account was opened, then deduct.

    The sufficiency check runs against the balance before interest: accrued
    interest is not spendable headroom, even though it ends up in the stored
    balance. Interest has no ledger line of its own.
    """
    aid = parse_id(account_id, field="account_id")
    money = _positive_amount(amount)
    when = as_utc(date)

    with _unit_of_work() as s:
        row = _lock_account(s, aid)

        rate_row = s.get(DepositoTypeRow, row.deposito_type_id)
        if rate_row is None:
            raise NotFoundError("Deposito Type", row.deposito_type_id)

        current = Money(amount=row.balance)
        calc = compute_interest(
            starting_balance=current.amount,
            yearly_return=Decimal(rate_row.yearly_return),
            opened_at=as_utc(row.created_at),
            at=when,
        )

        if calc.months < 0:
            log.warning(
                "withdrawal dated %s precedes account %s opening (%s months), negative interest applied",
                when.isoformat(), aid, calc.months,
            )

        if money > current:
            raise InsufficientFundsError(current, money)

        remaining = quantize_money(calc.ending_balance - money.amount)
        if remaining < 0:
            raise InsufficientFundsError(quantize_money(calc.ending_balance), money)

        tx = Transaction.create(
            type=TransactionType.WITHDRAW,
            amount=money,
            date=when,
            account_id=aid,
        )

        row.balance = remaining
        s.add(transaction_to_row(tx))

    log.info(
        "withdraw account=%s amount=%s months=%s balance=%s",
        aid, money, calc.months, f"{remaining:.2f}",
    )
    return WithdrawalResult(transaction=tx, calculation=calc)


def list_transactions_for_account(
    account_id: UUID | str,
    *,
    account_repo: AccountRepository | None = None,
    tx_repo: TransactionRepository | None = None,
) -> list[Transaction]:
    accounts = account_repo or SqlAccountRepository()
    txs = tx_repo or SqlTransactionRepository()

    acc = accounts.get_account(account_id)
    return txs.list(account_id=acc.id)

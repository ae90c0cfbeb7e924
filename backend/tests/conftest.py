from __future__ import annotations

import datetime as dt

import pytest

from deposito.api.deps import reset_repo_caches
from deposito.db import get_engine, init_db, reset_db_caches
from deposito.domain.account import Account
from deposito.domain.customer import Customer
from deposito.domain.deposito_type import DepositoType
from deposito.domain.money import Money
from deposito.repositories.sql_account_repository import SqlAccountRepository
from deposito.repositories.sql_customer_repository import SqlCustomerRepository
from deposito.repositories.sql_deposito_type_repository import SqlDepositoTypeRepository


@pytest.fixture(autouse=True)
def sqlite_db(tmp_path, monkeypatch):
    """Fresh SQLite file per test; cached engine/repos are rebuilt."""
    monkeypatch.setenv("DEPOSITO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("DEPOSITO_DATABASE_URL", f"sqlite:///{(tmp_path / 'deposito.db').as_posix()}")
    reset_db_caches()
    reset_repo_caches()
    init_db()
    yield
    get_engine().dispose()
    reset_db_caches()
    reset_repo_caches()


OPENED = dt.datetime(2026, 1, 10, 9, 0, tzinfo=dt.timezone.utc)


@pytest.fixture
def make_account():
    """
    make_account(balance="100", yearly_return="0.05", created_at=OPENED) -> Account
    Each call creates its own customer and deposito type.
    """
    counter = {"n": 0}

    def _make(
        balance: str = "100",
        yearly_return: str = "0.05",
        created_at: dt.datetime = OPENED,
    ) -> Account:
        counter["n"] += 1
        customer = Customer.create(name=f"Customer {counter['n']}")
        SqlCustomerRepository().add(customer)

        dtype = DepositoType.create(name=f"Tier {counter['n']}", yearly_return=yearly_return)
        SqlDepositoTypeRepository().add(dtype)

        account = Account.create(
            packet="Standard",
            balance=Money.from_str(balance),
            customer_id=customer.id,
            deposito_type_id=dtype.id,
            created_at=created_at,
        )
        SqlAccountRepository().add(account)
        return account

    return _make

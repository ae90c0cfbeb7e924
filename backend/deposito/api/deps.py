from __future__ import annotations

from functools import lru_cache

from deposito.repositories.sql_account_repository import SqlAccountRepository
from deposito.repositories.sql_customer_repository import SqlCustomerRepository
from deposito.repositories.sql_deposito_type_repository import SqlDepositoTypeRepository
from deposito.repositories.sql_transaction_repository import SqlTransactionRepository


@lru_cache
def get_customer_repo() -> SqlCustomerRepository:
    return SqlCustomerRepository()


@lru_cache
def get_deposito_type_repo() -> SqlDepositoTypeRepository:
    return SqlDepositoTypeRepository()


@lru_cache
def get_account_repo() -> SqlAccountRepository:
    return SqlAccountRepository()


@lru_cache
def get_tx_repo() -> SqlTransactionRepository:
    return SqlTransactionRepository()


def reset_repo_caches() -> None:
    for dep in (get_customer_repo, get_deposito_type_repo, get_account_repo, get_tx_repo):
        dep.cache_clear()

from __future__ import annotations

import logging

from deposito.domain.account import Account
from deposito.domain.customer import Customer
from deposito.domain.deposito_type import DepositoType
from deposito.domain.money import Money
from deposito.repositories.sql_account_repository import SqlAccountRepository
from deposito.repositories.sql_customer_repository import SqlCustomerRepository
from deposito.repositories.sql_deposito_type_repository import SqlDepositoTypeRepository
from deposito.settings import configure_logging

log = logging.getLogger(__name__)

TIERS = (("Bronze", "0.03"), ("Silver", "0.05"), ("Gold", "0.07"))


def seed() -> dict:
    type_repo = SqlDepositoTypeRepository()
    customer_repo = SqlCustomerRepository()
    account_repo = SqlAccountRepository()

    created_types = 0
    for name, rate in TIERS:
        if type_repo.get_by_name(name) is None:
            type_repo.add(DepositoType.create(name=name, yearly_return=rate))
            created_types += 1

    gold = type_repo.get_by_name("Gold")
    assert gold is not None

    customer = Customer.create(name="John Miller")
    customer_repo.add(customer)

    account = Account.create(
        packet="Standard",
        balance=Money.from_str("1000000"),
        customer_id=customer.id,
        deposito_type_id=gold.id,
    )
    account_repo.add(account)

    log.info("seeded %s deposito types, customer=%s account=%s", created_types, customer.id, account.id)
    return {"deposito_types": created_types, "customer_id": str(customer.id), "account_id": str(account.id)}


def main() -> int:
    configure_logging()
    print(seed())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

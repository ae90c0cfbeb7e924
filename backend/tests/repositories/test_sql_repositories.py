import datetime as dt
from decimal import Decimal
from uuid import uuid4

import pytest

from deposito.domain.account import Account
from deposito.domain.customer import Customer
from deposito.domain.deposito_type import DepositoType
from deposito.domain.money import Money
from deposito.errors import ConflictError, InvalidInputError, NotFoundError
from deposito.repositories.sql_account_repository import SqlAccountRepository
from deposito.repositories.sql_customer_repository import SqlCustomerRepository
from deposito.repositories.sql_deposito_type_repository import SqlDepositoTypeRepository
from deposito.repositories.sql_transaction_repository import SqlTransactionRepository
from deposito.services import transaction_service


def test_customer_add_get_update_delete():
    repo = SqlCustomerRepository()
    c = Customer.create(name=" John Miller ")
    repo.add(c)

    assert repo.get_customer(c.id).name == "John Miller"
    assert repo.update(customer_id=c.id, name="Jane Miller").name == "Jane Miller"
    assert [x.id for x in repo.list_customers()] == [c.id]

    repo.delete(customer_id=c.id)
    with pytest.raises(NotFoundError):
        repo.get_customer(c.id)


def test_get_customer_with_malformed_id_is_invalid_input():
    with pytest.raises(InvalidInputError):
        SqlCustomerRepository().get_customer("not-a-uuid")


def test_customer_with_accounts_cannot_be_deleted(make_account):
    acc = make_account()
    with pytest.raises(ConflictError):
        SqlCustomerRepository().delete(customer_id=acc.customer_id)


def test_deposito_type_duplicate_name_conflicts():
    repo = SqlDepositoTypeRepository()
    repo.add(DepositoType.create(name="Gold", yearly_return="0.07"))

    with pytest.raises(ConflictError):
        repo.add(DepositoType.create(name="Gold", yearly_return="0.05"))


def test_deposito_type_rename_to_existing_name_conflicts():
    repo = SqlDepositoTypeRepository()
    gold = DepositoType.create(name="Gold", yearly_return="0.07")
    silver = DepositoType.create(name="Silver", yearly_return="0.05")
    repo.add(gold)
    repo.add(silver)

    with pytest.raises(ConflictError):
        repo.update(deposito_type_id=silver.id, name="Gold")


def test_deposito_type_rate_roundtrips_exactly():
    repo = SqlDepositoTypeRepository()
    d = DepositoType.create(name="Silver", yearly_return="0.05")
    repo.add(d)

    assert repo.get_deposito_type(d.id).yearly_return == Decimal("0.05")
    updated = repo.update(deposito_type_id=d.id, yearly_return=Decimal("0.045"))
    assert updated.yearly_return == Decimal("0.045")
    assert repo.get_by_name("Silver").id == d.id


def test_deposito_type_in_use_cannot_be_deleted(make_account):
    acc = make_account()
    with pytest.raises(ConflictError):
        SqlDepositoTypeRepository().delete(deposito_type_id=acc.deposito_type_id)


def test_account_add_requires_existing_customer_and_type():
    dtype = DepositoType.create(name="Gold", yearly_return="0.07")
    SqlDepositoTypeRepository().add(dtype)

    acc = Account.create(
        packet="Standard",
        balance=Money.from_str("10"),
        customer_id=uuid4(),
        deposito_type_id=dtype.id,
    )
    with pytest.raises(NotFoundError):
        SqlAccountRepository().add(acc)


def test_account_details_include_customer_and_type(make_account):
    acc = make_account(balance="1000000", yearly_return="0.07")
    details = SqlAccountRepository().get_account_details(acc.id)

    assert details.account.balance.amount == Decimal("1000000.00")
    assert details.account.created_at == acc.created_at
    assert details.customer is not None and details.customer.id == acc.customer_id
    assert details.deposito_type is not None and details.deposito_type.yearly_return == Decimal("0.07")


def test_account_update_changes_packet_only(make_account):
    acc = make_account()
    updated = SqlAccountRepository().update(account_id=acc.id, packet="Premium")

    assert updated.packet == "Premium"
    assert updated.balance == acc.balance
    assert updated.deposito_type_id == acc.deposito_type_id


def test_account_with_transactions_cannot_be_deleted(make_account):
    acc = make_account()
    transaction_service.deposit(account_id=acc.id, amount="10", date=acc.created_at)

    with pytest.raises(ConflictError):
        SqlAccountRepository().delete(account_id=acc.id)


def test_account_without_transactions_can_be_deleted(make_account):
    acc = make_account()
    repo = SqlAccountRepository()
    repo.delete(account_id=acc.id)

    with pytest.raises(NotFoundError):
        repo.get_account(acc.id)


def test_transaction_list_filters_by_account_and_sorts_by_date(make_account):
    a = make_account()
    b = make_account()
    later = a.created_at + dt.timedelta(days=3)
    earlier = a.created_at + dt.timedelta(days=1)

    transaction_service.deposit(account_id=a.id, amount="1", date=later)
    transaction_service.deposit(account_id=a.id, amount="2", date=earlier)
    transaction_service.deposit(account_id=b.id, amount="3", date=earlier)

    listed = SqlTransactionRepository().list(a.id)
    assert [t.amount.amount for t in listed] == [Decimal("2.00"), Decimal("1.00")]
    assert all(t.account_id == a.id for t in listed)


def test_transaction_get_returns_stored_entry(make_account):
    acc = make_account()
    tx = transaction_service.deposit(account_id=acc.id, amount="12.34", date=acc.created_at)

    repo = SqlTransactionRepository()
    assert repo.get(tx.id) == tx
    assert repo.get(uuid4()) is None


def test_transaction_list_breaks_same_date_ties_by_id(make_account):
    acc = make_account()
    same_day = acc.created_at

    ids = [
        transaction_service.deposit(account_id=acc.id, amount=str(n), date=same_day).id
        for n in (1, 2, 3)
    ]

    listed = SqlTransactionRepository().list(acc.id)
    assert [t.id for t in listed] == sorted(ids, key=str)

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select

from deposito.db import init_db, new_session
from deposito.domain.customer import Customer, normalize_name
from deposito.domain.ids import parse_id
from deposito.errors import ConflictError, NotFoundError
from deposito.repositories.customer_repository import CustomerRepository
from deposito.repositories.sql_models import AccountRow, CustomerRow


class SqlCustomerRepository(CustomerRepository):
    """
    - get_customer(): raises NotFoundError if unknown
    - delete(): refuses customers that still own accounts (ConflictError)
    """

    def __init__(self) -> None:
        init_db()

    def list_customers(self) -> list[Customer]:
        with new_session() as s:
            rows = s.execute(select(CustomerRow).order_by(CustomerRow.name.asc())).scalars().all()
            return [customer_to_domain(r) for r in rows]

    def get_customer(self, customer_id: UUID | str) -> Customer:
        cid = parse_id(customer_id, field="customer_id")
        with new_session() as s:
            row = s.get(CustomerRow, str(cid))
            if row is None:
                raise NotFoundError("Customer", cid)
            return customer_to_domain(row)

    def add(self, customer: Customer) -> None:
        if not isinstance(customer, Customer):
            raise TypeError("customer must be a Customer")

        with new_session() as s:
            if s.get(CustomerRow, str(customer.id)) is not None:
                raise ConflictError(f"customer id '{customer.id}' already exists")
            s.add(CustomerRow(id=str(customer.id), name=customer.name))
            s.commit()

    def update(self, *, customer_id: UUID | str, name: str | None = None) -> Customer:
        cid = parse_id(customer_id, field="customer_id")

        with new_session() as s:
            row = s.get(CustomerRow, str(cid))
            if row is None:
                raise NotFoundError("Customer", cid)

            if name is not None:
                row.name = normalize_name(name, field="name")

            s.commit()
            s.refresh(row)
            return customer_to_domain(row)

    def delete(self, *, customer_id: UUID | str) -> None:
        cid = parse_id(customer_id, field="customer_id")

        with new_session() as s:
            row = s.get(CustomerRow, str(cid))
            if row is None:
                raise NotFoundError("Customer", cid)

            owned = s.execute(
                select(func.count()).select_from(AccountRow).where(AccountRow.customer_id == row.id)
            ).scalar_one()
            if owned:
                raise ConflictError("Customer still owns accounts")

            s.delete(row)
            s.commit()


def customer_to_domain(row: CustomerRow) -> Customer:
    return Customer(id=UUID(row.id), name=row.name)

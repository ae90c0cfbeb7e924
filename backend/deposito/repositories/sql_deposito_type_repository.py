from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from deposito.db import init_db, new_session
from deposito.domain.customer import normalize_name
from deposito.domain.deposito_type import DepositoType
from deposito.domain.ids import parse_id
from deposito.domain.money import parse_rate
from deposito.errors import ConflictError, NotFoundError
from deposito.repositories.deposito_type_repository import DepositoTypeRepository
from deposito.repositories.sql_models import AccountRow, DepositoTypeRow

_DUPLICATE_NAME = "Deposito Type with this name already exists"


class SqlDepositoTypeRepository(DepositoTypeRepository):
    """
    Names are unique (ConflictError on duplicates).
    Rate updates are not versioned: the next withdrawal on any account of
    this tier uses the new rate for its whole elapsed history.
    """

    def __init__(self) -> None:
        init_db()

    def list_deposito_types(self) -> list[DepositoType]:
        with new_session() as s:
            rows = s.execute(
                select(DepositoTypeRow).order_by(DepositoTypeRow.yearly_return.asc(), DepositoTypeRow.name.asc())
            ).scalars().all()
            return [deposito_type_to_domain(r) for r in rows]

    def get_deposito_type(self, deposito_type_id: UUID | str) -> DepositoType:
        did = parse_id(deposito_type_id, field="deposito_type_id")
        with new_session() as s:
            row = s.get(DepositoTypeRow, str(did))
            if row is None:
                raise NotFoundError("Deposito Type", did)
            return deposito_type_to_domain(row)

    def get_by_name(self, name: str) -> DepositoType | None:
        with new_session() as s:
            row = s.execute(
                select(DepositoTypeRow).where(DepositoTypeRow.name == name.strip())
            ).scalar_one_or_none()
            return deposito_type_to_domain(row) if row else None

    def add(self, deposito_type: DepositoType) -> None:
        if not isinstance(deposito_type, DepositoType):
            raise TypeError("deposito_type must be a DepositoType")

        with new_session() as s:
            if self._name_taken(s, deposito_type.name):
                raise ConflictError(_DUPLICATE_NAME)

            s.add(
                DepositoTypeRow(
                    id=str(deposito_type.id),
                    name=deposito_type.name,
                    yearly_return=deposito_type.yearly_return,
                )
            )
            self._commit(s)

    def update(
        self,
        *,
        deposito_type_id: UUID | str,
        name: str | None = None,
        yearly_return: str | Decimal | None = None,
    ) -> DepositoType:
        did = parse_id(deposito_type_id, field="deposito_type_id")

        with new_session() as s:
            row = s.get(DepositoTypeRow, str(did))
            if row is None:
                raise NotFoundError("Deposito Type", did)

            if name is not None:
                n = normalize_name(name, field="name")
                if n != row.name and self._name_taken(s, n):
                    raise ConflictError(_DUPLICATE_NAME)
                row.name = n

            if yearly_return is not None:
                row.yearly_return = parse_rate(yearly_return)

            self._commit(s)
            s.refresh(row)
            return deposito_type_to_domain(row)

    def delete(self, *, deposito_type_id: UUID | str) -> None:
        did = parse_id(deposito_type_id, field="deposito_type_id")

        with new_session() as s:
            row = s.get(DepositoTypeRow, str(did))
            if row is None:
                raise NotFoundError("Deposito Type", did)

            in_use = s.execute(
                select(func.count()).select_from(AccountRow).where(AccountRow.deposito_type_id == row.id)
            ).scalar_one()
            if in_use:
                raise ConflictError("Deposito Type is still used by accounts")

            s.delete(row)
            s.commit()

    @staticmethod
    def _name_taken(s: Session, name: str) -> bool:
        existing = s.execute(
            select(DepositoTypeRow.id).where(DepositoTypeRow.name == name)
        ).first()
        return existing is not None

    @staticmethod
    def _commit(s: Session) -> None:
        # unique index still guards against a concurrent insert of the same name
        try:
            s.commit()
        except IntegrityError as exc:
            s.rollback()
            raise ConflictError(_DUPLICATE_NAME) from exc


def deposito_type_to_domain(row: DepositoTypeRow) -> DepositoType:
    return DepositoType(
        id=UUID(row.id),
        name=row.name,
        yearly_return=Decimal(row.yearly_return),
    )

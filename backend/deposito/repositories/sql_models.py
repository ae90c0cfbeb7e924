from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from deposito.db_base import Base


class DecimalText(TypeDecorator):
    """
    Decimal stored as its exact string form.
    SQLite has no decimal type: NUMERIC goes through float and loses cents
    past ~15 significant digits.
    """
    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else str(Decimal(value))

    def process_result_value(self, value, dialect):
        return None if value is None else Decimal(value)


def exact_numeric(precision: int, scale: int):
    return Numeric(precision, scale).with_variant(DecimalText(), "sqlite")


class CustomerRow(Base):
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)


class DepositoTypeRow(Base):
    __tablename__ = "deposito_types"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    # decimal fraction: 0.03 (3%), 0.05, 0.07
    yearly_return: Mapped[Decimal] = mapped_column(exact_numeric(12, 6), nullable=False)


class AccountRow(Base):
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    packet: Mapped[str] = mapped_column(Text, nullable=False)
    balance: Mapped[Decimal] = mapped_column(exact_numeric(18, 2), nullable=False, default=Decimal("0"))
    customer_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("customers.id", ondelete="RESTRICT"),
        index=True,
        nullable=False,
    )
    deposito_type_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("deposito_types.id", ondelete="RESTRICT"),
        index=True,
        nullable=False,
    )
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # optimistic lock: a stale balance write fails instead of overwriting
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class TransactionRow(Base):
    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    amount: Mapped[Decimal] = mapped_column(exact_numeric(18, 2), nullable=False)
    date: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)
    account_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("accounts.id", ondelete="RESTRICT"),
        index=True,
        nullable=False,
    )

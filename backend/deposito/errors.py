"""Error taxonomy shared by the domain, repositories and HTTP layer."""
from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    CONFLICT = "conflict"
    STORE_FAILURE = "store_failure"


class DepositoError(Exception):
    """Base exception; every subclass carries a fixed ErrorKind."""

    kind: ErrorKind = ErrorKind.STORE_FAILURE

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(DepositoError, LookupError):
    """Raised when a referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, entity_id: object = None) -> None:
        suffix = f" with ID {entity_id}" if entity_id else ""
        super().__init__(f"{resource}{suffix} not found")
        self.resource = resource
        self.entity_id = entity_id


class InvalidInputError(DepositoError, ValueError):
    """Raised for non-positive amounts, malformed ids, dates or rates."""

    kind = ErrorKind.INVALID_INPUT


class InsufficientFundsError(DepositoError):
    """Raised when a withdrawal exceeds the account's pre-interest balance."""

    kind = ErrorKind.INSUFFICIENT_FUNDS

    def __init__(self, balance: object, requested: object) -> None:
        super().__init__(
            "Insufficient balance",
            details=f"Current balance: {balance}, Requested: {requested}",
        )
        self.balance = balance
        self.requested = requested


class ConflictError(DepositoError):
    """Raised on uniqueness/reference violations and concurrent updates."""

    kind = ErrorKind.CONFLICT


class StoreError(DepositoError):
    """Raised when the persistence layer fails after validation passed."""

    kind = ErrorKind.STORE_FAILURE

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from deposito.errors import InvalidInputError


@dataclass(frozen=True, slots=True)
class Customer:
    id: UUID
    name: str

    @staticmethod
    def create(*, name: str, id: UUID | None = None) -> "Customer":
        return Customer(id=id or uuid4(), name=normalize_name(name, field="name"))


def normalize_name(value: str, *, field: str, max_length: int = 255) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field} is required")
    v = value.strip()
    if len(v) > max_length:
        raise InvalidInputError(f"{field} is too long")
    return v

from __future__ import annotations

from uuid import UUID

from deposito.errors import InvalidInputError


def parse_id(value: UUID | str, *, field: str = "id") -> UUID:
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field} cannot be empty")
    try:
        return UUID(value.strip())
    except ValueError as exc:
        raise InvalidInputError(f"{field} must be a valid UUID") from exc

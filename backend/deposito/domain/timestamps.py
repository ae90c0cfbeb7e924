from __future__ import annotations

import datetime as dt

from deposito.errors import InvalidInputError


def as_utc(value: dt.datetime) -> dt.datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted."""
    if not isinstance(value, dt.datetime):
        raise InvalidInputError("date must be a datetime")
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)

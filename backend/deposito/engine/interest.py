from __future__ import annotations

import calendar
from dataclasses import dataclass
import datetime as dt
from decimal import Decimal

from deposito.domain.timestamps import as_utc

_MONTHS_PER_YEAR = Decimal(12)


@dataclass(frozen=True)
class InterestCalculation:
    """Breakdown returned with every withdrawal, for display and audit."""
    starting_balance: Decimal
    months: int
    yearly_return: Decimal
    monthly_return: Decimal
    ending_balance: Decimal


def _add_months(value: dt.datetime, months: int) -> dt.datetime:
    # day clamped to the last day of the target month (Jan 31 + 1 -> Feb 28/29)
    total = value.year * 12 + (value.month - 1) + months
    year, month0 = divmod(total, 12)
    month = month0 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def whole_months_between(start: dt.datetime, end: dt.datetime) -> int:
    """
    Number of complete months from `start` to `end`, truncated toward zero.
    Negative when `end` is before `start`.
    """
    start = as_utc(start)
    end = as_utc(end)

    if end == start:
        return 0

    sign = 1
    earlier, later = start, end
    if end < start:
        sign = -1
        earlier, later = end, start

    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    # last calendar month not complete yet
    if months > 0 and _add_months(earlier, months) > later:
        months -= 1

    return sign * months


def monthly_return(yearly_return: Decimal) -> Decimal:
    return yearly_return / _MONTHS_PER_YEAR


def calculate_ending_balance(starting: Decimal, yearly_return: Decimal, months: int) -> Decimal:
    """
    Simple (non-compounded) accrual: starting * (1 + yearly/12 * months).
    Not rounded; the caller rounds once, after deducting the withdrawal.
    """
    return starting * (1 + monthly_return(yearly_return) * months)


def compute_interest(
    *,
    starting_balance: Decimal,
    yearly_return: Decimal,
    opened_at: dt.datetime,
    at: dt.datetime,
) -> InterestCalculation:
    months = whole_months_between(opened_at, at)
    return InterestCalculation(
        starting_balance=starting_balance,
        months=months,
        yearly_return=yearly_return,
        monthly_return=monthly_return(yearly_return),
        ending_balance=calculate_ending_balance(starting_balance, yearly_return, months),
    )

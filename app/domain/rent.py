"""Rent calculator: proration, accrual and closing totals.

Every function here is pure. The reference ("as of") date is always an
explicit argument; nothing in this module reads the clock.

Amounts are ``Decimal``. Rounding to cents is half-up.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from collections.abc import Sequence

from app.errors import DomainValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0")


def as_amount(value, field: str = "amount") -> Decimal:
    """Coerce a numeric input to Decimal, rejecting malformed or non-finite values.

    Floats go through ``str`` so 0.1 stays 0.1 rather than its binary expansion.
    """
    if isinstance(value, bool):
        raise DomainValidationError(f"{field} must be a number")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise DomainValidationError(f"{field} must be a number")
    if not amount.is_finite():
        raise DomainValidationError(f"{field} must be a finite number")
    return amount


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, ties away from zero (half-up)."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def as_cents(value, field: str = "amount") -> Decimal:
    """Like ``as_amount``, but reject anything finer than a cent instead of rounding it away."""
    amount = as_amount(value, field)
    if amount != amount.quantize(CENT):
        raise DomainValidationError(f"{field} cannot have more than 2 decimal places")
    return amount.quantize(CENT)


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def remaining_days_in_month(day: date) -> int:
    """Days from ``day`` to month end, counting ``day`` itself."""
    return days_in_month(day) - day.day + 1


def month_index(day: date) -> int:
    return day.year * 12 + day.month


def months_between(start: date, end: date) -> int:
    """Calendar-month bucket difference, ignoring day of month."""
    return month_index(end) - month_index(start)


def prorate(monthly_rent, start_date: date) -> Decimal:
    """
    Rent owed for the first (possibly partial) month of a contract.

    A contract starting on the 1st owes the full monthly rent. Otherwise the
    rent is charged per day for the days remaining in the month, the start
    day included, and rounded to cents.
    """
    rent = as_amount(monthly_rent, "monthly_rent")
    if rent < 0:
        raise DomainValidationError("monthly_rent must be >= 0")
    if start_date.day == 1:
        return rent
    return round_money(rent / days_in_month(start_date) * remaining_days_in_month(start_date))


def accrued_expected(monthly_rent, first_month_rent, start_date: date, as_of: date) -> Decimal:
    """
    Cumulative rent owed from contract start through ``as_of``.

    - Contract not started yet (start_date > as_of): nothing owed
    - Same calendar month as the start: the first month rent
    - Otherwise: first month rent plus one monthly rent per calendar month
      boundary crossed, regardless of day-of-month alignment
    """
    rent = as_amount(monthly_rent, "monthly_rent")
    first = as_amount(first_month_rent, "first_month_rent")
    if rent < 0 or first < 0:
        raise DomainValidationError("Rent amounts must be >= 0")
    if start_date > as_of:
        return ZERO
    months = months_between(start_date, as_of)
    if months == 0:
        return first
    return first + months * rent


def closing_total_expected(monthly_rent, first_month_rent, start_date: date, end_date: date) -> Decimal:
    """Total rent expected over a contract that ends on ``end_date``.

    Unlike accrued_expected, a contract closed before it started still owes
    its first month rent.
    """
    rent = as_amount(monthly_rent, "monthly_rent")
    first = as_amount(first_month_rent, "first_month_rent")
    months = months_between(start_date, end_date)
    if months > 0:
        return first + months * rent
    return first


def split_proportionally(amount, weights: Sequence[Decimal]) -> list[Decimal]:
    """
    Split ``amount`` into shares proportional to ``weights``.

    Each share is rounded to cents. The rounding residue goes to the share
    with the largest weight (first one on ties), so the shares always sum to
    the rounded amount.
    """
    total_amount = round_money(as_amount(amount))
    parsed = [as_amount(w, "weight") for w in weights]
    if not parsed:
        raise DomainValidationError("Cannot split an amount across zero weights")
    if any(w < 0 for w in parsed):
        raise DomainValidationError("Weights must be >= 0")
    total_weight = sum(parsed, ZERO)
    if total_weight == 0:
        raise DomainValidationError("Cannot split an amount when all weights are zero")

    shares = [round_money(total_amount * w / total_weight) for w in parsed]
    residue = total_amount - sum(shares, ZERO)
    if residue:
        largest = max(range(len(parsed)), key=lambda i: (parsed[i], -i))
        shares[largest] += residue
    return shares


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


@dataclass(frozen=True, slots=True)
class Duration:
    """Length of a contract, months approximated as 30 days for display."""

    days: int
    months: int
    text: str


def duration_between(start: date, end: date) -> Duration:
    days = abs((end - start).days)
    months = days // 30
    if months > 0:
        text = _plural(months, "month")
        remainder = days % 30
        if remainder > 0:
            text += " " + _plural(remainder, "day")
    else:
        text = _plural(days, "day")
    return Duration(days=days, months=months, text=text)

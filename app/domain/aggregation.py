"""Read-side folding of rooms, rentals and history into summaries.

These functions hold no state. They take a snapshot fetched once (rooms with
their active rental attached, plus history rows) and derive view models from
it. Objects only need the attributes the ORM models expose:

- room: ``status``, ``rental`` (None when free)
- rental: ``company_name``, ``monthly_rent``, ``first_month_rent``,
  ``contract_start_date``, ``paid_amount``
- history record: ``company_name``, ``total_paid``, ``total_expected``
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from app.domain.company import company_key
from app.domain.rent import ZERO, accrued_expected, as_amount
from app.domain.room import RoomStatus


@dataclass(slots=True)
class CompanySummary:
    company_name: str
    rooms: list[Any] = field(default_factory=list)
    total_expected: Decimal = ZERO
    total_paid: Decimal = ZERO

    @property
    def rooms_count(self) -> int:
        return len(self.rooms)

    @property
    def total_pending(self) -> Decimal:
        return self.total_expected - self.total_paid


@dataclass(slots=True)
class CompanyWithHistory:
    company_name: str
    current_rooms: list[Any] = field(default_factory=list)
    history_records: list[Any] = field(default_factory=list)
    total_paid_ever: Decimal = ZERO
    total_expected_ever: Decimal = ZERO

    @property
    def is_active(self) -> bool:
        return len(self.current_rooms) > 0

    @property
    def total_rooms_ever(self) -> int:
        return len(self.current_rooms) + len(self.history_records)


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total_rooms: int
    rented_rooms: int
    free_rooms: int
    total_expected: Decimal
    total_received: Decimal

    @property
    def total_pending(self) -> Decimal:
        # Negative when tenants have overpaid
        return self.total_expected - self.total_received


def rental_expected(rental, as_of: date) -> Decimal:
    return accrued_expected(
        rental.monthly_rent,
        rental.first_month_rent,
        rental.contract_start_date,
        as_of,
    )


def summarize_by_company(rooms: Iterable, as_of: date) -> list[CompanySummary]:
    """Group rented rooms by company, most rooms first."""
    by_company: dict[str, CompanySummary] = {}
    for room in rooms:
        rental = room.rental
        if rental is None:
            continue
        key = company_key(rental.company_name)
        summary = by_company.get(key)
        if summary is None:
            summary = by_company[key] = CompanySummary(company_name=rental.company_name)
        summary.rooms.append(room)
        summary.total_expected += rental_expected(rental, as_of)
        summary.total_paid += as_amount(rental.paid_amount, "paid_amount")

    return sorted(by_company.values(), key=lambda s: s.rooms_count, reverse=True)


def merge_current_and_history(
    rooms: Iterable, history_records: Iterable, as_of: date
) -> list[CompanyWithHistory]:
    """
    One entry per company seen in current rentals or in history.

    Totals combine accrued expected/paid of current rentals with the
    snapshotted totals of closed ones. Active companies come first, then
    companies with more rooms ever held.
    """
    by_company: dict[str, CompanyWithHistory] = {}

    def entry(name: str) -> CompanyWithHistory:
        key = company_key(name)
        if key not in by_company:
            by_company[key] = CompanyWithHistory(company_name=name)
        return by_company[key]

    for room in rooms:
        rental = room.rental
        if rental is None:
            continue
        company = entry(rental.company_name)
        company.current_rooms.append(room)
        company.total_expected_ever += rental_expected(rental, as_of)
        company.total_paid_ever += as_amount(rental.paid_amount, "paid_amount")

    for record in history_records:
        company = entry(record.company_name)
        company.history_records.append(record)
        company.total_expected_ever += as_amount(record.total_expected, "total_expected")
        company.total_paid_ever += as_amount(record.total_paid, "total_paid")

    return sorted(
        by_company.values(),
        key=lambda c: (not c.is_active, -c.total_rooms_ever),
    )


def dashboard_stats(rooms: Iterable, as_of: date) -> DashboardStats:
    total_rooms = 0
    rented_rooms = 0
    total_expected = ZERO
    total_received = ZERO
    for room in rooms:
        total_rooms += 1
        if room.status == RoomStatus.RENTED.value:
            rented_rooms += 1
        rental = room.rental
        if rental is not None:
            total_expected += rental_expected(rental, as_of)
            total_received += as_amount(rental.paid_amount, "paid_amount")

    return DashboardStats(
        total_rooms=total_rooms,
        rented_rooms=rented_rooms,
        free_rooms=total_rooms - rented_rooms,
        total_expected=total_expected,
        total_received=total_received,
    )

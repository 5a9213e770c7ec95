"""Rental ledger: opening, crediting and closing a single rental.

``open_rental`` and ``credit_payment`` only stage changes in the session.
They are the building blocks of composite operations (bulk allotment,
company-wide payments) and must run inside a ``unit_of_work``. The other
functions are complete operations with their own transaction.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

import app.repositories.colony as colony_repo
import app.repositories.rental as rental_repo
import app.repositories.rental_history as history_repo
import app.repositories.room as room_repo
from app.db.models.rental import Rental as RentalModel
from app.db.models.rental_history import RentalHistory as RentalHistoryModel
from app.db.models.room import Room as RoomModel
from app.db.unit_of_work import unit_of_work
from app.domain.rent import as_amount, as_cents, closing_total_expected, prorate
from app.domain.room import RoomStatus
from app.errors import ConflictError, DomainValidationError, NotFoundError

logger = logging.getLogger(__name__)


def validate_rental_terms(company_name: str, monthly_rent) -> Decimal:
    """Check the shared terms of a new rental, returning the rent as Decimal."""
    if not company_name or not company_name.strip():
        raise DomainValidationError("company_name is required")
    rent = as_cents(monthly_rent, "monthly_rent")
    if rent < 0:
        raise DomainValidationError("monthly_rent must be >= 0")
    return rent


def validate_payment_amount(amount) -> Decimal:
    value = as_cents(amount)
    if value < 0:
        raise DomainValidationError("Payment amount must be >= 0")
    return value


def owned_by(room: RoomModel, user_id: str | None) -> bool:
    """Whether ``user_id`` owns the room's colony. ``None`` skips the check."""
    return user_id is None or (room.colony is not None and room.colony.user_id == user_id)


def _history_owned_by(db: Session, record: RentalHistoryModel, user_id: str | None) -> bool:
    if user_id is None:
        return True
    colony = colony_repo.get_colony_by_id(db, record.colony_id)
    return colony is not None and colony.user_id == user_id


def get_rental(db: Session, rental_id: str, user_id: str | None = None) -> RentalModel:
    """
    Get a rental, optionally checking its colony belongs to ``user_id``.

    A rental in someone else's colony is reported as not found.
    """
    rental = rental_repo.get_rental_by_id(db, rental_id)
    if not rental or rental.room is None or not owned_by(rental.room, user_id):
        raise NotFoundError(f"Rental with id {rental_id} not found")
    return rental


def open_rental(
    db: Session,
    room: RoomModel,
    company_name: str,
    monthly_rent,
    contract_start_date: date,
) -> RentalModel:
    """
    Stage a new rental on a Free room and mark the room Rented.

    - first_month_rent is prorated once here and never recomputed
    - paid_amount starts at 0
    """
    rent = validate_rental_terms(company_name, monthly_rent)
    if room.status != RoomStatus.FREE.value or room.rental is not None:
        raise DomainValidationError(f"Room {room.room_number} is not free")

    rental = rental_repo.create_rental(
        db,
        room_id=room.id,
        company_name=company_name,
        monthly_rent=rent,
        contract_start_date=contract_start_date,
        first_month_rent=prorate(rent, contract_start_date),
    )
    room_repo.set_room_status(db, room, RoomStatus.RENTED)
    return rental


def create_rental(
    db: Session,
    room_id: str,
    company_name: str,
    monthly_rent,
    contract_start_date: date,
) -> RentalModel:
    """Allot one room to a company."""
    room = room_repo.get_room_by_id(db, room_id)
    if not room:
        raise NotFoundError(f"Room with id {room_id} not found")

    with unit_of_work(db, "create rental"):
        rental = open_rental(db, room, company_name, monthly_rent, contract_start_date)

    db.refresh(rental)
    logger.info("Room %s allotted to %r", room.room_number, rental.company_name)
    return rental


def credit_payment(db: Session, rental: RentalModel, amount) -> RentalModel:
    """Stage ``paid_amount += amount``. Overpayment is allowed (pending goes negative)."""
    value = validate_payment_amount(amount)
    paid = as_amount(rental.paid_amount, "paid_amount")
    return rental_repo.set_paid_amount(db, rental, paid + value)


def apply_payment(
    db: Session, rental_id: str, amount, user_id: str | None = None
) -> RentalModel:
    """Record a payment against one rental."""
    value = validate_payment_amount(amount)
    rental = get_rental(db, rental_id, user_id)

    with unit_of_work(db, "apply payment"):
        credit_payment(db, rental, value)

    db.refresh(rental)
    logger.info("Payment of %s applied to rental %s", value, rental_id)
    return rental


def close_rental(
    db: Session, rental_id: str, as_of: date, user_id: str | None = None
) -> RentalHistoryModel:
    """
    End a rental on ``as_of`` and archive it.

    In one transaction:
    - writes a RentalHistory row (total_paid snapshot, total_expected
      recomputed from the contract terms up to as_of)
    - deletes the rental
    - sets the room back to Free

    If any step fails nothing is written: the room is never left Rented
    without a rental, and a rental is never deleted without its history.

    Raises:
        NotFoundError: If the rental doesn't exist or is in someone else's colony
        ConflictError: If the rental was already closed
    """
    if not rental_repo.get_rental_by_id(db, rental_id):
        record = history_repo.get_history_by_rental_id(db, rental_id)
        if record and _history_owned_by(db, record, user_id):
            logger.warning("Refused to close rental %s twice", rental_id)
            raise ConflictError(f"Rental {rental_id} is already closed")
        raise NotFoundError(f"Rental with id {rental_id} not found")

    rental = get_rental(db, rental_id, user_id)
    room = rental.room

    total_expected = closing_total_expected(
        rental.monthly_rent,
        rental.first_month_rent,
        rental.contract_start_date,
        as_of,
    )

    with unit_of_work(db, "close rental"):
        record = history_repo.create_history(
            db,
            rental_id=rental.id,
            room_id=room.id,
            colony_id=room.colony_id,
            room_number=room.room_number,
            company_name=rental.company_name,
            monthly_rent=rental.monthly_rent,
            first_month_rent=rental.first_month_rent,
            contract_start_date=rental.contract_start_date,
            contract_end_date=as_of,
            total_paid=rental.paid_amount,
            total_expected=total_expected,
        )
        room_repo.set_room_status(db, room, RoomStatus.FREE)
        rental_repo.delete_rental(db, rental.id)

    db.refresh(record)
    logger.info(
        "Rental %s of %r on room %s closed (paid %s of %s)",
        rental_id,
        record.company_name,
        record.room_number,
        record.total_paid,
        record.total_expected,
    )
    return record


def end_rental_for_room(
    db: Session, room_id: str, as_of: date, user_id: str | None = None
) -> RentalHistoryModel:
    """Close whatever rental currently occupies a room."""
    room = room_repo.get_room_by_id(db, room_id)
    if not room or not owned_by(room, user_id):
        raise NotFoundError(f"Room with id {room_id} not found")
    if room.rental is None:
        raise ConflictError(f"Room {room.room_number} has no active rental")
    return close_rental(db, room.rental.id, as_of, user_id)

import logging
from datetime import date

from sqlalchemy.orm import Session

import app.repositories.colony as colony_repo
import app.repositories.room as room_repo
from app.db.models.rental import Rental as RentalModel
from app.db.models.room import Room as RoomModel
from app.db.unit_of_work import unit_of_work
from app.domain.room import RoomStatus, generate_room_numbers, room_number_sort_key
from app.errors import ConflictError, DomainValidationError, NotFoundError
from app.services.rental import open_rental, owned_by, validate_rental_terms

logger = logging.getLogger(__name__)


def _require_colony(db: Session, colony_id: str) -> None:
    if not colony_repo.get_colony_by_id(db, colony_id):
        raise NotFoundError(f"Colony with id {colony_id} not found")


def list_rooms_with_rentals(db: Session, colony_id: str) -> list[RoomModel]:
    """Rooms of a colony with their active rental, in numeric-aware room number order."""
    _require_colony(db, colony_id)
    rooms = room_repo.get_rooms_with_rentals_by_colony_id(db, colony_id)
    return sorted(rooms, key=lambda room: room_number_sort_key(room.room_number))


def add_room(db: Session, colony_id: str, room_number: str) -> RoomModel:
    """
    Create one Free room in a colony.

    Room numbers are not required to be unique within a colony.
    """
    if not room_number or not room_number.strip():
        raise DomainValidationError("room_number is required")
    _require_colony(db, colony_id)

    with unit_of_work(db, "add room"):
        (room,) = room_repo.create_rooms(db, colony_id, [room_number])

    db.refresh(room)
    return room


def generate_rooms(
    db: Session,
    colony_id: str,
    count: int,
    prefix: str = "R",
    start_from: int = 1,
) -> list[RoomModel]:
    """Create ``count`` Free rooms numbered prefix{start_from}..prefix{start_from+count-1}."""
    room_numbers = generate_room_numbers(count, prefix, start_from)
    _require_colony(db, colony_id)

    with unit_of_work(db, "generate rooms"):
        rooms = room_repo.create_rooms(db, colony_id, room_numbers)

    for room in rooms:
        db.refresh(room)
    logger.info("Generated %d rooms in colony %s", len(rooms), colony_id)
    return rooms


def bulk_allot(
    db: Session,
    room_ids: list[str],
    company_name: str,
    monthly_rent,
    contract_start_date: date,
    user_id: str | None = None,
) -> list[RentalModel]:
    """
    Allot many rooms to one company, one rental per room, all or nothing.

    - Every room id must resolve to a distinct Free room, otherwise no rental
      is created
    - With ``user_id``, rooms in colonies owned by someone else count as
      unknown rooms
    - All rentals share the same terms, so their first month rent is equal

    Raises:
        DomainValidationError: If the terms are invalid, the list is empty or
            has duplicates, or any room is unknown or already rented
    """
    validate_rental_terms(company_name, monthly_rent)
    if not room_ids:
        raise DomainValidationError("At least one room must be selected")
    if len(set(room_ids)) != len(room_ids):
        raise DomainValidationError("Room ids must not repeat")

    rooms_by_id = {
        room.id: room
        for room in room_repo.get_rooms_by_ids(db, room_ids)
        if owned_by(room, user_id)
    }
    missing = [room_id for room_id in room_ids if room_id not in rooms_by_id]
    if missing:
        raise DomainValidationError(f"Rooms not found: {', '.join(missing)}")
    occupied = [
        rooms_by_id[room_id].room_number
        for room_id in room_ids
        if rooms_by_id[room_id].status != RoomStatus.FREE.value
        or rooms_by_id[room_id].rental is not None
    ]
    if occupied:
        logger.warning("Refused bulk allotment to %r: rooms %s are rented", company_name, occupied)
        raise DomainValidationError(f"Rooms are not free: {', '.join(occupied)}")

    with unit_of_work(db, "allot rooms"):
        rentals = [
            open_rental(db, rooms_by_id[room_id], company_name, monthly_rent, contract_start_date)
            for room_id in room_ids
        ]

    for rental in rentals:
        db.refresh(rental)
    logger.info("Allotted %d rooms to %r", len(rentals), company_name)
    return rentals


def delete_room(db: Session, room_id: str, user_id: str | None = None) -> None:
    """
    Delete a room.

    Raises:
        NotFoundError: If the room doesn't exist or is in someone else's colony
        ConflictError: If the room has an active rental (end it first)
    """
    room = room_repo.get_room_by_id(db, room_id)
    if not room or not owned_by(room, user_id):
        raise NotFoundError("Room not found")
    if room.rental is not None or room.status == RoomStatus.RENTED.value:
        logger.warning("Refused to delete occupied room %s", room_id)
        raise ConflictError(
            f"Cannot delete room {room.room_number}: it has an active rental"
        )

    with unit_of_work(db, "delete room"):
        room_repo.delete_room(db, room)

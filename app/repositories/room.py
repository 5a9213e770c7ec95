from sqlalchemy.orm import Session, joinedload

from app.db.models.room import Room as RoomModel
from app.domain.room import RoomStatus


def get_room_by_id(db: Session, room_id: str) -> RoomModel | None:
    """Get a room by ID."""
    return db.query(RoomModel).filter(RoomModel.id == room_id).first()


def get_rooms_by_ids(db: Session, room_ids: list[str]) -> list[RoomModel]:
    """Get the rooms whose ID is in ``room_ids`` (missing IDs are simply absent)."""
    if not room_ids:
        return []
    return (
        db.query(RoomModel)
        .options(joinedload(RoomModel.rental), joinedload(RoomModel.colony))
        .filter(RoomModel.id.in_(room_ids))
        .all()
    )


def get_rooms_with_rentals_by_colony_ids(
    db: Session, colony_ids: list[str]
) -> list[RoomModel]:
    """Get rooms of the given colonies with their active rental eagerly loaded."""
    if not colony_ids:
        return []
    return (
        db.query(RoomModel)
        .options(joinedload(RoomModel.rental))
        .filter(RoomModel.colony_id.in_(colony_ids))
        .all()
    )


def get_rooms_with_rentals_by_colony_id(db: Session, colony_id: str) -> list[RoomModel]:
    """Get rooms of one colony with their active rental eagerly loaded."""
    return get_rooms_with_rentals_by_colony_ids(db, [colony_id])


def create_rooms(db: Session, colony_id: str, room_numbers: list[str]) -> list[RoomModel]:
    """Add Free rooms to the session. Pure data access - no business logic."""
    rooms = [
        RoomModel(colony_id=colony_id, room_number=number, status=RoomStatus.FREE.value)
        for number in room_numbers
    ]
    db.add_all(rooms)
    db.flush()
    return rooms


def set_room_status(db: Session, room: RoomModel, status: RoomStatus) -> RoomModel:
    room.status = status.value
    db.flush()
    return room


def delete_room(db: Session, room: RoomModel) -> None:
    db.delete(room)
    db.flush()

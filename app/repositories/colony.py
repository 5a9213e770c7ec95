from sqlalchemy.orm import Session

from app.db.models.colony import Colony as ColonyModel
from app.db.models.rental import Rental as RentalModel
from app.db.models.rental_history import RentalHistory as RentalHistoryModel
from app.db.models.room import Room as RoomModel


def get_colony_by_id(db: Session, colony_id: str) -> ColonyModel | None:
    """Get a colony by ID."""
    return db.query(ColonyModel).filter(ColonyModel.id == colony_id).first()


def get_colonies_by_user_id(db: Session, user_id: str) -> list[ColonyModel]:
    """Get all colonies owned by a user, newest first."""
    return (
        db.query(ColonyModel)
        .filter(ColonyModel.user_id == user_id)
        .order_by(ColonyModel.created_at.desc())
        .all()
    )


def create_colony(
    db: Session, user_id: str, name: str, address: str | None = None
) -> ColonyModel:
    """Add a new colony to the session. Pure data access - no business logic."""
    db_colony = ColonyModel(user_id=user_id, name=name, address=address)
    db.add(db_colony)
    db.flush()
    return db_colony


def update_colony(db: Session, colony: ColonyModel, **kwargs) -> ColonyModel:
    """
    Update a colony. Only updates fields that are explicitly provided.

    To clear the address, explicitly pass it with None value.
    """
    if "name" in kwargs:
        colony.name = kwargs["name"]
    if "address" in kwargs:
        colony.address = kwargs["address"]  # Can be None to clear
    db.flush()
    return colony


def delete_colony(db: Session, colony_id: str) -> None:
    """Delete a colony together with its rooms, their rentals and its history."""
    room_ids = [
        room_id
        for (room_id,) in db.query(RoomModel.id).filter(RoomModel.colony_id == colony_id)
    ]
    if room_ids:
        db.query(RentalModel).filter(RentalModel.room_id.in_(room_ids)).delete(
            synchronize_session=False
        )
    db.query(RentalHistoryModel).filter(RentalHistoryModel.colony_id == colony_id).delete(
        synchronize_session=False
    )
    db.query(RoomModel).filter(RoomModel.colony_id == colony_id).delete(
        synchronize_session=False
    )
    db.query(ColonyModel).filter(ColonyModel.id == colony_id).delete(
        synchronize_session=False
    )
    db.expire_all()

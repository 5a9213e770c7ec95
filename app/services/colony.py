import logging

from sqlalchemy.orm import Session

import app.repositories.colony as colony_repo
from app.db.models.colony import Colony as ColonyModel
from app.db.unit_of_work import unit_of_work
from app.errors import DomainValidationError, NotFoundError

logger = logging.getLogger(__name__)


def _clean_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise DomainValidationError("Colony name is required")
    return name.strip()


def _clean_address(address: str | None) -> str | None:
    if address is None or not address.strip():
        return None
    return address.strip()


def get_colony(db: Session, colony_id: str, user_id: str | None = None) -> ColonyModel:
    """
    Get a colony, optionally checking it belongs to ``user_id``.

    A colony owned by someone else is reported as not found.
    """
    colony = colony_repo.get_colony_by_id(db, colony_id)
    if not colony or (user_id is not None and colony.user_id != user_id):
        raise NotFoundError("Colony not found")
    return colony


def list_colonies(db: Session, user_id: str) -> list[ColonyModel]:
    return colony_repo.get_colonies_by_user_id(db, user_id)


def create_colony(
    db: Session, user_id: str, name: str, address: str | None = None
) -> ColonyModel:
    with unit_of_work(db, "create colony"):
        colony = colony_repo.create_colony(
            db, user_id=user_id, name=_clean_name(name), address=_clean_address(address)
        )
    db.refresh(colony)
    return colony


def update_colony(
    db: Session, colony_id: str, user_id: str | None = None, **update_fields
) -> ColonyModel:
    """
    Update a colony's name and/or address.

    Only fields explicitly provided in update_fields are updated. The name
    cannot be cleared; an empty address clears it.
    """
    colony = get_colony(db, colony_id, user_id)

    update_dict = {}
    if "name" in update_fields:
        update_dict["name"] = _clean_name(update_fields["name"])
    if "address" in update_fields:
        update_dict["address"] = _clean_address(update_fields["address"])

    with unit_of_work(db, "update colony"):
        colony_repo.update_colony(db, colony, **update_dict)
    db.refresh(colony)
    return colony


def delete_colony(db: Session, colony_id: str, user_id: str | None = None) -> None:
    """
    Delete a colony and everything it owns.

    Rooms, their active rentals and the colony's rental history are removed
    in the same transaction. This cannot be undone.
    """
    colony = get_colony(db, colony_id, user_id)
    name = colony.name

    with unit_of_work(db, "delete colony"):
        colony_repo.delete_colony(db, colony_id)

    logger.info("Colony %s (%r) deleted with its rooms and history", colony_id, name)

from datetime import date

import pytest
from sqlalchemy.orm import Session

from app.db.models.rental import Rental as RentalModel
from app.db.models.rental_history import RentalHistory as RentalHistoryModel
from app.db.models.room import Room as RoomModel
from app.errors import DomainValidationError, NotFoundError
from app.services.colony import (
    create_colony,
    delete_colony,
    get_colony,
    list_colonies,
    update_colony,
)
from app.services.rental import close_rental


def test_create_colony(db: Session):
    colony = create_colony(db, user_id="user-1", name="  Sunrise  ", address="")

    assert colony.id
    assert colony.name == "Sunrise"
    assert colony.address is None
    assert colony.user_id == "user-1"


def test_create_colony_requires_name(db: Session):
    with pytest.raises(DomainValidationError):
        create_colony(db, user_id="user-1", name=" ")


def test_list_colonies_only_returns_own(db: Session, colony):
    create_colony(db, user_id="user-2", name="Someone Else's")

    colonies = list_colonies(db, "user-1")

    assert [c.id for c in colonies] == [colony.id]


def test_get_colony_of_other_user_is_not_found(db: Session, colony):
    with pytest.raises(NotFoundError):
        get_colony(db, colony.id, "user-2")


def test_update_colony_partial(db: Session, colony):
    updated = update_colony(db, colony.id, "user-1", name="Renamed")

    assert updated.name == "Renamed"
    assert updated.address == "12 Main Road"

    cleared = update_colony(db, colony.id, "user-1", address=None)
    assert cleared.address is None


def test_update_colony_cannot_clear_name(db: Session, colony):
    with pytest.raises(DomainValidationError):
        update_colony(db, colony.id, "user-1", name="")


def test_delete_colony_cascades(db: Session, colony, acme_rentals):
    close_rental(db, acme_rentals[0].id, date(2024, 2, 1))
    other = create_colony(db, user_id="user-1", name="Keep Me")
    colony_id = colony.id

    delete_colony(db, colony_id, "user-1")

    assert db.query(RoomModel).filter(RoomModel.colony_id == colony_id).count() == 0
    assert db.query(RentalModel).count() == 0
    assert db.query(RentalHistoryModel).count() == 0
    assert [c.id for c in list_colonies(db, "user-1")] == [other.id]


def test_delete_unknown_colony_fails(db: Session):
    with pytest.raises(NotFoundError):
        delete_colony(db, "missing-colony")

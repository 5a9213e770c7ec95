from datetime import date

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id, get_db
from app.schemas.rental import EndRentalRequest, RentalHistory
from app.schemas.room import Room, RoomCreate, RoomGenerate, RoomWithRental
from app.services import rental as rental_service
from app.services import room as room_service
from app.services.colony import get_colony

router = APIRouter(tags=["rooms"])


@router.get("/colonies/{colony_id}/rooms", response_model=list[RoomWithRental])
def get_colony_rooms(
    colony_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Get the rooms of a colony, each with its active rental (if any),
    ordered by room number (R2 before R10).
    """
    get_colony(db, colony_id, user_id)
    rooms = room_service.list_rooms_with_rentals(db, colony_id)
    return [RoomWithRental.model_validate(room) for room in rooms]


@router.post(
    "/colonies/{colony_id}/rooms",
    response_model=Room,
    status_code=status.HTTP_201_CREATED,
)
def create_new_room(
    colony_id: str,
    room_data: RoomCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_colony(db, colony_id, user_id)
    room = room_service.add_room(db, colony_id, room_data.room_number)
    return Room.model_validate(room)


@router.post(
    "/colonies/{colony_id}/rooms/generate",
    response_model=list[Room],
    status_code=status.HTTP_201_CREATED,
)
def generate_colony_rooms(
    colony_id: str,
    data: RoomGenerate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Create `count` Free rooms named `{prefix}{start_from}` onwards.
    """
    get_colony(db, colony_id, user_id)
    rooms = room_service.generate_rooms(
        db, colony_id, count=data.count, prefix=data.prefix, start_from=data.start_from
    )
    return [Room.model_validate(room) for room in rooms]


@router.delete("/rooms/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_room_by_id(
    room_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Delete a room. A room with an active rental cannot be deleted.
    """
    room_service.delete_room(db, room_id, user_id)


@router.post("/rooms/{room_id}/end", response_model=RentalHistory)
def end_room_rental(
    room_id: str,
    data: EndRentalRequest | None = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    End whatever rental occupies a room and free it.
    """
    as_of = (data.as_of if data else None) or date.today()
    record = rental_service.end_rental_for_room(db, room_id, as_of, user_id)
    return RentalHistory.model_validate(record)

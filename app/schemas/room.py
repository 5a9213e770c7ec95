from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.room import RoomStatus
from app.schemas.rental import Rental


class Room(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    colony_id: str
    room_number: str
    status: RoomStatus
    created_at: datetime
    updated_at: datetime


class RoomWithRental(Room):
    rental: Rental | None = None


class RoomCreate(BaseModel):
    room_number: str = Field(..., min_length=1, max_length=50)


class RoomGenerate(BaseModel):
    count: int = Field(..., ge=1, le=500, description="Number of rooms to create")
    prefix: str = Field("R", max_length=20)
    start_from: int = Field(1, ge=0)

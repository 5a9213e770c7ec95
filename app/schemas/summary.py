from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from app.schemas.rental import RentalHistory
from app.schemas.room import RoomWithRental


class CompanySummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    company_name: str
    rooms_count: int
    rooms: list[RoomWithRental]
    total_expected: Decimal
    total_paid: Decimal
    total_pending: Decimal


class CompanyWithHistory(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    company_name: str
    is_active: bool
    current_rooms: list[RoomWithRental]
    history_records: list[RentalHistory]
    total_rooms_ever: int
    total_paid_ever: Decimal
    total_expected_ever: Decimal


class DashboardStats(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_rooms: int
    rented_rooms: int
    free_rooms: int
    total_expected: Decimal
    total_received: Decimal
    total_pending: Decimal

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.domain.rent import duration_between


class Rental(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    room_id: str
    company_name: str
    monthly_rent: Decimal
    contract_start_date: date
    first_month_rent: Decimal
    paid_amount: Decimal
    created_at: datetime
    updated_at: datetime


class BulkAllotRequest(BaseModel):
    room_ids: list[str] = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1, max_length=200)
    monthly_rent: Decimal = Field(..., ge=0, description="Monthly rent (must be >= 0)")
    contract_start_date: date


class PaymentCreate(BaseModel):
    amount: Decimal = Field(..., ge=0, description="Payment amount (must be >= 0)")


class CompanyPaymentCreate(BaseModel):
    company_name: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., ge=0, description="Payment amount (must be >= 0)")


class EndRentalRequest(BaseModel):
    as_of: date | None = Field(None, description="Closing date (defaults to today)")


class RentalHistory(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    rental_id: str | None = None
    room_id: str
    colony_id: str
    room_number: str
    company_name: str
    monthly_rent: Decimal
    first_month_rent: Decimal
    contract_start_date: date
    contract_end_date: date
    total_paid: Decimal
    total_expected: Decimal

    @computed_field
    @property
    def duration_days(self) -> int:
        return duration_between(self.contract_start_date, self.contract_end_date).days

    @computed_field
    @property
    def duration_text(self) -> str:
        return duration_between(self.contract_start_date, self.contract_end_date).text

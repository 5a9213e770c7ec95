from datetime import date

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id, get_db
from app.schemas.rental import (
    BulkAllotRequest,
    CompanyPaymentCreate,
    EndRentalRequest,
    PaymentCreate,
    Rental,
    RentalHistory,
)
from app.services import payment as payment_service
from app.services import rental as rental_service
from app.services import room as room_service
from app.services.colony import get_colony

router = APIRouter(tags=["rentals"])


@router.post(
    "/rentals/bulk-allot",
    response_model=list[Rental],
    status_code=status.HTTP_201_CREATED,
)
def bulk_allot_rooms(
    data: BulkAllotRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Allot rooms to a company, one rental per room. Either every room is
    allotted or none is.
    """
    rentals = room_service.bulk_allot(
        db,
        room_ids=data.room_ids,
        company_name=data.company_name,
        monthly_rent=data.monthly_rent,
        contract_start_date=data.contract_start_date,
        user_id=user_id,
    )
    return [Rental.model_validate(rental) for rental in rentals]


@router.post("/rentals/{rental_id}/payments", response_model=Rental)
def add_rental_payment(
    rental_id: str,
    data: PaymentCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    rental = payment_service.apply_payment_to_rental(db, rental_id, data.amount, user_id)
    return Rental.model_validate(rental)


@router.post("/rentals/{rental_id}/end", response_model=RentalHistory)
def end_rental(
    rental_id: str,
    data: EndRentalRequest | None = None,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    End a rental: archive it into the rental history and free the room.
    """
    as_of = (data.as_of if data else None) or date.today()
    record = rental_service.close_rental(db, rental_id, as_of, user_id)
    return RentalHistory.model_validate(record)


@router.post("/colonies/{colony_id}/companies/payments", response_model=list[Rental])
def add_company_payment(
    colony_id: str,
    data: CompanyPaymentCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Split a payment over all of a company's rentals in the colony,
    proportionally to their monthly rent.
    """
    get_colony(db, colony_id, user_id)
    rentals = payment_service.apply_payment_to_company(
        db, data.company_name, colony_id, data.amount
    )
    return [Rental.model_validate(rental) for rental in rentals]

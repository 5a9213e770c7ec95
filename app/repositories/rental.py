from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from app.db.models.rental import Rental as RentalModel
from app.db.models.room import Room as RoomModel


def get_rental_by_id(db: Session, rental_id: str) -> RentalModel | None:
    """Get a rental by ID."""
    return db.query(RentalModel).filter(RentalModel.id == rental_id).first()


def get_rentals_by_colony_id(db: Session, colony_id: str) -> list[RentalModel]:
    """Get all active rentals on rooms of a colony."""
    return (
        db.query(RentalModel)
        .join(RoomModel, RoomModel.id == RentalModel.room_id)
        .filter(RoomModel.colony_id == colony_id)
        .order_by(RentalModel.created_at, RentalModel.id)
        .all()
    )


def create_rental(
    db: Session,
    room_id: str,
    company_name: str,
    monthly_rent: Decimal,
    contract_start_date: date,
    first_month_rent: Decimal,
) -> RentalModel:
    """Add a new rental to the session. Pure data access - no business logic."""
    db_rental = RentalModel(
        room_id=room_id,
        company_name=company_name,
        monthly_rent=monthly_rent,
        contract_start_date=contract_start_date,
        first_month_rent=first_month_rent,
        paid_amount=Decimal("0"),
    )
    db.add(db_rental)
    db.flush()
    return db_rental


def set_paid_amount(db: Session, rental: RentalModel, paid_amount: Decimal) -> RentalModel:
    rental.paid_amount = paid_amount
    db.flush()
    return rental


def delete_rental(db: Session, rental_id: str) -> None:
    db.query(RentalModel).filter(RentalModel.id == rental_id).delete()

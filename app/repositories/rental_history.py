from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from app.db.models.rental_history import RentalHistory as RentalHistoryModel


def get_history_by_colony_id(db: Session, colony_id: str) -> list[RentalHistoryModel]:
    """Get the rental history of a colony, most recently ended first."""
    return (
        db.query(RentalHistoryModel)
        .filter(RentalHistoryModel.colony_id == colony_id)
        .order_by(
            RentalHistoryModel.contract_end_date.desc(),
            RentalHistoryModel.created_at.desc(),
        )
        .all()
    )


def get_history_by_rental_id(db: Session, rental_id: str) -> RentalHistoryModel | None:
    """Get the archive row written when a rental was closed."""
    return (
        db.query(RentalHistoryModel)
        .filter(RentalHistoryModel.rental_id == rental_id)
        .first()
    )


def create_history(
    db: Session,
    rental_id: str,
    room_id: str,
    colony_id: str,
    room_number: str,
    company_name: str,
    monthly_rent: Decimal,
    first_month_rent: Decimal,
    contract_start_date: date,
    contract_end_date: date,
    total_paid: Decimal,
    total_expected: Decimal,
) -> RentalHistoryModel:
    """Append an archive row to the session. Pure data access - no business logic."""
    record = RentalHistoryModel(
        rental_id=rental_id,
        room_id=room_id,
        colony_id=colony_id,
        room_number=room_number,
        company_name=company_name,
        monthly_rent=monthly_rent,
        first_month_rent=first_month_rent,
        contract_start_date=contract_start_date,
        contract_end_date=contract_end_date,
        total_paid=total_paid,
        total_expected=total_expected,
    )
    db.add(record)
    db.flush()
    return record

"""Payment distribution across a company's rentals."""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

import app.repositories.colony as colony_repo
import app.repositories.rental as rental_repo
from app.db.models.rental import Rental as RentalModel
from app.db.unit_of_work import unit_of_work
from app.domain.company import same_company
from app.domain.rent import ZERO, as_amount, split_proportionally
from app.errors import DomainValidationError, NotFoundError
from app.services.rental import apply_payment, credit_payment, validate_payment_amount

logger = logging.getLogger(__name__)


def apply_payment_to_rental(
    db: Session, rental_id: str, amount, user_id: str | None = None
) -> RentalModel:
    return apply_payment(db, rental_id, amount, user_id)


def apply_payment_to_company(
    db: Session, company_name: str, colony_id: str, amount
) -> list[RentalModel]:
    """
    Spread one payment over all of a company's rentals in a colony.

    Each rental receives ``amount * monthly_rent / total_monthly_rent``
    (rounded to cents, residue on the largest rent). All rentals are updated
    in one transaction.

    Raises:
        DomainValidationError: If amount is negative or every matched rental
            has zero monthly rent
        NotFoundError: If the colony doesn't exist or the company has no
            rentals in it
    """
    value = validate_payment_amount(amount)
    if not colony_repo.get_colony_by_id(db, colony_id):
        raise NotFoundError(f"Colony with id {colony_id} not found")

    rentals = [
        rental
        for rental in rental_repo.get_rentals_by_colony_id(db, colony_id)
        if same_company(rental.company_name, company_name)
    ]
    if not rentals:
        raise NotFoundError(f"No rentals found for company {company_name!r}")

    rents = [as_amount(rental.monthly_rent, "monthly_rent") for rental in rentals]
    if sum(rents, ZERO) == 0:
        raise DomainValidationError(
            f"Cannot distribute payment: rentals of {company_name!r} have zero total rent"
        )
    shares: list[Decimal] = split_proportionally(value, rents)

    with unit_of_work(db, "apply company payment"):
        for rental, share in zip(rentals, shares):
            credit_payment(db, rental, share)

    for rental in rentals:
        db.refresh(rental)
    logger.info(
        "Payment of %s distributed over %d rentals of %r", value, len(rentals), company_name
    )
    return rentals

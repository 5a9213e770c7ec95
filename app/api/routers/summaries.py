from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_as_of, get_current_user_id, get_db
from app.schemas.rental import RentalHistory
from app.schemas.summary import CompanySummary, CompanyWithHistory, DashboardStats
from app.services import summary as summary_service
from app.services.colony import get_colony

router = APIRouter(tags=["summaries"])


@router.get("/dashboard", response_model=DashboardStats)
def get_portfolio_dashboard(
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Room counts and rent totals across all of the current user's colonies.
    """
    stats = summary_service.get_portfolio_dashboard(db, user_id, as_of)
    return DashboardStats.model_validate(stats)


@router.get("/colonies/{colony_id}/dashboard", response_model=DashboardStats)
def get_colony_dashboard(
    colony_id: str,
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_colony(db, colony_id, user_id)
    stats = summary_service.get_colony_dashboard(db, colony_id, as_of)
    return DashboardStats.model_validate(stats)


@router.get("/colonies/{colony_id}/companies", response_model=list[CompanySummary])
def get_company_summaries(
    colony_id: str,
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Current tenants of the colony grouped by company, most rooms first.
    """
    get_colony(db, colony_id, user_id)
    summaries = summary_service.get_company_summaries(db, colony_id, as_of)
    return [CompanySummary.model_validate(summary) for summary in summaries]


@router.get(
    "/colonies/{colony_id}/companies/history",
    response_model=list[CompanyWithHistory],
)
def get_companies_with_history(
    colony_id: str,
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Every company that has ever rented in the colony, active ones first.
    """
    get_colony(db, colony_id, user_id)
    companies = summary_service.get_companies_with_history(db, colony_id, as_of)
    return [CompanyWithHistory.model_validate(company) for company in companies]


@router.get("/colonies/{colony_id}/history", response_model=list[RentalHistory])
def get_colony_history(
    colony_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    get_colony(db, colony_id, user_id)
    records = summary_service.get_rental_history(db, colony_id)
    return [RentalHistory.model_validate(record) for record in records]

"""Read services: fetch a snapshot once, derive every view from it."""

from datetime import date

from sqlalchemy.orm import Session

import app.repositories.colony as colony_repo
import app.repositories.rental_history as history_repo
import app.repositories.room as room_repo
from app.db.models.rental_history import RentalHistory as RentalHistoryModel
from app.domain.aggregation import (
    CompanySummary,
    CompanyWithHistory,
    DashboardStats,
    dashboard_stats,
    merge_current_and_history,
    summarize_by_company,
)
from app.errors import NotFoundError


def _require_colony(db: Session, colony_id: str) -> None:
    if not colony_repo.get_colony_by_id(db, colony_id):
        raise NotFoundError(f"Colony with id {colony_id} not found")


def get_colony_dashboard(db: Session, colony_id: str, as_of: date) -> DashboardStats:
    _require_colony(db, colony_id)
    rooms = room_repo.get_rooms_with_rentals_by_colony_id(db, colony_id)
    return dashboard_stats(rooms, as_of)


def get_portfolio_dashboard(db: Session, user_id: str, as_of: date) -> DashboardStats:
    """Dashboard over every room of every colony the user owns."""
    colony_ids = [colony.id for colony in colony_repo.get_colonies_by_user_id(db, user_id)]
    rooms = room_repo.get_rooms_with_rentals_by_colony_ids(db, colony_ids)
    return dashboard_stats(rooms, as_of)


def get_company_summaries(db: Session, colony_id: str, as_of: date) -> list[CompanySummary]:
    _require_colony(db, colony_id)
    rooms = room_repo.get_rooms_with_rentals_by_colony_id(db, colony_id)
    return summarize_by_company(rooms, as_of)


def get_companies_with_history(
    db: Session, colony_id: str, as_of: date
) -> list[CompanyWithHistory]:
    _require_colony(db, colony_id)
    rooms = room_repo.get_rooms_with_rentals_by_colony_id(db, colony_id)
    history = history_repo.get_history_by_colony_id(db, colony_id)
    return merge_current_and_history(rooms, history, as_of)


def get_rental_history(db: Session, colony_id: str) -> list[RentalHistoryModel]:
    _require_colony(db, colony_id)
    return history_repo.get_history_by_colony_id(db, colony_id)

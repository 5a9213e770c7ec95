from datetime import date

from fastapi import Header, HTTPException, Query, status

from app.db import SessionLocal


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(x_user_id: str | None = Header(None)) -> str:
    """
    Owning user id, as asserted by the upstream identity provider.

    Authentication itself happens before requests reach this service.
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return x_user_id


def get_as_of(
    as_of: date | None = Query(
        None, description="Reference date for rent accrual (defaults to today)"
    ),
) -> date:
    return as_of or date.today()

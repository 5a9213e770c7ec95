import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(db: Session, operation: str) -> Iterator[Session]:
    """
    Run a group of repository writes as one transaction.

    - Commits when the block completes
    - Rolls back on any exception, so a failed composite operation leaves
      no rows written
    - Translates SQLAlchemy failures into StoreError (the original error is
      chained, not altered)
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Store failure during %s: %s", operation, exc)
        raise StoreError(f"Could not {operation}: store error", original=exc) from exc
    except Exception:
        db.rollback()
        raise

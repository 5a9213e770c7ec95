import os
import tempfile
from datetime import date
from pathlib import Path

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_colony_rent.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from app.main import app

ROOT = Path(__file__).resolve().parent.parent
USER_ID = "user-1"


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
        poolclass=None,  # Don't use connection pooling for SQLite
    )

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    # Run Alembic migrations to set up the database schema
    alembic_cfg = Config(str(ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(ROOT / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        test_engine.dispose()

        try:
            for suffix in ["", "-wal", "-shm"]:
                path = f"{test_db_path}{suffix}"
                if os.path.exists(path):
                    os.remove(path)
            if os.path.exists(temp_db_dir):
                os.rmdir(temp_db_dir)
        except OSError as e:
            print(f"Cleanup failed: {e}")


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from app.api.deps import get_db

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


@pytest.fixture(scope="function")
def auth_headers() -> dict:
    return {"X-User-Id": USER_ID}


@pytest.fixture(scope="function")
def colony(db: Session):
    """Create a colony owned by the test user."""
    from app.services.colony import create_colony

    return create_colony(db, user_id=USER_ID, name="Green Park", address="12 Main Road")


@pytest.fixture(scope="function")
def rooms(db: Session, colony):
    """Two free rooms, R1 and R2."""
    from app.services.room import generate_rooms

    return generate_rooms(db, colony.id, count=2, prefix="R", start_from=1)


@pytest.fixture(scope="function")
def acme_rentals(db: Session, rooms):
    """R1 and R2 allotted to Acme at 3000/month from 2024-01-15."""
    from app.services.room import bulk_allot

    return bulk_allot(
        db,
        room_ids=[room.id for room in rooms],
        company_name="Acme",
        monthly_rent=3000,
        contract_start_date=date(2024, 1, 15),
    )

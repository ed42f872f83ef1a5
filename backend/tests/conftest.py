import os
import sys
import tempfile
from pathlib import Path

# Keep the app's default database and log files out of the user's home
_scratch_dir = tempfile.mkdtemp(prefix="rentals-tests-")
os.environ.setdefault("RENTALS_DATA_DIR", _scratch_dir)
os.environ.setdefault("RENTALS_LOG_DIR", str(Path(_scratch_dir) / "logs"))

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from database import set_sqlite_pragma
from models import Base


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across threads (TestClient runs sync routes in a pool)"""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool
    )
    event.listen(engine, "connect", set_sqlite_pragma)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Create in-memory database for testing"""
    session = session_factory()
    yield session
    session.close()

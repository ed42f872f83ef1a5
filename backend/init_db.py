from database import engine, Base
from sqlalchemy import inspect
import logging

import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)

REQUIRED_INDEXES = {
    'rentals': {'uq_rentals_open_user', 'idx_rentals_user_id'},
    'movies': {'idx_movies_rental_id'},
}


def _missing_indexes(bind) -> dict:
    """Indexes from REQUIRED_INDEXES that the live schema lacks, keyed by table"""
    inspector = inspect(bind)
    missing = {}
    for table, names in REQUIRED_INDEXES.items():
        present = {index['name'] for index in inspector.get_indexes(table)}
        absent = names - present
        if absent:
            missing[table] = sorted(absent)
    return missing


def init_database(bind=None):
    """
    Create all tables and indexes that don't exist yet.

    The partial unique index on open rentals is what keeps a user to one open
    rental under concurrent requests, so its absence is logged loudly.

    Args:
        bind: Engine or connection (defaults to the application engine)
    """
    bind = bind if bind is not None else engine
    Base.metadata.create_all(bind=bind)

    missing = _missing_indexes(bind)
    if missing:
        logger.error(f"❌ Database is missing required indexes: {missing}")
    else:
        logger.info("✅ Database schema initialized")
    return missing


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from pathlib import Path

from config.settings import settings
from constants import DatabaseConfig


def _engine_options(database_url: str) -> dict:
    """Pool and driver options for the configured backend"""
    url = make_url(database_url)
    if url.get_backend_name() != 'sqlite':
        return {
            'pool_size': DatabaseConfig.POOL_SIZE,
            'max_overflow': DatabaseConfig.MAX_OVERFLOW,
            'pool_pre_ping': True,
            'pool_recycle': DatabaseConfig.POOL_RECYCLE_SECONDS,
        }

    options = {'connect_args': {'check_same_thread': False}}
    if url.database and url.database != ':memory:':
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        options.update(
            pool_size=DatabaseConfig.POOL_SIZE,
            max_overflow=DatabaseConfig.MAX_OVERFLOW,
            pool_pre_ping=True,
            pool_recycle=DatabaseConfig.POOL_RECYCLE_SECONDS,
        )
    return options


def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute(f"PRAGMA busy_timeout={DatabaseConfig.BUSY_TIMEOUT_MS}")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str):
    """Create an engine, enabling WAL and foreign keys on SQLite connections"""
    engine = create_engine(database_url, echo=False, **_engine_options(database_url))
    if engine.dialect.name == 'sqlite':
        event.listen(engine, "connect", set_sqlite_pragma)
    return engine


engine = create_db_engine(settings.database_url)

SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()

def get_db():
    """Dependency for FastAPI routes"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

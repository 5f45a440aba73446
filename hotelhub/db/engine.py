"""
SQLAlchemy engine singleton with connection pooling.

A single engine instance is shared by the request handlers; every booking
attempt checks connections out of this pool for its reads and writes.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from hotelhub.config import DATABASE_URL

if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set.")

engine: Engine = create_engine(
    DATABASE_URL,
    future=True,
    pool_size=10,
    max_overflow=20,
    pool_pre_ping=True,  # detect stale connections
    pool_recycle=3600,
    echo=False,
)


def check_engine_health() -> bool:
    """
    Check if database engine is healthy and connections are working.

    Used by the /ready endpoint and by the integration test suite to decide
    whether PostgreSQL is reachable.

    Returns:
        bool: True if database is reachable and healthy, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False

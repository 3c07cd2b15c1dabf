# schoolhub/db/session.py
import logging
import re

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from schoolhub.core.config import settings

logger = logging.getLogger(__name__)


def _mask(u: str) -> str:
    """Hide the password part of a URL before logging it."""
    return re.sub(r"://([^:]+):([^@]+)@", r"://\1:***@", u)


def _engine_options(url: str) -> dict:
    # SQLite (local runs, tests) has no connection pool to tune
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


db_url = settings.db_url
logger.info("[DB] Using: %s", _mask(db_url))

engine = create_engine(db_url, echo=False, **_engine_options(db_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """FastAPI dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

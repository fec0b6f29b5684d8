"""
Database session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session
from app.core.config import settings
from app.db.base import Base


def engine_options(database_url: str) -> dict:
    """Engine keyword arguments for the configured backend."""
    options = {"echo": settings.DB_ECHO, "pool_pre_ping": True}
    if make_url(database_url).get_backend_name() == "sqlite":
        # SQLite connections are shared with the request threadpool
        options["connect_args"] = {"check_same_thread": False}
    else:
        # MySQL drops idle connections after wait_timeout
        options["pool_recycle"] = 3600
    return options


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Yield a session for one request and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create the ledger, directory and personal budgeting tables."""
    # Models register themselves on Base.metadata when imported
    import app.models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)

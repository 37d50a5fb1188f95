"""DB connection and session management"""
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .config import DATABASE_URL

IS_SQLITE = DATABASE_URL.startswith("sqlite")

# request sessions run on FastAPI's threadpool
connect_args = {"check_same_thread": False} if IS_SQLITE else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args, echo=False)

if IS_SQLITE:
    @event.listens_for(engine, "connect")
    def _tune_sqlite(dbapi_conn, connection_record):
        """nearby reads run alongside location writes; WAL keeps them from blocking"""
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.close()

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class Base(DeclarativeBase):
    pass


def init_db(bind=None):
    """Create all tables (no-op for existing ones)"""
    from . import models  # noqa: F401  registers tables on Base.metadata
    bind = bind or engine
    db_path = bind.url.database
    if bind.url.get_backend_name() == "sqlite" and db_path and db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=bind)


def get_db():
    """For FastAPI Depends"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shipweight.core.config import settings


def _create_engine(dsn: str) -> Engine:
    if "sqlite" not in dsn:
        return create_engine(dsn, pool_pre_ping=True)

    sqlite_engine = create_engine(dsn, connect_args={"check_same_thread": False})

    # SQLite leaves foreign keys off per connection; ON DELETE rules depend on them.
    @event.listens_for(sqlite_engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return sqlite_engine


engine = _create_engine(settings.APP_DATABASE_DSN)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables; migrations are the path for existing databases."""
    import shipweight.models  # noqa: F401

    Base.metadata.create_all(bind=engine)

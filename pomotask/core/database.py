import sqlite3

from sqlalchemy import create_engine, event, String
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.types import TypeDecorator

from pomotask.core.config import settings
from pomotask.core.timeutils import to_rfc3339, parse_rfc3339

DATABASE_URL = settings.DATABASE_URL


def make_engine(url: str, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, echo=False, **kwargs)


engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite n'applique les ON DELETE CASCADE qu'avec ce pragma
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON;")
        cursor.close()


class RFC3339DateTime(TypeDecorator):
    """Timezone-aware instant stored as UTC RFC 3339 text."""

    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return to_rfc3339(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return parse_rfc3339(value)


def get_db():
    """Dépendance sessionDB"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

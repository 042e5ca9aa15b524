"""
Database connection, session management, and table creation.
Uses SQLAlchemy with PostgreSQL. All models are auto-imported here
so create_tables() creates every table in one call.
"""

import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from transport_admin.config import settings

_engine_kwargs = {"pool_pre_ping": True, "echo": False}
if not settings.DATABASE_URL.startswith("sqlite"):
    _engine_kwargs.update(pool_size=10, max_overflow=20)

engine = create_engine(settings.DATABASE_URL, **_engine_kwargs)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


@event.listens_for(Engine, "connect")
def _register_sqlite_functions(dbapi_connection, connection_record):
    """SQLite's built-in lower() only folds ASCII; replace it so searches match 'Štrand' for 'štrand'."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)


def get_gateway():
    """FastAPI dependency: yields a gateway over one DB session and closes it after request."""
    from transport_admin.gateway import SqlAlchemyGateway

    db = SessionLocal()
    try:
        yield SqlAlchemyGateway(db)
    finally:
        db.close()


def create_tables(bind=None):
    """
    Creates all DB tables. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from transport_admin.models.station import Station   # noqa
    from transport_admin.models.driver import Driver     # noqa
    from transport_admin.models.vehicle import Vehicle   # noqa

    Base.metadata.create_all(bind=bind or engine)

"""Shared fixtures. Points the app at in-memory SQLite before anything imports the engine."""

import os
import sys

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.pop("API_KEY", None)
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from transport_admin.database import create_tables
from transport_admin.gateway import InMemoryGateway, SqlAlchemyGateway


@pytest.fixture
def memory_gateway():
    return InMemoryGateway()


@pytest.fixture
def sqlite_gateway():
    engine = create_engine("sqlite://")
    create_tables(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False)()
    yield SqlAlchemyGateway(session)
    session.close()
    engine.dispose()


@pytest.fixture(params=["memory", "sqlite"])
def gateway(request):
    """Runs a test once per gateway implementation."""
    return request.getfixturevalue(f"{request.param}_gateway")

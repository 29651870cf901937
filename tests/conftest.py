"""Shared fixtures: an in-memory database and the API wired to it."""

import random
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stockmarket.database import Base, get_db
from stockmarket.dependencies import get_event_service, get_simulator
from stockmarket.events import EventService
from stockmarket.main import app
from stockmarket.simulator import PriceSimulator
from stockmarket.store import SqlAlchemyStockStore


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def publisher():
    return MagicMock()


@pytest.fixture
def events(publisher):
    return EventService(publisher, "price-topic", "transaction-topic")


@pytest.fixture
def simulator(session_factory, events):
    return PriceSimulator(SqlAlchemyStockStore(session_factory), events, rng=random.Random(42))


@pytest.fixture
def client(session_factory, events, simulator):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_service] = lambda: events
    app.dependency_overrides[get_simulator] = lambda: simulator
    # Not entered as a context manager, so startup (seeding, scheduler) is skipped
    yield TestClient(app)
    app.dependency_overrides.clear()

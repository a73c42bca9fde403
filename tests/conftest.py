"""Shared pytest fixtures and test helpers for the stats API tests."""

from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import models  # noqa: F401 - registers the tables on Base.metadata
from config import Settings
from database import Base, make_session_factory
from main import create_app
from models import DailyParticipant, RetrievalStats
from routers.stats import get_clock

# Fixed wall clock used by the HTTP tests: midday UTC, so "today" is unambiguous
NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
TODAY = "2024-01-15"


def fixed_clock(now: datetime):
    return lambda: now


@pytest.fixture
def db_engine() -> Engine:
    """In-memory SQLite engine shared by every connection, tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def db_session(db_engine: Engine) -> Session:
    session = make_session_factory(db_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(db_engine: Engine):
    settings = Settings(DATABASE_URL="sqlite://", REQUEST_LOGGING=False, SENTRY_DSN="")
    app = create_app(settings, engine=db_engine)
    app.dependency_overrides[get_clock] = lambda: fixed_clock(NOW)
    return app


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app, raise_server_exceptions=False, follow_redirects=False) as c:
        yield c


# ---------------------------------------------------------------------------
# Seeding helpers
# ---------------------------------------------------------------------------


def given_retrieval_stats(
    db: Session, day: str, total: int, successful: int, miner_id: str = "f1test"
) -> None:
    db.add(
        RetrievalStats(
            day=date.fromisoformat(day), miner_id=miner_id, total=total, successful=successful
        )
    )
    db.commit()


def given_daily_participants(db: Session, day: str, addresses: list[str]) -> None:
    # participant ids come from the upstream participants table, any stable
    # mapping from address to int is good enough here
    for address in addresses:
        db.add(DailyParticipant(day=date.fromisoformat(day), participant_id=int(address, 16)))
    db.commit()

"""
Pytest fixtures for the test suite.

Data-layer tests use an in-memory SQLite engine and a session that rolls back
after each test. API tests get a seeded in-memory database shared by one
TestClient through `dependency_overrides`.
"""
from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import Request
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


TEST_DB_URL = "sqlite:///:memory:"
REPO_ROOT = Path(__file__).resolve().parents[1]
SECURITY_CONFIG_PATH = REPO_ROOT / "config" / "security_config.yaml"


@pytest.fixture
def engine():
    """Create a fresh in-memory SQLite engine for each test."""
    return create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )


@pytest.fixture
def tables(engine):
    """Create all ORM tables on the test engine."""
    from grc_portal.db import filters as _filters  # noqa: F401  (register SQLAlchemy filters)
    from grc_portal.db.base import Base
    from grc_portal.models import grc as _grc  # noqa: F401
    from grc_portal.models import security as _security  # noqa: F401

    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def db_session(tables):
    """
    Provide a Session bound to the test DB; roll back after each test.

    The transaction is rolled back so the next test gets a clean state.
    """
    connection = tables.connect()
    transaction = connection.begin()
    TestSession = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        class_=Session,
    )
    session = TestSession()
    yield session
    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def session_factory(tables):
    """Session factory over a database holding the synced roles and demo data."""
    from grc_portal.db.init_db import seed_demo_data, sync_roles

    factory = sessionmaker(bind=tables, autocommit=False, autoflush=False, class_=Session)
    with factory() as db:
        sync_roles(db)
        seed_demo_data(db)
        db.commit()
    yield factory
    tables.dispose()


@pytest.fixture
def ids(session_factory):
    """Look up seeded ids: users by username, departments by code, risks by title, controls by code."""
    from grc_portal.models.grc import Control, Risk
    from grc_portal.models.security import Department, User

    with session_factory() as db:
        return {
            "users": {u.username: u.id for u in db.scalars(select(User)).all()},
            "departments": {d.code: d.id for d in db.scalars(select(Department)).all()},
            "risks": {r.title: r.id for r in db.scalars(select(Risk)).all()},
            "controls": {c.code: c.id for c in db.scalars(select(Control)).all()},
        }


@pytest.fixture
def client(session_factory):
    from grc_portal.db.session import attach_authz, get_db
    from grc_portal.main import create_app
    from grc_portal.security.config import load_security_config

    app = create_app()
    # Lifespan is not run by a bare TestClient; load what startup would.
    app.state.security_config = load_security_config(SECURITY_CONFIG_PATH)

    def override_get_db(request: Request):
        db = session_factory()
        try:
            yield attach_authz(db, request)
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def auth_headers(ids):
    def _headers(username: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {ids['users'][username]}"}

    return _headers

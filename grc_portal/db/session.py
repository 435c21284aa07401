from __future__ import annotations

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from grc_portal.settings import get_settings


_settings = get_settings()

engine = create_engine(
    _settings.db_url,
    connect_args={"check_same_thread": False} if _settings.db_url.startswith("sqlite") else {},
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, class_=Session)


def attach_authz(db: Session, request: Request) -> Session:
    """Expose the request's session user to the ORM scoping filter (see grc_portal/db/filters.py)."""
    authz = getattr(getattr(request, "state", None), "authz", None)
    if authz is not None:
        db.info["authz"] = authz
    return db


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Main DB dependency.

    Handlers keep writing plain `select(Risk)` queries; department scoping is
    added by the `do_orm_execute` listener reading `Session.info["authz"]`.
    """

    db = SessionLocal()
    try:
        yield attach_authz(db, request)
    finally:
        db.close()

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from teamlink.core.config import get_settings
from teamlink.core.exceptions import InvalidOperationError

logger = logging.getLogger(__name__)

settings = get_settings()

DATABASE_URL = settings.database_url  # fail fast if missing

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    future=True,
)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unique_guard(db: Session, message: str) -> Iterator[None]:
    """
    Commit the enclosed writes as one transaction.

    A uniqueness violation raised by the database (a concurrent request won
    the check-then-insert race) is rolled back and surfaced as
    InvalidOperationError carrying `message`.
    """
    try:
        yield
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("integrity violation translated: %s", exc.orig)
        raise InvalidOperationError(message) from exc

# src/database.py
import logging
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from core.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Engine and session factory, built once per process and shared by handlers."""

    def __init__(self, url: str, engine: Optional[Engine] = None):
        self.url = url
        self.engine = engine or self._create_engine(url)
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    @staticmethod
    def _create_engine(url: str) -> Engine:
        if url.startswith("sqlite"):
            # In-memory sqlite needs a single shared connection across threads
            return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
        return create_engine(url, pool_pre_ping=True)

    def create_all(self) -> None:
        logger.info("Creating database schema")
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """Yield a session from the application's database for a single request."""
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise ServiceUnavailableError("Database is not configured")
    db = database.session()
    try:
        yield db
    finally:
        db.close()

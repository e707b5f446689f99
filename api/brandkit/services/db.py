from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..models.records import Base

logger = logging.getLogger(__name__)


class Database:
    """Engine and session factory for one database URL.

    Constructed once at startup and shared by every request; sessions are
    short-lived and opened per operation.
    """

    def __init__(self, url: str):
        self.url = url
        kwargs = {"pool_pre_ping": True}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # Single shared connection so every session sees the same in-memory DB
                kwargs["poolclass"] = StaticPool
        self.engine = create_engine(url, **kwargs)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, autocommit=False, expire_on_commit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        session: Session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ensured", extra={"dialect": self.engine.dialect.name})

    def ping(self) -> bool:
        """Execute SELECT 1; False when the database is unreachable."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()

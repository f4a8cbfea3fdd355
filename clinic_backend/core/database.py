import logging
from typing import Generator, Optional

import redis
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Owns the engine and session factory for one application instance.

    Opened once at startup, disposed on shutdown. Every unit of work gets its
    own session from ``session()``.
    """

    def __init__(self, url: str):
        self.url = url
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    def open(self) -> "Database":
        if self.url.startswith("sqlite"):
            engine = create_engine(
                self.url, connect_args={"check_same_thread": False}
            )
        else:
            engine = create_engine(
                self.url,
                pool_size=5,
                max_overflow=10,
                pool_timeout=30,
                pool_recycle=1800,  # Recycle connections after 30 minutes
            )
        self.engine = engine
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        return self

    def create_all(self) -> None:
        """Create tables that do not exist yet."""
        # Register every model on Base.metadata
        from .. import models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Database is not open")
        return self._session_factory()

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
            self._session_factory = None

    @property
    def dialect(self) -> str:
        if "postgresql" in self.url:
            return "PostgreSQL"
        if "sqlite" in self.url:
            return "SQLite"
        return "Unknown"


def create_redis_client(url: str):
    """Create the redis client used for rate limiting."""
    return redis.from_url(url, decode_responses=True)


# Database dependency
def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()

# Redis dependency
def get_redis(request: Request):
    """Get Redis client."""
    return request.app.state.redis

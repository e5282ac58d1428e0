import logging
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import settings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


class Database:
    """Process-wide connection pool handle, created on first use."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._sessionmaker: Optional[sessionmaker] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            # check_same_thread is needed for SQLite only
            connect_args = {"check_same_thread": False} if self.url.startswith("sqlite") else {}
            self._engine = create_engine(
                self.url,
                echo=self.echo,
                pool_pre_ping=True,
                connect_args=connect_args,
            )
            logger.info("Database engine created")
        return self._engine

    def session(self) -> Session:
        if self._sessionmaker is None:
            self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        return self._sessionmaker()

    def dispose(self) -> None:
        """Close pooled connections; called on application shutdown."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
        self._sessionmaker = None


database = Database(settings.DATABASE_URL, echo=settings.DEBUG)


# Dependency for routes
def get_db() -> Generator[Session, None, None]:
    """Database session dependency for FastAPI routes"""
    db = database.session()
    try:
        yield db
    finally:
        db.close()

"""
Database configuration and session management.
Uses SQLAlchemy 2.0 patterns.
"""

from collections.abc import Callable, Generator
from contextlib import contextmanager
from functools import wraps
from typing import Any, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from starter_shared.config.settings import DATABASE_URL

F = TypeVar("F", bound=Callable[..., Any])


def _engine_options(url: str) -> dict[str, Any]:
    """Pool settings for server databases; SQLite only needs cross-thread access."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": 10,
        "max_overflow": 15,
        "pool_timeout": 30,  # Wait max 30s for connection from pool
        "pool_recycle": 1800,  # Recycle connections after 30 minutes
    }


def build_engine(url: str = DATABASE_URL) -> Engine:
    """Create an engine for the given URL."""
    return create_engine(url, echo=False, **_engine_options(url))


engine = build_engine()

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()

    The session is automatically closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of FastAPI.

    Usage:
        with get_db_context() as db:
            db.query(Item).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def safe_commit(db: Session) -> None:
    """
    Commit with automatic rollback on failure.

    Raises the original exception after rolling back.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise


def transactional(read_only: bool = False) -> Callable[[F], F]:
    """
    Run a service method as one logical transaction.

    The decorated method must belong to an object exposing the session as
    ``self.db``. Write methods are committed with safe_commit() when they
    return; any exception rolls the session back and propagates. Read-only
    methods never commit.

    Usage:
        class UserService:
            @transactional()
            def add(self, entity): ...

            @transactional(read_only=True)
            def find_all(self): ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(self, *args: Any, **kwargs: Any) -> Any:
            db: Session = self.db
            try:
                result = func(self, *args, **kwargs)
            except Exception:
                db.rollback()
                raise
            if not read_only:
                safe_commit(db)
            return result

        wrapper.read_only = read_only  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator

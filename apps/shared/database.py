"""
Database configuration and session management

This module provides the basic SQLAlchemy setup for database connectivity.
NO models are defined here - this is just infrastructure.
"""

import os
from contextlib import contextmanager
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import NullPool

# Get database URL from environment variable
DATABASE_URL = os.getenv("DATABASE_URL", "postgresql+psycopg2://portfolio_user:changeme@db:5432/portfolio_db")

IS_SQLITE = DATABASE_URL.startswith("sqlite")

# Create engine
# Using NullPool for better compatibility with containerized environments
engine = create_engine(
    DATABASE_URL,
    poolclass=NullPool,
    connect_args={"check_same_thread": False} if IS_SQLITE else {},
    echo=False,  # Set to True for SQL query logging during development
)

if IS_SQLITE:
    # SQLite ignores foreign keys unless asked per connection
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for ORM models
Base = declarative_base()


def get_db():
    """
    Dependency injection for database sessions
    Usage in FastAPI endpoints:

    @app.get("/endpoint")
    def endpoint(db: Session = Depends(get_db)):
        # use db here
        pass
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """
    Scope a unit of work to a single commit.

    Commits when the block exits normally, rolls back and re-raises on any
    exception so a multi-row operation never lands half-applied.

    Usage:
        with transaction(db):
            db.query(Child).filter(...).delete()
            db.delete(parent)
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def check_db_connection() -> bool:
    """
    Test database connectivity
    Returns True if connection successful, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False

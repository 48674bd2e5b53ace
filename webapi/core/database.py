"""
Database connection and session management.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from webapi.core.config import settings

# Create declarative base for models
Base = declarative_base()

# Database URL
DATABASE_URL = settings.database_url


def get_engine_kwargs(database_url: str) -> dict:
    """Engine options for the configured backend."""
    if database_url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "echo": False,
        }
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_timeout": settings.database_pool_timeout,
        "pool_recycle": settings.database_pool_recycle,
        "pool_pre_ping": True,
        "echo": settings.debug,  # Log SQL queries in debug mode
    }


engine = create_engine(DATABASE_URL, **get_engine_kwargs(DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency functions
def get_db():
    """Get database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Database initialization
def init_db():
    """Initialize database tables."""
    import webapi.models  # noqa: F401  registers every table on Base.metadata

    Base.metadata.create_all(bind=engine)


def close_db():
    """Close database connections."""
    engine.dispose()

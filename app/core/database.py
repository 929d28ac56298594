from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.core.config import settings


def engine_options(url: str) -> dict:
    """Engine keyword arguments for `url`; SQLite gets no pool sizing."""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using them
        "pool_size": 10,
        "max_overflow": 20,  # Allow up to 20 connections beyond pool_size
    }


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Initialize database.

    Imports the models so they register on Base.metadata, then creates any
    missing tables (companies, jobs, users). Existing tables are left as is.
    """
    from app.models import company, job, user  # noqa: F401  Import models to register them
    Base.metadata.create_all(bind=bind or engine)

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from studytrack.config import settings

# SQLAlchemy Base class for models to inherit
Base = declarative_base()


def _engine_options(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    options = {"connect_args": {"check_same_thread": False}}
    # In-memory databases live per connection, so share a single one
    if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
        options["poolclass"] = StaticPool
    return options


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

# Factory that creates DB sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Create all tables"""
    # Import models so they register with the metadata
    import studytrack.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def commit_or_rollback(db):
    """Commit, or undo the whole unit of work and re-raise on failure"""
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

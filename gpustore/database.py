# gpustore/database.py
from sqlmodel import SQLModel, create_engine, Session

from gpustore.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Connection setup
#
# - Postgres: enforce sslmode=require and validate pooled
#   connections before use (pool_pre_ping).
# - SQLite: allow the connection to be shared across the
#   threads FastAPI runs sync endpoints on.
# ---------------------------------------------------------


def _engine_kwargs(db_url: str) -> tuple[str, dict]:
    if db_url.startswith("sqlite"):
        return db_url, {"connect_args": {"check_same_thread": False}}

    # Append sslmode=require if it is not already present
    if db_url.startswith("postgresql") and "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    return db_url, {"pool_pre_ping": True}


db_url, engine_kwargs = _engine_kwargs(settings.DATABASE_URL)

engine = create_engine(
    db_url,
    echo=settings.DB_ECHO,
    **engine_kwargs,
)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def dispose_engine() -> None:
    """Release pooled connections on application shutdown."""
    engine.dispose()


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session

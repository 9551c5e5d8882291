# storefront/database.py
from sqlmodel import SQLModel, create_engine, Session

from storefront.core.config import get_settings

settings = get_settings()


def _normalize_url(url: str) -> str:
    """Hosted Postgres (Supabase) only accepts SSL connections."""
    if url.startswith("postgresql") and "sslmode=" not in url:
        return url + ("&" if "?" in url else "?") + "sslmode=require"
    return url


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # Sync endpoints run in FastAPI's threadpool
        return {"connect_args": {"check_same_thread": False}}
    # One connection through the Supabase pooler, no overflow
    return {"pool_size": 1, "max_overflow": 0}


db_url = _normalize_url(settings.DATABASE_URL)

engine = create_engine(
    db_url,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    **_engine_kwargs(db_url),
)


def create_db_and_tables() -> None:
    """Create missing tables; run once at startup."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    Request-scoped session dependency. Services decide when to commit.
    """
    with Session(engine) as session:
        yield session

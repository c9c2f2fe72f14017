# olimpiadas/database.py
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from olimpiadas.core.config import get_settings

settings = get_settings()


def build_engine(db_url: str, echo: bool = False) -> Engine:
    """
    Engine for the Supabase Postgres pooler, or for SQLite.

    Postgres:
      - sslmode=require unless the URL already sets an sslmode
      - pool_size=1 / max_overflow=0: Supabase session mode caps the
        number of clients ("MaxClientsInSessionMode")
      - pool_pre_ping: drop connections the pooler closed

    SQLite (local runs, tests): a single connection shared across
    threads, so an in-memory database survives between sessions.
    """
    url = make_url(db_url)

    if url.get_backend_name() == "sqlite":
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if "sslmode" not in url.query:
        url = url.update_query_dict({"sslmode": "require"})

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


engine = build_engine(settings.DATABASE_URL)


def create_db_and_tables() -> None:
    """Create missing tables. Called once at startup."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency yielding one Session per request.

        @router.get("/events")
        def list_events(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session

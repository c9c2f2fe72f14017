from sqlalchemy.pool import StaticPool

from olimpiadas.database import build_engine


def test_postgres_requires_ssl():
    engine = build_engine("postgresql://user:pw@pooler.supabase.com:6543/postgres")

    assert engine.url.query["sslmode"] == "require"
    assert engine.pool.size() == 1


def test_postgres_keeps_explicit_sslmode():
    engine = build_engine("postgresql://user:pw@localhost:5432/db?sslmode=disable")
    assert engine.url.query["sslmode"] == "disable"


def test_sqlite_shares_one_connection():
    engine = build_engine("sqlite://")
    assert isinstance(engine.pool, StaticPool)

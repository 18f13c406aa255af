# healthstore/db/core.py

from urllib.parse import urlparse, parse_qsl, urlencode, urlunparse

from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool

from healthstore.config import settings
from healthstore.core.logging import get_logger

log = get_logger("db")

# ---------------------------------------------------------
# Resolve DATABASE_URL
# ---------------------------------------------------------

def normalize_db_url(raw: str) -> str:
    # 1) Normalize Postgres URI → psycopg2 driver
    url = raw.replace("postgres://", "postgresql://", 1)
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg2://", 1)

    if url.startswith("sqlite"):
        return url

    # 2) Add sslmode=require for cloud DBs (not localhost)
    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    query = dict(parse_qsl(parsed.query, keep_blank_values=True))
    if host not in ("localhost", "127.0.0.1", "::1") and "sslmode" not in query:
        query["sslmode"] = "require"
    return urlunparse(parsed._replace(query=urlencode(query)))


url = normalize_db_url(settings.database_url)
log.info("database backend: %s", urlparse(url).scheme)

# ---------------------------------------------------------
# SQLite special handling
# ---------------------------------------------------------
if url.startswith("sqlite"):
    engine_kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise every thread sees an empty DB
        engine_kwargs["poolclass"] = StaticPool
else:
    engine_kwargs = {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
    }

engine = create_engine(url, **engine_kwargs)

# ---------------------------------------------------------
# DB Init + Session
# ---------------------------------------------------------

def init_db() -> None:
    """
    Ensure tables exist. Called at startup in healthstore/main.py.
    """
    from healthstore.db import models  # noqa: F401  registers tables on SQLModel.metadata
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    Dependency for FastAPI endpoints.
    """
    with Session(engine) as session:
        yield session

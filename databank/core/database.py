# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""SQLAlchemy engine singleton."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from databank.core.config import settings


def build_engine(url: str) -> Engine:
    """Create an engine, passing pool and timeout settings the dialect understands."""
    parsed = make_url(url)
    backend = parsed.get_backend_name()
    if backend == "sqlite":
        if parsed.database in (None, "", ":memory:"):
            # in-memory databases get a SingletonThreadPool, which has no checkout timeout
            return create_engine(url, connect_args={"check_same_thread": False})
        return create_engine(
            url,
            pool_timeout=settings.POOL_TIMEOUT,
            connect_args={"check_same_thread": False},
        )

    connect_args = {}
    if backend == "postgresql":
        connect_args["options"] = f"-c statement_timeout={settings.STATEMENT_TIMEOUT_MS}"
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.POOL_SIZE,
        max_overflow=settings.MAX_OVERFLOW,
        pool_recycle=settings.POOL_RECYCLE,
        pool_timeout=settings.POOL_TIMEOUT,
        connect_args=connect_args,
    )


engine = build_engine(settings.DATABASE_URL)

import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from addressbook.config.settings import Settings

logger = logging.getLogger(__name__)


def _is_memory_url(url) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_db_engine(settings: Settings) -> Engine:
    """
    Create the process-wide Engine for the address-book database.

    For file-backed sqlite URLs the parent directory is created first (a fresh install
    has no ./Database directory yet). In-memory URLs share one connection through a
    StaticPool so every checkout sees the same database.

    Args:
        settings: application Settings (DATABASE_URL, SQLALCHEMY_ECHO).

    Returns:
        Engine: opened once at start-up and held for the repository's lifetime.
    """
    url = make_url(settings.DATABASE_URL)
    kwargs: dict = {"echo": settings.SQLALCHEMY_ECHO}

    if url.get_backend_name() == "sqlite":
        if _is_memory_url(url):
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, **kwargs)

    logger.info("db.engine.created", extra={"backend": url.get_backend_name(), "database": url.database})
    return engine


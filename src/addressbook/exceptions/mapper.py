import re
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from .integrity_classifier import classify_integrity_error, UniqueConstraintError
from .base import DuplicateError, RepositoryError

logger = logging.getLogger(__name__)

# -----------------------
# Column extraction helpers
# -----------------------

_SQLITE_CONSTRAINT_RE = re.compile(
    r'(?:UNIQUE|NOT NULL|CHECK) constraint failed: (?P<cols>.+)$', flags=re.IGNORECASE
)


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of column names from the sqlite message, e.g.
    'UNIQUE constraint failed: default_table.username' -> ['username'].
    """
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)

    m = _SQLITE_CONSTRAINT_RE.search(msg)
    if not m:
        return None
    return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(exc: IntegrityError, table: str | None = None) -> None:
    """
    Raise DuplicateError for a uniqueness violation; re-raise anything else unchanged.

    Only the uniqueness violation has a domain meaning. Other constraint failures are
    storage errors and reach the caller as the original IntegrityError.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)

    if exc_cls is UniqueConstraintError:
        columns = extract_columns_from_integrity(exc)
        # INFO: duplicates are an expected user-level outcome
        logger.info(
            "mapper.duplicate_detected",
            extra={"table": table, "fields": columns, "constraint": constraint_name},
        )
        raise DuplicateError(fields=columns, constraint=constraint_name) from exc

    logger.warning(
        "mapper.unmapped_integrity_error",
        extra={"table": table, "constraint": constraint_name},
    )
    raise exc


# -----------------------
# Context manager to DRY error handling in repositories
# -----------------------
@contextmanager
def db_error_handler(conn: Connection, table: str | None = None) -> Iterator[None]:
    """
    Usage:
        with self.engine.connect() as conn:
            with db_error_handler(conn, table):
                conn.execute(...)
                conn.commit()

    Rolls back the connection on any error. A uniqueness violation becomes a DuplicateError;
    every other exception propagates unchanged.
    """
    try:
        yield
    except IntegrityError as exc:
        _safe_rollback(conn, table)
        raise_mapped_integrity_error(exc, table)
    except RepositoryError:
        _safe_rollback(conn, table)
        raise
    except Exception:
        _safe_rollback(conn, table)
        logger.exception("repo.storage_error", extra={"table": table})
        raise


def _safe_rollback(conn: Connection, table: str | None) -> None:
    try:
        conn.rollback()
    except Exception:
        # If rollback fails that is unusual; log with stack at ERROR and keep the original error.
        logger.exception("Failed to rollback connection", extra={"table": table})

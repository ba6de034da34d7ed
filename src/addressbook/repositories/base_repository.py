"""
Base repository providing table-scoped database operations.

The address book stores the same fixed schema under many runtime-chosen table names,
so every operation here takes the table name as its first, positional-only argument
and builds the SQLAlchemy Core `Table` on the fly. Column values travel as keyword
arguments, which is why the table argument can never be passed by keyword: the schema
has a `name` column.

Callers must pass names that already went through `validate_table_name`; this layer
never sees raw user input. `EntryRepository` is the only caller and enforces that.
"""
import logging
import time
from typing import Any

from sqlalchemy import delete, func, insert, literal_column, select, update
from sqlalchemy.engine import Engine, Row

from addressbook.database.base import entry_table, sqlite_master
from addressbook.exceptions.mapper import db_error_handler

# Setup logging
logger = logging.getLogger(__name__)


def same_table(a: str, b: str) -> bool:
    """SQLite identifiers are case-insensitive; compare table names accordingly."""
    return a.casefold() == b.casefold()


class BaseRepository:
    """
    Generic table-scoped CRUD and catalog operations over a sync SQLAlchemy Engine.

    Each public method opens its own connection, runs inside `db_error_handler`
    (rollback + uniqueness mapping) and commits on success.
    """

    def __init__(self, engine: Engine):
        """
        Args:
            engine: the Engine opened at start-up; shared for the repository's lifetime.
        """
        self.engine = engine

    # =================================================================================================================
    # Catalog Operations
    # =================================================================================================================

    def table_names(self) -> list[str]:
        """
        Return the user tables in creation order.

        sqlite's own bookkeeping tables (sqlite_sequence, ...) all contain "sql" and are
        filtered out by the same rule that keeps callers from naming a table that way.
        """
        stmt = (
            select(sqlite_master.c.name)
            .where(sqlite_master.c.type == "table")
            .where(sqlite_master.c.name.not_like("%sql%"))
            .order_by(literal_column("rowid"))
        )
        with self.engine.connect() as conn:
            return list(conn.execute(stmt).scalars())

    def catalog_name(self, table: str, /) -> str | None:
        """
        Return the table's name as spelled in the catalog, or None if there is no such table.

        The lookup ignores case: `catalog_name("REPORTS")` finds a table created as "reports"
        and returns "reports".
        """
        stmt = (
            select(sqlite_master.c.name)
            .where(sqlite_master.c.type == "table")
            .where(func.lower(sqlite_master.c.name) == table.lower())
            .limit(1)
        )
        with self.engine.connect() as conn:
            return conn.execute(stmt).scalar_one_or_none()

    def has_table(self, table: str, /) -> bool:
        return self.catalog_name(table) is not None

    def create_table(self, table: str, /) -> None:
        """Create `table` with the entry schema; a no-op if it already exists."""
        start = time.perf_counter()
        with self.engine.connect() as conn:
            with db_error_handler(conn, table):
                entry_table(table).create(conn, checkfirst=True)
                conn.commit()

        logger.info(
            "repo.create_table.success",
            extra={"table": table, "operation": "create_table", "duration_ms": _elapsed_ms(start)},
        )

    def drop_table(self, table: str, /) -> None:
        start = time.perf_counter()
        with self.engine.connect() as conn:
            with db_error_handler(conn, table):
                entry_table(table).drop(conn)
                conn.commit()

        logger.info(
            "repo.drop_table.success",
            extra={"table": table, "operation": "drop_table", "duration_ms": _elapsed_ms(start)},
        )

    def delete_all(self, table: str, /) -> int:
        """
        Delete every row of `table`; the table itself stays.

        Returns:
            int: number of rows removed.
        """
        start = time.perf_counter()
        with self.engine.connect() as conn:
            with db_error_handler(conn, table):
                result = conn.execute(delete(entry_table(table)))
                removed = result.rowcount
                conn.commit()

        logger.info(
            "repo.delete_all.success",
            extra={
                "table": table,
                "operation": "delete_all",
                "rows": removed,
                "duration_ms": _elapsed_ms(start),
            },
        )
        return removed

    # =================================================================================================================
    # Row Operations
    # =================================================================================================================

    def create(self, table: str, /, **values: Any) -> int:
        """
        Insert one row into `table`.

        Logging:
        - DEBUG: start event with the provided keys (not values).
        - INFO: success event with the new id and duration_ms.
        - Duplicates are logged by the mapper and raised as DuplicateError.

        Returns:
            int: the storage-assigned primary key.
        """
        logger.debug(
            "repo.create.start",
            extra={"table": table, "operation": "create", "provided_keys": sorted(values.keys())},
        )

        start = time.perf_counter()
        with self.engine.connect() as conn:
            with db_error_handler(conn, table):
                result = conn.execute(insert(entry_table(table)).values(**values))
                new_id = result.inserted_primary_key[0]
                conn.commit()

        logger.info(
            "repo.create.success",
            extra={"table": table, "operation": "create", "id": new_id, "duration_ms": _elapsed_ms(start)},
        )
        return new_id

    def get_one_by(self, table: str, field: str, value: Any, /) -> Row | None:
        """
        Return the first row of `table` whose `field` equals `value`, or None.

        `field` must be one of the schema columns (KeyError otherwise).
        """
        tbl = entry_table(table)
        stmt = select(tbl).where(tbl.c[field] == value)
        with self.engine.connect() as conn:
            return conn.execute(stmt).first()

    def get_all(self, table: str, /) -> list[Row]:
        """Return every row of `table` in insertion (id) order."""
        tbl = entry_table(table)
        with self.engine.connect() as conn:
            rows = conn.execute(select(tbl).order_by(tbl.c.id)).all()

        logger.debug("repo.get_all", extra={"table": table, "operation": "get_all", "count": len(rows)})
        return rows

    def update_where(self, table: str, field: str, value: Any, /, **values: Any) -> int:
        """
        Update rows of `table` whose `field` equals `value`.

        Returns:
            int: number of rows affected (0 means nothing matched).
        """
        tbl = entry_table(table)
        start = time.perf_counter()
        with self.engine.connect() as conn:
            with db_error_handler(conn, table):
                result = conn.execute(update(tbl).where(tbl.c[field] == value).values(**values))
                affected = result.rowcount
                conn.commit()

        logger.debug(
            "repo.update.done",
            extra={
                "table": table,
                "operation": "update",
                "updated_keys": sorted(values.keys()),
                "rows": affected,
                "duration_ms": _elapsed_ms(start),
            },
        )
        return affected

    def delete_where(self, table: str, field: str, value: Any, /) -> int:
        """
        Delete rows of `table` whose `field` equals `value`.

        Returns:
            int: number of rows removed (0 means nothing matched).
        """
        tbl = entry_table(table)
        start = time.perf_counter()
        with self.engine.connect() as conn:
            with db_error_handler(conn, table):
                result = conn.execute(delete(tbl).where(tbl.c[field] == value))
                removed = result.rowcount
                conn.commit()

        logger.debug(
            "repo.delete.done",
            extra={"table": table, "operation": "delete", "rows": removed, "duration_ms": _elapsed_ms(start)},
        )
        return removed


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)

"""
Entry repository: table lifecycle and entry CRUD scoped to a "current table".

The repository owns the only piece of mutable state in the address book, the name of
the table that unscoped CRUD operations act upon. It is reachable only through the
operations below and guarded by a re-entrant lock, so a table switch can never land
between a CRUD call reading the current table and the statement it issues.
"""
import logging
import threading
from dataclasses import replace

from sqlalchemy.engine import Engine

from addressbook.exceptions.base import (
    NotFoundError,
    UpdateFailedError,
    DeleteFailedError,
    TableExistsError,
    TableDoesNotExistError,
    TableCannotBeDeletedError,
)
from addressbook.models.entry import Entry
from addressbook.validators.patterns import ValidationPatterns, DEFAULT_PATTERNS
from addressbook.validators.field_validators import (
    validate_entry,
    validate_table_name,
    validate_username,
)

from .base_repository import BaseRepository, same_table

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "default_table"


class EntryRepository(BaseRepository):
    """
    Repository for address-book entries.

    State machine over `current_table`:
      - starts at the default table, which is created (idempotently) on construction
      - `new_table` creates a table and makes it current
      - `switch_table` moves to an existing table
      - `delete_table` drops a table and falls back to the default if it was current
    Failed operations never change `current_table`.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        default_table: str = DEFAULT_TABLE,
        patterns: ValidationPatterns = DEFAULT_PATTERNS,
        initialize: bool = True,
    ):
        """
        Args:
            engine: the Engine opened at start-up.
            default_table: name of the reserved, non-deletable table.
            patterns: validation patterns shared by every check this repository makes.
            initialize: create the default table right away (the normal case).

        Raises:
            InvalidTableNameError: if `default_table` is not an allowed identifier.
        """
        super().__init__(engine)
        validate_table_name(default_table, patterns)
        self.patterns = patterns
        self.default_table = default_table
        self._current_table = default_table
        self._lock = threading.RLock()

        if initialize:
            self.initialize()

    # =================================================================================================================
    # Table Lifecycle
    # =================================================================================================================

    def initialize(self) -> None:
        """
        Ensure the default table exists. Safe to call any number of times.

        A default table that already exists under another letter case is adopted with
        the catalog's spelling.
        """
        with self._lock:
            self.create_table(self.default_table)
            canonical = self.catalog_name(self.default_table)
            if same_table(self._current_table, canonical):
                self._current_table = canonical
            self.default_table = canonical
        logger.info("repo.initialize.success", extra={"table": self.default_table})

    @property
    def current_table(self) -> str:
        with self._lock:
            return self._current_table

    def new_table(self, name: str) -> None:
        """
        Create table `name` with the entry schema and make it current.

        Raises:
            InvalidTableNameError: `name` is not an allowed identifier.
            TableExistsError: a table with that name (in any letter case) already exists.
        """
        validate_table_name(name, self.patterns)
        with self._lock:
            if self.has_table(name):
                logger.info("repo.new_table.exists", extra={"table": name})
                raise TableExistsError()

            self.create_table(name)
            self._current_table = name

    def switch_table(self, name: str) -> None:
        """
        Make an existing table current.

        The lookup ignores case and the table becomes current under its catalog spelling:
        `switch_table("REPORTS")` on a table created as "reports" makes "reports" current.

        Raises:
            InvalidTableNameError: `name` is not an allowed identifier.
            TableDoesNotExistError: no such table; the current table is left unchanged.
        """
        validate_table_name(name, self.patterns)
        with self._lock:
            canonical = self.catalog_name(name)
            if canonical is None:
                logger.info("repo.switch_table.missing", extra={"table": name})
                raise TableDoesNotExistError()

            previous, self._current_table = self._current_table, canonical

        logger.info("repo.switch_table.success", extra={"table": canonical, "previous_table": previous})

    def table_exists(self, name: str) -> bool:
        """
        Raises:
            InvalidTableNameError: `name` is not an allowed identifier.
        """
        validate_table_name(name, self.patterns)
        return self.has_table(name)

    def require_table(self, name: str) -> None:
        """Like `table_exists` but raises TableDoesNotExistError instead of returning False."""
        if not self.table_exists(name):
            raise TableDoesNotExistError()

    def clear_table(self) -> int:
        """
        Remove every entry from the current table; the table itself persists.

        Returns:
            int: number of entries removed.
        """
        with self._lock:
            return self.delete_all(self._current_table)

    def delete_table(self, name: str) -> None:
        """
        Drop table `name`. Falls back to the default table if `name` was current.

        Raises:
            InvalidTableNameError: `name` is not an allowed identifier.
            TableCannotBeDeletedError: `name` is the default table.
            TableDoesNotExistError: no such table.
        """
        validate_table_name(name, self.patterns)
        if same_table(name, self.default_table):
            logger.info("repo.delete_table.reserved", extra={"table": name})
            raise TableCannotBeDeletedError()

        with self._lock:
            canonical = self.catalog_name(name)
            if canonical is None:
                raise TableDoesNotExistError()

            self.drop_table(canonical)
            if same_table(self._current_table, canonical):
                self._current_table = self.default_table

    def list_tables(self) -> list[str]:
        """Return every table name, default table first, the rest in creation order."""
        names = self.table_names()
        rest = [n for n in names if not same_table(n, self.default_table)]
        return [self.default_table, *rest]

    # =================================================================================================================
    # Entry CRUD (current table)
    # =================================================================================================================

    def insert(self, entry: Entry) -> Entry:
        """
        Validate `entry` and write it to the current table.

        Returns:
            Entry: a copy of `entry` carrying the storage-assigned id.

        Raises:
            InvalidNameError, InvalidUsernameError, InvalidEmailError: before any storage call.
            DuplicateError: username or email already present in the current table.
        """
        validate_entry(entry, self.patterns)
        with self._lock:
            new_id = self.create(self._current_table, **entry.as_row())
        return replace(entry, id=new_id)

    def all(self) -> list[Entry]:
        """Return every entry of the current table in insertion order."""
        with self._lock:
            rows = self.get_all(self._current_table)
        return [Entry.from_row(row._mapping) for row in rows]

    def get_by_username(self, username: str) -> Entry:
        """
        Raises:
            InvalidUsernameError: malformed username (no storage call made).
            NotFoundError: no entry with that username in the current table.
        """
        validate_username(username, self.patterns)
        with self._lock:
            row = self.get_one_by(self._current_table, "username", username)

        if row is None:
            raise NotFoundError()
        return Entry.from_row(row._mapping)

    def update(self, username: str, updated: Entry) -> Entry:
        """
        Replace name, username and email of the entry addressed by `username`.

        The id is preserved.

        Returns:
            Entry: the entry as stored after the update.

        Raises:
            InvalidUsernameError: malformed `username`.
            InvalidNameError, InvalidUsernameError, InvalidEmailError: invalid `updated` fields.
            UpdateFailedError: no entry with `username` in the current table.
            DuplicateError: the new username or email belongs to another entry.
        """
        validate_username(username, self.patterns)
        validate_entry(updated, self.patterns)

        with self._lock:
            table = self._current_table
            affected = self.update_where(table, "username", username, **updated.as_row())
            if affected == 0:
                logger.info("repo.update.no_rows", extra={"table": table})
                raise UpdateFailedError()

            row = self.get_one_by(table, "username", updated.username)

        logger.info("repo.update.success", extra={"table": table, "id": row.id})
        return Entry.from_row(row._mapping)

    def delete(self, username: str) -> None:
        """
        Raises:
            InvalidUsernameError: malformed username.
            DeleteFailedError: no entry with that username in the current table.
        """
        validate_username(username, self.patterns)
        with self._lock:
            table = self._current_table
            removed = self.delete_where(table, "username", username)

        if removed == 0:
            logger.info("repo.delete.no_rows", extra={"table": table})
            raise DeleteFailedError()

        logger.info("repo.delete.success", extra={"table": table})

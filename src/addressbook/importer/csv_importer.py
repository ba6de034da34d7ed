"""
CSV importer.

Reads `name,username,email` files and inserts the rows into the repository's current
table. The whole file is parsed and validated before the first insert, so a malformed
row anywhere leaves the table untouched. Inserts then run in file order and stop at the
first failure; rows written before it stay.
"""
import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, TextIO

from addressbook.exceptions.base import RepositoryError, DuplicateError
from addressbook.models.entry import Entry
from addressbook.repositories.entry_repository import EntryRepository
from addressbook.validators.field_validators import validate_entry
from addressbook.validators.patterns import ValidationPatterns, DEFAULT_PATTERNS

logger = logging.getLogger(__name__)

CSV_HEADER = ("name", "username", "email")


# =================================================================================================================
# Errors
# =================================================================================================================

class CsvImportError(Exception):
    """Base class for every importer failure."""

    default_message = "csv import failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidHeaderError(CsvImportError):
    default_message = "invalid header"


class InvalidHeaderLengthError(CsvImportError):
    default_message = "invalid header length"


class InvalidRowLengthError(CsvImportError):
    default_message = "invalid row length"


class NoRowsInFileError(CsvImportError):
    default_message = "no rows in file"


class ImportRowError(CsvImportError):
    """
    A row could not be imported.

    Attributes:
        line: 1-based line number in the source file (the header is line 1).
        cause: the underlying error (a RepositoryError or InvalidRowLengthError).
    """

    def __init__(self, line: int, cause: Exception):
        self.line = line
        self.cause = cause
        if isinstance(cause, DuplicateError):
            message = f"Entry on line {line} already exists"
        else:
            message = f"{cause} on line {line}"
        super().__init__(message)


@dataclass(frozen=True)
class ImportResult:
    added: int
    table: str


# =================================================================================================================
# Parsing
# =================================================================================================================

def check_header(header: list[str]) -> None:
    """
    Raises:
        InvalidHeaderLengthError: the header does not have exactly three fields.
        InvalidHeaderError: the fields are not name, username, email (in that order).
    """
    if len(header) != len(CSV_HEADER):
        raise InvalidHeaderLengthError()

    if tuple(cell.strip().lower() for cell in header) != CSV_HEADER:
        raise InvalidHeaderError()


def parse_csv(
    stream: TextIO | Iterable[str],
    patterns: ValidationPatterns = DEFAULT_PATTERNS,
) -> list[tuple[int, Entry]]:
    """
    Parse and validate a CSV document.

    Blank lines are skipped.

    Returns:
        list of (line number, Entry) pairs, in file order.

    Raises:
        InvalidHeaderLengthError, InvalidHeaderError: bad or missing header.
        NoRowsInFileError: header only.
        ImportRowError: a row with the wrong field count or an invalid field.
    """
    reader = csv.reader(stream)

    header = next(reader, None)
    if header is None:
        raise InvalidHeaderLengthError()
    check_header(header)

    rows: list[tuple[int, Entry]] = []
    for record in reader:
        if not record:
            continue

        line = reader.line_num
        if len(record) != len(CSV_HEADER):
            raise ImportRowError(line, InvalidRowLengthError())

        entry = Entry(name=record[0], username=record[1], email=record[2])
        try:
            validate_entry(entry, patterns)
        except RepositoryError as exc:
            raise ImportRowError(line, exc) from exc

        rows.append((line, entry))

    if not rows:
        raise NoRowsInFileError()

    return rows


# =================================================================================================================
# Import
# =================================================================================================================

def import_csv(repo: EntryRepository, source: str | Path | TextIO) -> ImportResult:
    """
    Import a CSV file (path or open text stream) into the repository's current table.

    Returns:
        ImportResult: number of entries added and the table they went into.

    Raises:
        CsvImportError: any parse, validation or insert failure (inserts are wrapped in
            ImportRowError carrying the source line).
        OSError: the file cannot be opened.
    """
    if isinstance(source, (str, Path)):
        # utf-8-sig drops the BOM spreadsheet exports like to prepend
        with open(source, newline="", encoding="utf-8-sig") as fh:
            return _import_rows(repo, parse_csv(fh, repo.patterns), str(source))

    if hasattr(source, "read"):
        return _import_rows(repo, parse_csv(source, repo.patterns), getattr(source, "name", "<stream>"))

    raise TypeError(f"unsupported CSV source: {type(source).__name__}")


def _import_rows(repo: EntryRepository, rows: list[tuple[int, Entry]], source_name: str) -> ImportResult:
    table = repo.current_table
    logger.info("importer.start", extra={"source": source_name, "table": table, "rows": len(rows)})

    added = 0
    for line, entry in rows:
        try:
            repo.insert(entry)
        except RepositoryError as exc:
            logger.info(
                "importer.row_failed",
                extra={"source": source_name, "table": table, "line": line, "error_code": exc.error_code},
            )
            raise ImportRowError(line, exc) from exc
        added += 1

    logger.info("importer.success", extra={"source": source_name, "table": table, "added": added})
    return ImportResult(added=added, table=table)

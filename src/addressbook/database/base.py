"""
Schema definition shared by every address-book table.

Tables are created at runtime under user-chosen names, so instead of one declarative
class per table the schema is a factory returning a SQLAlchemy Core `Table` for a
given (already validated) name.
"""

from sqlalchemy import Column, Integer, MetaData, Table, Text, column, table

# The unique constraints are the only named ones: sqlite_autoincrement renders the
# primary key inline on the id column.
NAMING_CONVENTION = {
    "uq": "uq_%(table_name)s_%(column_0_name)s",
}

# Lightweight handle on sqlite's catalog; only used for read-only lookups.
sqlite_master = table(
    "sqlite_master",
    column("type"),
    column("name"),
)


def entry_table(name: str, metadata: MetaData | None = None) -> Table:
    """
    Build the fixed entry schema under `name`.

    Columns:
        id        INTEGER PRIMARY KEY AUTOINCREMENT (ids never reused within a table)
        name      TEXT NOT NULL
        username  TEXT NOT NULL UNIQUE
        email     TEXT NOT NULL UNIQUE

    A fresh MetaData is used per call unless one is passed in, so dropping a table never
    leaves a stale definition behind.
    """
    metadata = metadata if metadata is not None else MetaData(naming_convention=NAMING_CONVENTION)
    return Table(
        name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("name", Text, nullable=False),
        Column("username", Text, nullable=False, unique=True),
        Column("email", Text, nullable=False, unique=True),
        sqlite_autoincrement=True,
    )


__all__ = ["NAMING_CONVENTION", "sqlite_master", "entry_table"]

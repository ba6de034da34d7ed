"""
Entry value object.

Entries move between the validators, the repository and the collaborators (shell, CSV
importer, XML exporter). Tables are created at runtime, so rows are mapped to this plain
dataclass instead of a declarative ORM class bound to one table.
"""

from dataclasses import dataclass, asdict
from typing import Any, Mapping


@dataclass
class Entry:
    """
    A contact record.

    Attributes:
        name: display name, e.g. "Test One".
        username: unique within a table, used to address the entry.
        email: unique within a table.
        id: assigned by storage on insert; None for entries not yet written.
    """

    name: str
    username: str
    email: str
    id: int | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Entry":
        """Build an Entry from a result row mapping (`row._mapping`)."""
        return cls(id=row["id"], name=row["name"], username=row["username"], email=row["email"])

    def as_row(self) -> dict[str, str]:
        """Return the writable columns (everything except the storage-assigned id)."""
        data = asdict(self)
        data.pop("id")
        return data

    def display(self) -> str:
        return (
            f"ID: {self.id}\n"
            f"Name: {self.name}\n"
            f"Username: {self.username}\n"
            f"Email: {self.email}\n"
        )

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, username='{self.username}', email='{self.email}')>"

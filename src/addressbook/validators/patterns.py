"""
Validation patterns for entry fields and table identifiers.

The patterns are bundled into one immutable value that is built once and handed to the
validators and to the repository, so tests (or a differently-configured deployment) can
substitute their own set without touching module globals.
"""

from pydantic import BaseModel, ConfigDict


class ValidationPatterns(BaseModel):
    """
    Immutable set of regular expressions used by the field and table-name validators.

    All patterns are matched with `re.fullmatch`, so they need no anchors. They are written
    without nested quantifiers over the same characters to keep matching linear.
    """

    model_config = ConfigDict(frozen=True)

    # Letter groups separated by single spaces: "Test One"
    name: str = r"[a-zA-Z]+(?: [a-zA-Z]+)*"

    # Starts with a letter; a single '.', '_' or '-' may appear before any alphanumeric
    username: str = r"[a-zA-Z](?:[._-]?[a-zA-Z0-9])*"

    # Local part as username but at least two characters, '@', dot-separated letter groups
    email: str = r"[a-zA-Z](?:[._-]?[a-zA-Z0-9])+@[a-zA-Z]+(?:\.[a-zA-Z]+)+"

    # Letter first, then alphanumeric segments joined by single '-' or '_'
    table: str = r"[a-zA-Z][a-zA-Z0-9]*(?:[_-][a-zA-Z0-9]+)*"
    table_min_length: int = 2

    # Bracketed identifier: "[Sales Team 2]"
    bracket_table: str = r"\[[a-zA-Z0-9][ +!?._\-a-zA-Z0-9]*\]"

    # Substring reserved for the storage engine catalog (sqlite_master, sqlite_sequence, ...)
    reserved_infix: str = "sql"
    reserved_names: tuple[str, ...] = ("table",)


DEFAULT_PATTERNS = ValidationPatterns()

__all__ = ["ValidationPatterns", "DEFAULT_PATTERNS"]

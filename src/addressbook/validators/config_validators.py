"""Normalizers applied to raw environment values before Settings validates them."""


def to_uppercase(value: str | None) -> str | None:
    """LOG_LEVEL=debug -> "DEBUG"."""
    if value is None:
        return None
    return value.upper()


def to_lowercase(value: str | None) -> str | None:
    """LOG_FORMAT=JSON -> "json"."""
    if value is None:
        return None
    return value.lower()


def strip_whitespace(value):
    # non-strings are left for pydantic to reject
    if isinstance(value, str):
        return value.strip()
    return value

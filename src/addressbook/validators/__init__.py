from .patterns import ValidationPatterns, DEFAULT_PATTERNS
from .field_validators import (
    matches,
    validate_field,
    validate_name,
    validate_username,
    validate_email,
    validate_entry,
    is_valid_table_name,
    validate_table_name,
)

__all__ = [
    "ValidationPatterns",
    "DEFAULT_PATTERNS",
    "matches",
    "validate_field",
    "validate_name",
    "validate_username",
    "validate_email",
    "validate_entry",
    "is_valid_table_name",
    "validate_table_name",
]

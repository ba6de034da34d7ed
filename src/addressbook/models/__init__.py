r"""
Centralized access to the address-book data types.

Example:
    from addressbook.models import Entry
"""

from .entry import Entry

__all__ = [
    "Entry",
]

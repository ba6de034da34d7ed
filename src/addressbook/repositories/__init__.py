"""
Repository layer initialization module.

Usage:
    from addressbook.repositories import EntryRepository
"""

from .base_repository import BaseRepository
from .entry_repository import EntryRepository, DEFAULT_TABLE

__all__ = [
    "BaseRepository",
    "EntryRepository",
    "DEFAULT_TABLE",
]

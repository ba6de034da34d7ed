from .base import NAMING_CONVENTION, sqlite_master, entry_table
from .session import create_db_engine

__all__ = ["NAMING_CONVENTION", "sqlite_master", "entry_table", "create_db_engine"]

"""Database layer for enum tables."""

from persistent_enum.db.database import Database
from persistent_enum.db.store import ColumnInfo, RowStore, open_store, primary_key_attr

__all__ = [
    "Database",
    "RowStore",
    "ColumnInfo",
    "open_store",
    "primary_key_attr",
]

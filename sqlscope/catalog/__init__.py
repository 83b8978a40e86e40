"""Hierarchical schema catalog used to answer "what columns exist"."""

from .datatype import DataType
from .loader import (
    CatalogStore,
    database_from_dict,
    database_to_dict,
    load_catalog_file,
    load_sqlite_catalog,
    load_sqlite_file,
    save_catalog_file,
)
from .locks import ReadWriteLock
from .model import Column, Database, Schema, Table

__all__ = [
    "CatalogStore",
    "Column",
    "DataType",
    "Database",
    "ReadWriteLock",
    "Schema",
    "Table",
    "database_from_dict",
    "database_to_dict",
    "load_catalog_file",
    "load_sqlite_catalog",
    "load_sqlite_file",
    "save_catalog_file",
]

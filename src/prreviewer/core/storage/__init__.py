"""Persistence layer: engine and session management.

Repositories live in ``core.storage.repositories`` and are imported from there
directly, since they depend on the models which in turn depend on ``Base``.
"""
from .database import Base, Database, get_db, init_db

__all__ = [
    "Base",
    "Database",
    "get_db",
    "init_db",
]

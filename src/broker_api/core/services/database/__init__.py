"""Database access: the shared interface and its implementations."""

from .base import CommandResult, Database, Row
from .mock import ExpectedCall, MockDatabase
from .pooled import PooledDatabase

__all__ = [
    "CommandResult",
    "Database",
    "ExpectedCall",
    "MockDatabase",
    "PooledDatabase",
    "Row",
]

"""Core services exports."""

# Database Service
from .database import CommandResult, Database, MockDatabase, PooledDatabase

__all__ = [
    # Database Service
    "CommandResult",
    "Database",
    "MockDatabase",
    "PooledDatabase",
]

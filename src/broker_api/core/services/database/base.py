"""Database interface shared by the pooled and mock implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

Row = dict[str, Any]


@dataclass(frozen=True)
class CommandResult:
    """Command tag returned by a data-modifying statement."""

    tag: str
    rows_affected: int

    def __str__(self) -> str:
        return f"{self.tag} {self.rows_affected}"


def command_tag(sql: str) -> str:
    """Leading SQL keyword, upper-cased (``CALL``, ``INSERT``, ...)."""
    words = sql.split(None, 1)
    return words[0].upper() if words else ""


def bind_positional(args: Sequence[Any]) -> dict[str, Any]:
    """Map positional arguments onto the ``:p1``, ``:p2``, ... bind names."""
    return {f"p{index}": value for index, value in enumerate(args, start=1)}


class Database(ABC):
    """Abstract interface over the database connection used by the handlers.

    SQL text refers to positional arguments as ``:p1``, ``:p2``, ... in the
    order they are passed.
    """

    @abstractmethod
    def query(self, sql: str, args: Sequence[Any] = ()) -> list[Row]:
        """Run a statement that returns rows.

        Args:
            sql: Statement text
            args: Positional arguments bound to ``:p1``..``:pN``

        Returns:
            Rows as column name to value mappings, in database order

        Raises:
            DatabaseError: If the statement fails
        """

    @abstractmethod
    def execute(self, sql: str, args: Sequence[Any] = ()) -> CommandResult:
        """Run a data-modifying statement in its own transaction.

        Raises:
            DatabaseError: If the statement fails
        """

    @abstractmethod
    def health_check(self) -> None:
        """Round-trip to the database.

        Raises:
            DatabaseError: If the database cannot be reached
        """

    @abstractmethod
    def close(self) -> None:
        """Release all connections held by this instance."""

    def get_pool_status(self) -> dict[str, int]:
        """Connection pool counters, empty when there is no pool."""
        return {}

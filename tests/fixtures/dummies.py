"""Hand-written database doubles for lifecycle and health tests."""

from collections.abc import Sequence
from typing import Any

from src.broker_api.core.exceptions import DatabaseError
from src.broker_api.core.services import CommandResult, Database


class SwitchableDatabase(Database):
    """Database stub whose health can be toggled between calls."""

    def __init__(self, healthy: bool = True):
        self.healthy = healthy
        self.closed = False
        self.health_checks = 0

    def query(self, sql: str, args: Sequence[Any] = ()) -> list[dict[str, Any]]:
        raise AssertionError("query should not be called")

    def execute(self, sql: str, args: Sequence[Any] = ()) -> CommandResult:
        raise AssertionError("execute should not be called")

    def health_check(self) -> None:
        self.health_checks += 1
        if not self.healthy:
            raise DatabaseError("Failed to ping database: connection refused")

    def close(self) -> None:
        self.closed = True

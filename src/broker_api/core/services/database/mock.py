"""In-memory test double for the database interface.

Expectations are registered up front and consumed in order. Each call must
match the next pending expectation: same kind (query or execute), SQL text
matching the expectation's regular expression and, when ``with_args`` was
used, exactly the same ordered arguments. Anything else is recorded as a
failure, raised to the caller as ``UnexpectedCallError`` and reported again by
``assert_expectations_met``.

Example:
    db = MockDatabase()
    db.expect_execute(r"CALL insert_master_violation\\(:p1, :p2, :p3\\)") \\
        .with_args("Violation A", "High", 1) \\
        .will_return_result("CALL", 1)
    ...
    db.assert_expectations_met()
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any, Literal

from loguru import logger

from src.broker_api.core.exceptions import (
    DatabaseError,
    UnexpectedCallError,
    UnmetExpectationsError,
)
from src.broker_api.core.services.database.base import (
    CommandResult,
    Database,
    Row,
    command_tag,
)

CallKind = Literal["query", "execute"]


def _same_value(expected: Any, actual: Any) -> bool:
    # 1 == True and 1 == 1.0 in Python; a stored procedure would not agree
    return type(expected) is type(actual) and expected == actual


class ExpectedCall:
    """A single scripted database call and its outcome."""

    def __init__(self, kind: CallKind, pattern: str):
        self.kind = kind
        self.pattern = pattern
        self._regex = re.compile(pattern)
        self.args: tuple[Any, ...] | None = None
        self.rows: list[Row] = []
        self.result: CommandResult | None = None
        self.error: Exception | None = None
        self.triggered = False

    def with_args(self, *args: Any) -> ExpectedCall:
        self.args = args
        return self

    def will_return_rows(self, columns: Sequence[str], *rows: Sequence[Any]) -> ExpectedCall:
        if self.kind != "query":
            raise ValueError("Rows can only be returned from a query expectation")
        for row in rows:
            if len(row) != len(columns):
                raise ValueError(
                    f"Row {tuple(row)!r} does not match columns {tuple(columns)!r}"
                )
        self.rows = [dict(zip(columns, row)) for row in rows]
        return self

    def will_return_result(self, tag: str, rows_affected: int) -> ExpectedCall:
        if self.kind != "execute":
            raise ValueError("A command result can only be returned from an execute expectation")
        self.result = CommandResult(tag=tag, rows_affected=rows_affected)
        return self

    def will_return_error(self, error: Exception) -> ExpectedCall:
        self.error = error
        return self

    def mismatch(self, kind: CallKind, sql: str, args: tuple[Any, ...]) -> str | None:
        """Describe why a call does not satisfy this expectation, None if it does."""
        if kind != self.kind:
            return f"expected {self.kind} matching {self.pattern!r}, got {kind} {sql!r}"
        if not self._regex.search(sql):
            return f"{kind} {sql!r} does not match {self.pattern!r}"
        if self.args is not None:
            same = len(self.args) == len(args) and all(
                _same_value(e, a) for e, a in zip(self.args, args)
            )
            if not same:
                return f"{kind} {sql!r} called with {args!r}, expected {self.args!r}"
        return None

    def __repr__(self) -> str:
        args = "any" if self.args is None else repr(self.args)
        return f"<ExpectedCall {self.kind} {self.pattern!r} args={args}>"


class MockDatabase(Database):
    """Database double that replays scripted expectations."""

    def __init__(self):
        self._expected: list[ExpectedCall] = []
        self._failures: list[str] = []
        self.calls: list[tuple[CallKind, str, tuple[Any, ...]]] = []
        self.closed = False

    def expect_query(self, pattern: str) -> ExpectedCall:
        return self._expect("query", pattern)

    def expect_execute(self, pattern: str) -> ExpectedCall:
        return self._expect("execute", pattern)

    def _expect(self, kind: CallKind, pattern: str) -> ExpectedCall:
        expectation = ExpectedCall(kind, pattern)
        self._expected.append(expectation)
        return expectation

    def _consume(self, kind: CallKind, sql: str, args: Sequence[Any]) -> ExpectedCall:
        if self.closed:
            raise DatabaseError("mock database is closed")

        call_args = tuple(args)
        self.calls.append((kind, sql, call_args))

        pending = next((e for e in self._expected if not e.triggered), None)
        if pending is None:
            reason = f"unexpected {kind} {sql!r} with {call_args!r}: all expectations already met"
        else:
            reason = pending.mismatch(kind, sql, call_args)

        if reason is not None:
            self._failures.append(reason)
            logger.debug("Mock database rejected call: {}", reason)
            raise UnexpectedCallError(reason)

        pending.triggered = True
        if pending.error is not None:
            raise pending.error
        return pending

    def query(self, sql: str, args: Sequence[Any] = ()) -> list[Row]:
        expectation = self._consume("query", sql, args)
        return [dict(row) for row in expectation.rows]

    def execute(self, sql: str, args: Sequence[Any] = ()) -> CommandResult:
        expectation = self._consume("execute", sql, args)
        if expectation.result is not None:
            return expectation.result
        return CommandResult(tag=command_tag(sql), rows_affected=0)

    def health_check(self) -> None:
        return None

    def close(self) -> None:
        self.closed = True

    def pending_expectations(self) -> list[ExpectedCall]:
        return [e for e in self._expected if not e.triggered]

    def assert_expectations_met(self) -> None:
        """Fail if any call was rejected or any expectation was never consumed.

        Raises:
            UnmetExpectationsError: Listing every problem found
        """
        problems = list(self._failures)
        problems.extend(
            f"expectation never met: {expectation!r}"
            for expectation in self.pending_expectations()
        )
        if problems:
            raise UnmetExpectationsError(
                "Database expectations were not met:\n  " + "\n  ".join(problems)
            )

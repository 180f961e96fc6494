"""Exception types shared across the application."""


class ConfigurationError(Exception):
    """Raised when the application cannot be configured at startup."""


class DatabaseError(Exception):
    """Raised when a query, command or health check against the database fails."""


class UnexpectedCallError(DatabaseError):
    """Raised by the mock database when a call matches no pending expectation."""


class UnmetExpectationsError(AssertionError):
    """Raised when a mock database finished with failed or unconsumed expectations."""

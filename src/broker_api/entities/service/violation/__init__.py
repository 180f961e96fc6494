"""Entity package: Violation."""

from .entity import Violation, ViolationCreate, ViolationUpdate

__all__ = ["Violation", "ViolationCreate", "ViolationUpdate"]

"""Entity package: OrderStatus."""

from .entity import OrderStatus

__all__ = ["OrderStatus"]

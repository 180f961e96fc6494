"""Routers for the stored-procedure backed service endpoints."""

from .order_status import router as order_status_router
from .product import router as product_router
from .violation import router as violation_router

__all__ = ["order_status_router", "product_router", "violation_router"]

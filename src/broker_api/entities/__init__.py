"""Entities module with an entity-centric structure.

Each entity package holds the request and row records exchanged with one
group of stored procedures. Records live for a single request: parsed from
the payload, validated, passed to the database and discarded.
"""

from .service.order_status import OrderStatus
from .service.product import ProductCreate, ProductUpdate
from .service.violation import Violation, ViolationCreate, ViolationUpdate

__all__ = [
    "OrderStatus",
    "ProductCreate",
    "ProductUpdate",
    "Violation",
    "ViolationCreate",
    "ViolationUpdate",
]

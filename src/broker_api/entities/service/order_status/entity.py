"""Entity: OrderStatus."""

from pydantic import BaseModel


class OrderStatus(BaseModel):
    """Row returned by ``sp_get_order_status()``."""

    order_id: int
    order_status: str

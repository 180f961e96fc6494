"""Order status listing router."""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import ValidationError

from src.broker_api.api.http.deps import get_database
from src.broker_api.core.exceptions import DatabaseError
from src.broker_api.core.procedures import LIST_ORDER_STATUSES
from src.broker_api.core.services import Database
from src.broker_api.entities.service.order_status import OrderStatus

router = APIRouter(tags=["order-status"])


@router.get("/order-statuses", response_model=list[OrderStatus])
def list_order_statuses(
    database: Database = Depends(get_database),
) -> list[OrderStatus]:
    """List every order status, unfiltered and in database order."""
    try:
        rows = database.query(LIST_ORDER_STATUSES.sql)
        return [OrderStatus.model_validate(row) for row in rows]
    except (DatabaseError, ValidationError) as e:
        logger.error("Failed to fetch order statuses: {}", e)
        raise HTTPException(status_code=500, detail="Failed to fetch order statuses") from e

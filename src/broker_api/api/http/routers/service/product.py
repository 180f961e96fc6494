"""Product API router backed by the master product procedures."""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from src.broker_api.api.http.deps import get_database, get_path_id
from src.broker_api.core.exceptions import DatabaseError
from src.broker_api.core.procedures import DELETE_PRODUCT, INSERT_PRODUCT, UPDATE_PRODUCT
from src.broker_api.core.services import Database
from src.broker_api.entities.service.product import ProductCreate, ProductUpdate

router = APIRouter(prefix="/product", tags=["product"])


@router.post("", status_code=201)
def create_product(
    product: ProductCreate,
    database: Database = Depends(get_database),
) -> dict[str, str]:
    """Add a product to the master catalog."""
    try:
        database.execute(INSERT_PRODUCT.sql, INSERT_PRODUCT.arguments(product))
    except DatabaseError as e:
        logger.error("Failed to insert product: {}", e)
        raise HTTPException(status_code=500, detail="Failed to insert product") from e
    return {"message": "Product added successfully"}


@router.put("")
def update_product(
    product: ProductUpdate,
    database: Database = Depends(get_database),
) -> dict[str, str]:
    """Update a product."""
    try:
        database.execute(UPDATE_PRODUCT.sql, UPDATE_PRODUCT.arguments(product))
    except DatabaseError as e:
        logger.error("Failed to update product: {}", e)
        raise HTTPException(status_code=500, detail="Failed to update product") from e
    return {"message": "Product updated successfully"}


@router.delete("/{item_id}")
def delete_product(
    product_id: int = Depends(get_path_id),
    database: Database = Depends(get_database),
) -> dict[str, str]:
    """Delete a product."""
    try:
        database.execute(DELETE_PRODUCT.sql, DELETE_PRODUCT.arguments({"product_id": product_id}))
    except DatabaseError as e:
        logger.error("Failed to delete product {}: {}", product_id, e)
        raise HTTPException(status_code=500, detail="Failed to delete product") from e
    return {"message": "Product deleted successfully"}

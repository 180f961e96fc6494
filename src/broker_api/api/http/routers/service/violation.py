"""Violation API router backed by the master violation procedures."""

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import ValidationError

from src.broker_api.api.http.deps import get_database, get_path_id
from src.broker_api.core.exceptions import DatabaseError
from src.broker_api.core.procedures import (
    DELETE_VIOLATION,
    INSERT_VIOLATION,
    LIST_VIOLATIONS,
    UPDATE_VIOLATION,
)
from src.broker_api.core.services import Database
from src.broker_api.entities.service.violation import (
    Violation,
    ViolationCreate,
    ViolationUpdate,
)

router = APIRouter(prefix="/violation", tags=["violation"])


@router.post("", status_code=201)
def create_violation(
    violation: ViolationCreate,
    database: Database = Depends(get_database),
) -> dict[str, str]:
    """Add a violation to the master catalog."""
    try:
        database.execute(INSERT_VIOLATION.sql, INSERT_VIOLATION.arguments(violation))
    except DatabaseError as e:
        logger.error("Failed to insert violation: {}", e)
        raise HTTPException(status_code=500, detail="Failed to insert violation") from e
    return {"message": "Violation added successfully"}


@router.put("")
def update_violation(
    violation: ViolationUpdate,
    database: Database = Depends(get_database),
) -> dict[str, str]:
    try:
        database.execute(UPDATE_VIOLATION.sql, UPDATE_VIOLATION.arguments(violation))
    except DatabaseError as e:
        logger.error("Failed to update violation: {}", e)
        raise HTTPException(status_code=500, detail="Failed to update violation") from e
    return {"message": "Violation updated successfully"}


@router.delete("/{item_id}")
def delete_violation(
    violation_id: int = Depends(get_path_id),
    database: Database = Depends(get_database),
) -> dict[str, str]:
    try:
        database.execute(DELETE_VIOLATION.sql, DELETE_VIOLATION.arguments({"id": violation_id}))
    except DatabaseError as e:
        logger.error("Failed to delete violation {}: {}", violation_id, e)
        raise HTTPException(status_code=500, detail="Failed to delete violation") from e
    return {"message": "Violation deleted successfully"}


@router.get("", response_model=list[Violation])
def list_violations(
    database: Database = Depends(get_database),
) -> list[Violation]:
    """List all violations in the order the database returns them."""
    try:
        rows = database.query(LIST_VIOLATIONS.sql)
        return [Violation.model_validate(row) for row in rows]
    except (DatabaseError, ValidationError) as e:
        logger.error("Failed to fetch violations: {}", e)
        raise HTTPException(status_code=500, detail="Failed to fetch violations") from e

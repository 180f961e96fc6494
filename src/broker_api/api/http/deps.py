"""FastAPI dependency implementations."""

from fastapi import HTTPException, Path, Request

from src.broker_api.api.http.app_data import ApplicationDependencies
from src.broker_api.api.http.errors import INVALID_ID
from src.broker_api.core.services import Database
from src.broker_api.entities.service import INT4_MAX, INT4_MIN

# Optional sign and ASCII digits only; no whitespace, underscores or decimals
ID_PATTERN = r"^[+-]?[0-9]+$"


def get_database(request: Request) -> Database:
    """Get the database instance created at startup."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database


def get_path_id(item_id: str = Path(pattern=ID_PATTERN)) -> int:
    """Parse the ``{item_id}`` path segment as a PostgreSQL integer.

    Raises:
        HTTPException: 400 when the value is outside the integer column range
    """
    value = int(item_id)
    if not INT4_MIN <= value <= INT4_MAX:
        raise HTTPException(status_code=400, detail=INVALID_ID)
    return value

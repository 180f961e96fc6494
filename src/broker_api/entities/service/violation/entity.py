"""Entity: Violation."""

from pydantic import BaseModel, ConfigDict, Field

from .. import INT4_MAX, INT4_MIN


class ViolationCreate(BaseModel):
    """Payload for adding a violation to the master catalog."""

    model_config = ConfigDict(strict=True)

    violation_name: str = Field(min_length=1, max_length=100)
    level_of_serious: str = Field(min_length=1, max_length=50)
    # 0 is a valid status for violations
    status: int = Field(ge=INT4_MIN, le=INT4_MAX)


class ViolationUpdate(ViolationCreate):
    id: int = Field(ge=1, le=INT4_MAX)


class Violation(BaseModel):
    """Row returned by ``get_master_violations()``."""

    id: int
    violation_name: str
    level_of_serious: str
    status: int

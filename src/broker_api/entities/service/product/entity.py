"""Entity: Product."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .. import INT4_MAX, INT4_MIN


class ProductCreate(BaseModel):
    """Payload for adding a product to the master catalog."""

    model_config = ConfigDict(strict=True)

    category_id: int = Field(
        ge=1, le=INT4_MAX, description="Category the product belongs to"
    )
    product_name: str = Field(min_length=1, max_length=100)
    status: int = Field(ge=INT4_MIN, le=INT4_MAX, description="Catalog status code, never 0")

    @field_validator("status")
    @classmethod
    def status_is_set(cls, value: int) -> int:
        if value == 0:
            raise ValueError("status is required and must not be 0")
        return value


class ProductUpdate(ProductCreate):
    """Payload for replacing an existing product."""

    product_id: int = Field(ge=1, le=INT4_MAX)

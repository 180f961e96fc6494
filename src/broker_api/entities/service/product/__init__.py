"""Entity package: Product."""

from .entity import ProductCreate, ProductUpdate

__all__ = ["ProductCreate", "ProductUpdate"]

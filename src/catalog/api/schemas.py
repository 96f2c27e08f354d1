"""Pydantic request schemas for the Catalog API."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic.alias_generators import to_snake

from catalog.product.product import Dimensions, Specification
from shared.api import ImageBody, RequestBody

# --- Product Request Schemas ---


class CreateProductRequest(RequestBody):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Aurora 55 4K Smart TV",
                    "description": "55 inch 4K UHD smart television with HDR10.",
                    "price": 54999,
                    "originalPrice": 64999,
                    "discount": 10,
                    "categoryId": "c3d4e5f6-a7b8-9012-cdef-123456789012",
                    "brand": "Aurora",
                    "sku": "TELAUAUR001",
                    "features": ["HDR10", "Voice Remote"],
                    "tags": ["tv", "4k"],
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=2000)
    price: float = Field(..., ge=0)
    original_price: float | None = Field(None, ge=0)
    discount: int = Field(0, ge=0, le=100)
    category_id: str
    brand: str = Field("", max_length=50)
    sku: str = Field(..., min_length=1, max_length=50)
    images: list[ImageBody] = Field(default_factory=list)
    specifications: list[Specification] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    dimensions: Dimensions | None = None
    warranty: str = Field("", max_length=100)
    is_featured: bool = False
    is_active: bool = True
    stock: int = Field(0, ge=0)


class UpdateProductRequest(RequestBody):
    model_config = {
        "json_schema_extra": {"examples": [{"price": 49999, "discount": 15, "isFeatured": True}]},
    }

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, min_length=1, max_length=2000)
    price: float | None = Field(None, ge=0)
    original_price: float | None = Field(None, ge=0)
    discount: int | None = Field(None, ge=0, le=100)
    category_id: str | None = None
    brand: str | None = Field(None, max_length=50)
    images: list[ImageBody] | None = None
    specifications: list[Specification] | None = None
    features: list[str] | None = None
    tags: list[str] | None = None
    dimensions: Dimensions | None = None
    warranty: str | None = Field(None, max_length=100)
    is_featured: bool | None = None
    stock: int | None = Field(None, ge=0)


# --- Category Request Schemas ---


class CreateCategoryRequest(RequestBody):
    model_config = {
        "json_schema_extra": {"examples": [{"name": "Televisions", "description": "Smart and LED televisions"}]},
    }

    name: str = Field(..., min_length=1, max_length=50)
    description: str = Field("", max_length=500)


class UpdateCategoryRequest(RequestBody):
    model_config = {"json_schema_extra": {"examples": [{"name": "Smart TVs", "isActive": True}]}}

    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = Field(None, max_length=500)
    is_active: bool | None = None


# --- Bulk Request Schemas ---


class BulkUpdateRequest(RequestBody):
    model_config = {
        "json_schema_extra": {
            "examples": [{"updates": [{"id": "b2c3d4e5-f6a7-8901-bcde-f12345678901", "price": 1999, "discount": 5}]}]
        }
    }

    updates: list[dict] | None = None

    @field_validator("updates")
    @classmethod
    def snake_case_keys(cls, updates):
        if updates is None:
            return None
        return [{to_snake(key): value for key, value in entry.items()} for entry in updates]


class BulkDeleteRequest(RequestBody):
    model_config = {
        "json_schema_extra": {"examples": [{"productIds": ["b2c3d4e5-f6a7-8901-bcde-f12345678901"]}]},
    }

    product_ids: list[str] | None = None

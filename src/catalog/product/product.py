"""Product aggregate with its embedded value objects.

Products are the passive store every other context reads: carts, wishlists
and order placement resolve product references here and price them through
``catalog.product.pricing``. Products are never hard-deleted; deactivation
hides them from the storefront and from existing carts and wishlists.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field, model_validator

from catalog.product.pricing import effective_price
from shared.exceptions import ValidationError
from shared.repository import Document

# Fields an admin may patch through details updates and bulk updates
EDITABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "price",
        "original_price",
        "discount",
        "category_id",
        "brand",
        "images",
        "specifications",
        "features",
        "tags",
        "dimensions",
        "warranty",
        "is_featured",
        "is_active",
        "stock",
    }
)


class ProductImage(BaseModel):
    url: str
    public_id: str


class Specification(BaseModel):
    name: str
    value: str


class Dimensions(BaseModel):
    length: float | None = Field(default=None, ge=0)
    width: float | None = Field(default=None, ge=0)
    height: float | None = Field(default=None, ge=0)
    weight: float | None = Field(default=None, ge=0)


class Ratings(BaseModel):
    average: float = Field(default=0.0, ge=0, le=5)
    count: int = Field(default=0, ge=0)


class Product(Document):
    name: str = Field(max_length=100)
    description: str = Field(max_length=2000)
    price: float = Field(ge=0)
    original_price: float | None = Field(default=None, ge=0)
    discount: int = Field(default=0, ge=0, le=100)
    category_id: str
    brand: str = Field(default="", max_length=50)
    sku: str = Field(min_length=1)
    images: list[ProductImage] = Field(default_factory=list)
    specifications: list[Specification] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    dimensions: Dimensions | None = None
    warranty: str = Field(default="", max_length=100)
    is_featured: bool = False
    is_active: bool = True
    stock: int = Field(default=0, ge=0)
    ratings: Ratings = Field(default_factory=Ratings)
    created_by: str | None = None
    updated_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def name_and_description_must_not_be_blank(self):
        if not self.name.strip():
            raise ValidationError({"name": ["Product name is required"]})
        if not self.description.strip():
            raise ValidationError({"description": ["Product description is required"]})
        return self

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, created_by=None, **fields):
        now = datetime.now(UTC)
        return cls(created_by=created_by, created_at=now, updated_at=now, **fields)

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    @property
    def discount_price(self) -> float:
        return effective_price(self.price, self.discount)

    # -------------------------------------------------------------------
    # Changes
    # -------------------------------------------------------------------
    def update_details(self, changes: dict, updated_by=None):
        """Patch the editable fields named in ``changes``."""
        unknown = sorted(set(changes) - EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({field: ["Field cannot be updated"] for field in unknown})

        for field, value in changes.items():
            setattr(self, field, value)
        self.updated_by = updated_by
        self.updated_at = datetime.now(UTC)

    def activate(self, updated_by=None):
        self.is_active = True
        self.updated_by = updated_by
        self.updated_at = datetime.now(UTC)

    def deactivate(self, updated_by=None):
        self.is_active = False
        self.updated_by = updated_by
        self.updated_at = datetime.now(UTC)

    def summary(self) -> dict:
        """The slice of the product embedded in cart, wishlist and order views."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "discount": self.discount,
            "discount_price": self.discount_price,
            "images": [image.model_dump() for image in self.images],
            "is_active": self.is_active,
            "ratings": self.ratings.model_dump(),
        }

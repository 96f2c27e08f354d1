"""Product details: update command, handler and storefront reads."""

from pydantic import Field
from pymongo import DESCENDING

from catalog.category.repository import CategoryRepository
from catalog.product.product import Dimensions, Product, ProductImage, Specification
from catalog.product.repository import ProductFilters, ProductRepository
from shared.api import paginate, pagination_meta
from shared.command import Command
from shared.exceptions import NotFound, ValidationError
from shared.repository import parse_sort

_SORTABLE_FIELDS = {"created_at", "price", "name", "ratings.average", "discount"}


class UpdateProductDetails(Command):
    product_id: str
    updated_by: str | None = None
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, min_length=1, max_length=2000)
    price: float | None = Field(default=None, ge=0)
    original_price: float | None = Field(default=None, ge=0)
    discount: int | None = Field(default=None, ge=0, le=100)
    category_id: str | None = None
    brand: str | None = Field(default=None, max_length=50)
    images: list[ProductImage] | None = None
    specifications: list[Specification] | None = None
    features: list[str] | None = None
    tags: list[str] | None = None
    dimensions: Dimensions | None = None
    warranty: str | None = Field(default=None, max_length=100)
    is_featured: bool | None = None
    stock: int | None = Field(default=None, ge=0)


class ProductDetailsHandler:
    def __init__(self, products: ProductRepository, categories: CategoryRepository):
        self.products = products
        self.categories = categories

    def update_product_details(self, command: UpdateProductDetails) -> Product:
        product = self.products.get(command.product_id)

        changes = command.model_dump(exclude_unset=True, exclude={"product_id", "updated_by"})
        if changes.get("category_id"):
            category = self.categories.get_or_none(changes["category_id"])
            if category is None or not category.is_active:
                raise NotFound("Category not found")

        product.update_details(changes, updated_by=command.updated_by)
        self.products.add(product)
        return product

    def get_product(self, product_id: str, include_inactive: bool = False) -> Product:
        if include_inactive:
            return self.products.get(product_id)
        return self.products.get_active(product_id)

    def list_products(self, page=1, limit=12, sort=None, filters: ProductFilters | None = None) -> dict:
        skip, limit = paginate(page, limit)
        products, total = self.products.list_active(
            filters=filters,
            sort=parse_sort(sort, _SORTABLE_FIELDS),
            skip=skip,
            limit=limit,
        )
        return {
            "products": [_listing_view(product) for product in products],
            "pagination": pagination_meta(total, page, limit),
        }

    def search_products(self, q, page=1, limit=12) -> dict:
        if not q or not q.strip():
            raise ValidationError({"q": ["Search query is required"]})

        listing = self.list_products(page=page, limit=limit, filters=ProductFilters(search=q))
        return {**listing, "search_query": q}

    def featured_products(self, limit=8) -> list[dict]:
        products, _ = self.products.list_active(
            filters=ProductFilters(featured=True),
            sort=[("created_at", DESCENDING)],
            limit=limit,
        )
        return [_listing_view(product) for product in products]


def _listing_view(product: Product) -> dict:
    return {**product.model_dump(), "discount_price": product.discount_price}

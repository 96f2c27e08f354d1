import re
from datetime import UTC, datetime

from pydantic import BaseModel

from catalog.product.product import Product
from shared.db import PRODUCTS
from shared.exceptions import NotFound
from shared.repository import Repository

SEARCHABLE_FIELDS = ("name", "description", "brand", "tags")


class ProductFilters(BaseModel):
    """Storefront listing filters; unset fields do not narrow the listing."""

    category_id: str | None = None
    brand: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_rating: float | None = None
    search: str | None = None
    featured: bool = False

    def to_query(self) -> dict:
        query = {"is_active": True}
        if self.category_id:
            query["category_id"] = str(self.category_id)
        if self.brand:
            query["brand"] = {"$regex": re.escape(self.brand), "$options": "i"}
        if self.min_price is not None or self.max_price is not None:
            query["price"] = {}
            if self.min_price is not None:
                query["price"]["$gte"] = self.min_price
            if self.max_price is not None:
                query["price"]["$lte"] = self.max_price
        if self.min_rating is not None:
            query["ratings.average"] = {"$gte": self.min_rating}
        if self.featured:
            query["is_featured"] = True
        if self.search and self.search.strip():
            pattern = re.escape(self.search.strip())
            query["$or"] = [{field: {"$regex": pattern, "$options": "i"}} for field in SEARCHABLE_FIELDS]
        return query


class ProductRepository(Repository[Product]):
    collection_name = PRODUCTS
    model = Product
    label = "Product"

    def get_active(self, product_id: str) -> Product:
        """Return the product if it exists and is active, else ``NotFound``."""
        product = self.get_or_none(product_id)
        if product is None or not product.is_active:
            raise NotFound("Product not found")
        return product

    def active_by_ids(self, product_ids) -> dict[str, Product]:
        """Resolve many references in one query; missing or inactive ids are absent."""
        ids = [str(product_id) for product_id in product_ids]
        if not ids:
            return {}
        products = self.find({"_id": {"$in": ids}, "is_active": True})
        return {product.id: product for product in products}

    def sku_exists(self, sku: str) -> bool:
        return self.exists({"sku": sku})

    def list_active(
        self, filters: ProductFilters | None = None, sort=None, skip=0, limit=0
    ) -> tuple[list[Product], int]:
        query = (filters or ProductFilters()).to_query()
        return self.find(query, sort=sort, skip=skip, limit=limit), self.count(query)

    def count_active_in_category(self, category_id: str) -> int:
        return self.count({"category_id": str(category_id), "is_active": True})

    def deactivate_many(self, product_ids, updated_by=None) -> int:
        """Soft-delete the given products; returns how many were changed."""
        result = self._collection.update_many(
            {"_id": {"$in": [str(product_id) for product_id in product_ids]}, "is_active": True},
            {"$set": {"is_active": False, "updated_by": updated_by, "updated_at": datetime.now(UTC)}},
        )
        return result.modified_count

    def set_ratings(self, product_id: str, average: float, count: int) -> None:
        self._collection.update_one(
            {"_id": str(product_id)},
            {"$set": {"ratings.average": average, "ratings.count": count}},
        )

"""Wishlist aggregate — presence-only product references, one wishlist per user.

Prunes stale references on read exactly like the cart, but carries no
quantity and no totals.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from catalog.product.product import Product
from shared.exceptions import ValidationError
from shared.repository import Document


class WishlistItem(BaseModel):
    product_id: str
    added_at: datetime | None = None


class Wishlist(Document):
    user_id: str
    items: list[WishlistItem] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=str(user_id), created_at=now, updated_at=now)

    def contains(self, product_id) -> bool:
        return any(item.product_id == str(product_id) for item in self.items)

    def add_item(self, product_id):
        if self.contains(product_id):
            raise ValidationError({"product_id": ["Product already in wishlist"]})

        now = datetime.now(UTC)
        self.items.append(WishlistItem(product_id=str(product_id), added_at=now))
        self.updated_at = now

    def remove_item(self, product_id) -> bool:
        remaining = [item for item in self.items if item.product_id != str(product_id)]
        if len(remaining) == len(self.items):
            return False

        self.items = remaining
        self.updated_at = datetime.now(UTC)
        return True

    def prune(self, active_product_ids) -> int:
        kept = [item for item in self.items if item.product_id in active_product_ids]
        dropped = len(self.items) - len(kept)
        if dropped:
            self.items = kept
            self.updated_at = datetime.now(UTC)
        return dropped

    def priced(self, products: dict[str, Product]) -> dict:
        entries = [
            {
                "product": products[item.product_id].summary(),
                "current_price": products[item.product_id].discount_price,
                "added_at": item.added_at,
            }
            for item in self.items
            if item.product_id in products
        ]
        return {"id": self.id, "user_id": self.user_id, "items": entries, "updated_at": self.updated_at}


def empty_wishlist(user_id) -> dict:
    return {"id": None, "user_id": str(user_id), "items": [], "updated_at": None}

"""Shopping Cart aggregate — one per user, created lazily on first add.

The cart stores product references and quantities only. Prices are never
stored: every read resolves the referenced products and prices the lines
through ``catalog.product.pricing``. Lines whose product has gone missing or
inactive are dropped on read (see ``CartRepository.reconcile``).
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from catalog.product.product import Product
from shared.exceptions import NotFound, ValidationError
from shared.repository import Document

MAX_QUANTITY_PER_ITEM = 10


class CartItem(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    product_id: str
    quantity: int = Field(ge=1, le=MAX_QUANTITY_PER_ITEM)
    added_at: datetime | None = None


class Cart(Document):
    user_id: str
    items: list[CartItem] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=str(user_id), created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def _item(self, product_id) -> CartItem | None:
        return next((item for item in self.items if item.product_id == str(product_id)), None)

    def add_item(self, product_id, quantity=1):
        """Add a line, or grow the existing line for the same product."""
        now = datetime.now(UTC)
        existing = self._item(product_id)

        if existing:
            new_quantity = existing.quantity + quantity
            if new_quantity > MAX_QUANTITY_PER_ITEM:
                raise ValidationError({"quantity": [f"Maximum quantity per item is {MAX_QUANTITY_PER_ITEM}"]})
            existing.quantity = new_quantity
        else:
            self.items.append(CartItem(product_id=str(product_id), quantity=quantity, added_at=now))

        self.updated_at = now

    def update_item_quantity(self, product_id, quantity):
        item = self._item(product_id)
        if item is None:
            raise NotFound("Item not found in cart")

        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

    def remove_item(self, product_id) -> bool:
        """Drop the line for ``product_id`` if present; returns whether anything changed."""
        remaining = [item for item in self.items if item.product_id != str(product_id)]
        if len(remaining) == len(self.items):
            return False

        self.items = remaining
        self.updated_at = datetime.now(UTC)
        return True

    def prune(self, active_product_ids) -> int:
        """Drop lines whose product is not in ``active_product_ids``; returns how many were dropped."""
        kept = [item for item in self.items if item.product_id in active_product_ids]
        dropped = len(self.items) - len(kept)
        if dropped:
            self.items = kept
            self.updated_at = datetime.now(UTC)
        return dropped

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def priced(self, products: dict[str, Product]) -> dict:
        """The cart as the storefront shows it, priced against current ``products``.

        Only lines whose product appears in ``products`` are included.
        """
        lines = []
        for item in self.items:
            product = products.get(item.product_id)
            if product is None:
                continue
            current_price = product.discount_price
            lines.append(
                {
                    "product": product.summary(),
                    "quantity": item.quantity,
                    "added_at": item.added_at,
                    "current_price": current_price,
                    "item_total": current_price * item.quantity,
                }
            )

        return {
            "id": self.id,
            "user_id": self.user_id,
            "items": lines,
            "total_price": sum(line["item_total"] for line in lines),
            "total_items": sum(line["quantity"] for line in lines),
            "updated_at": self.updated_at,
        }


def empty_cart(user_id) -> dict:
    return {"id": None, "user_id": str(user_id), "items": [], "total_price": 0, "total_items": 0, "updated_at": None}

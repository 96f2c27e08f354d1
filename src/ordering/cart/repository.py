from catalog.product.product import Product
from ordering.cart.cart import Cart
from shared.db import CARTS
from shared.repository import Repository


class CartRepository(Repository[Cart]):
    collection_name = CARTS
    model = Cart
    label = "Cart"

    def get_for_user(self, user_id) -> Cart | None:
        return self.find_one({"user_id": str(user_id)})

    def delete_for_user(self, user_id) -> bool:
        return self._collection.delete_one({"user_id": str(user_id)}).deleted_count > 0

    def reconcile(self, cart: Cart, products: dict[str, Product]) -> int:
        """Second half of a cart read: drop lines not in ``products`` and persist if any were dropped.

        Reading a cart is therefore not side-effect free.
        """
        dropped = cart.prune(products.keys())
        if dropped:
            self.add(cart)
        return dropped

from catalog.product.product import Product
from ordering.wishlist.wishlist import Wishlist
from shared.db import WISHLISTS
from shared.repository import Repository


class WishlistRepository(Repository[Wishlist]):
    collection_name = WISHLISTS
    model = Wishlist
    label = "Wishlist"

    def get_for_user(self, user_id) -> Wishlist | None:
        return self.find_one({"user_id": str(user_id)})

    def delete_for_user(self, user_id) -> bool:
        return self._collection.delete_one({"user_id": str(user_id)}).deleted_count > 0

    def reconcile(self, wishlist: Wishlist, products: dict[str, Product]) -> int:
        """Drop entries not in ``products`` and persist if any were dropped."""
        dropped = wishlist.prune(products.keys())
        if dropped:
            self.add(wishlist)
        return dropped

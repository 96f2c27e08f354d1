"""Wishlist management — commands and handler."""

import structlog

from catalog.product.repository import ProductRepository
from ordering.wishlist.repository import WishlistRepository
from ordering.wishlist.wishlist import Wishlist, empty_wishlist
from shared.command import Command

logger = structlog.get_logger(__name__)


class AddToWishlist(Command):
    user_id: str
    product_id: str


class RemoveFromWishlist(Command):
    user_id: str
    product_id: str


class ClearWishlist(Command):
    user_id: str


class ManageWishlistHandler:
    def __init__(self, wishlists: WishlistRepository, products: ProductRepository):
        self.wishlists = wishlists
        self.products = products

    def _view(self, wishlist: Wishlist) -> dict:
        products = self.products.active_by_ids(item.product_id for item in wishlist.items)
        dropped = self.wishlists.reconcile(wishlist, products)
        if dropped:
            logger.info("Wishlist pruned", user_id=wishlist.user_id, dropped=dropped)
        return wishlist.priced(products)

    def get_wishlist(self, user_id) -> dict:
        wishlist = self.wishlists.get_for_user(user_id)
        if wishlist is None:
            return empty_wishlist(user_id)
        return self._view(wishlist)

    def add_to_wishlist(self, command: AddToWishlist) -> dict:
        self.products.get_active(command.product_id)

        wishlist = self.wishlists.get_for_user(command.user_id) or Wishlist.create(command.user_id)
        wishlist.add_item(command.product_id)
        self.wishlists.add(wishlist)

        logger.info("Added to wishlist", user_id=command.user_id, product_id=command.product_id)
        return self._view(wishlist)

    def remove_from_wishlist(self, command: RemoveFromWishlist) -> dict:
        wishlist = self.wishlists.get_for_user(command.user_id)
        if wishlist is None:
            return empty_wishlist(command.user_id)

        if wishlist.remove_item(command.product_id):
            self.wishlists.add(wishlist)
        return self._view(wishlist)

    def clear_wishlist(self, command: ClearWishlist) -> None:
        if self.wishlists.delete_for_user(command.user_id):
            logger.info("Wishlist cleared", user_id=command.user_id)

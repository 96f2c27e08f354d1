"""Cart item management — commands and handler."""

import structlog
from pydantic import Field

from catalog.product.repository import ProductRepository
from ordering.cart.cart import MAX_QUANTITY_PER_ITEM, Cart, empty_cart
from ordering.cart.repository import CartRepository
from shared.command import Command
from shared.exceptions import NotFound

logger = structlog.get_logger(__name__)


class AddToCart(Command):
    user_id: str
    product_id: str
    quantity: int = Field(default=1, ge=1, le=MAX_QUANTITY_PER_ITEM)


class UpdateCartItem(Command):
    user_id: str
    product_id: str
    quantity: int = Field(ge=1, le=MAX_QUANTITY_PER_ITEM)


class RemoveFromCart(Command):
    user_id: str
    product_id: str


class ClearCart(Command):
    user_id: str


class ManageCartItemsHandler:
    def __init__(self, carts: CartRepository, products: ProductRepository):
        self.carts = carts
        self.products = products

    def _view(self, cart: Cart) -> dict:
        products = self.products.active_by_ids(item.product_id for item in cart.items)
        dropped = self.carts.reconcile(cart, products)
        if dropped:
            logger.info("Cart pruned", user_id=cart.user_id, dropped=dropped)
        return cart.priced(products)

    def get_cart(self, user_id) -> dict:
        cart = self.carts.get_for_user(user_id)
        if cart is None:
            return empty_cart(user_id)
        return self._view(cart)

    def add_to_cart(self, command: AddToCart) -> dict:
        self.products.get_active(command.product_id)

        # No inventory management: stock is not checked, only the per-line cap
        cart = self.carts.get_for_user(command.user_id) or Cart.create(command.user_id)
        cart.add_item(command.product_id, command.quantity)
        self.carts.add(cart)

        logger.info("Added to cart", user_id=command.user_id, product_id=command.product_id, quantity=command.quantity)
        return self._view(cart)

    def update_cart_item(self, command: UpdateCartItem) -> dict:
        cart = self.carts.get_for_user(command.user_id)
        if cart is None:
            raise NotFound("Cart not found")

        cart.update_item_quantity(command.product_id, command.quantity)
        self.products.get_active(command.product_id)
        self.carts.add(cart)
        return self._view(cart)

    def remove_from_cart(self, command: RemoveFromCart) -> dict:
        cart = self.carts.get_for_user(command.user_id)
        if cart is None:
            return empty_cart(command.user_id)

        if cart.remove_item(command.product_id):
            self.carts.add(cart)
        return self._view(cart)

    def clear_cart(self, command: ClearCart) -> None:
        if self.carts.delete_for_user(command.user_id):
            logger.info("Cart cleared", user_id=command.user_id)

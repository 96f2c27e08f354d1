"""Ordering API package."""

from ordering.api.routes import cart_router, order_router, wishlist_router

__all__ = ["cart_router", "wishlist_router", "order_router"]

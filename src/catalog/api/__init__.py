"""Catalog API package."""

from catalog.api.routes import bulk_router, category_router, product_router

__all__ = ["product_router", "category_router", "bulk_router"]

"""Product lifecycle management — commands and handler."""

import structlog

from catalog.product.repository import ProductRepository
from shared.command import Command

logger = structlog.get_logger(__name__)


class ActivateProduct(Command):
    product_id: str
    updated_by: str | None = None


class DeactivateProduct(Command):
    product_id: str
    updated_by: str | None = None


class ManageLifecycleHandler:
    def __init__(self, products: ProductRepository):
        self.products = products

    def activate_product(self, command: ActivateProduct):
        product = self.products.get(command.product_id)
        product.activate(updated_by=command.updated_by)
        self.products.add(product)
        return product

    def deactivate_product(self, command: DeactivateProduct):
        """Hide the product; carts and wishlists drop it on their next read."""
        product = self.products.get(command.product_id)
        product.deactivate(updated_by=command.updated_by)
        self.products.add(product)
        logger.info("Product deactivated", product_id=product.id)
        return product

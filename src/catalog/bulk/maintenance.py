"""Bulk product update and soft delete."""

import pydantic
import structlog
from pydantic import BaseModel, Field

from catalog.product.repository import ProductRepository
from shared.command import Command
from shared.exceptions import ValidationError

logger = structlog.get_logger(__name__)


class BulkUpdateProducts(Command):
    updates: list[dict] = Field(min_length=1)
    updated_by: str | None = None


class BulkDeleteProducts(Command):
    product_ids: list[str] = Field(min_length=1)
    updated_by: str | None = None


class UpdateError(BaseModel):
    index: int
    id: str | None = None
    error: str


class BulkUpdateResult(BaseModel):
    total: int = 0
    successful: int = 0
    failed: int = 0
    errors: list[UpdateError] = Field(default_factory=list)
    updated_products: list[dict] = Field(default_factory=list)


class BulkMaintenanceHandler:
    def __init__(self, products: ProductRepository):
        self.products = products

    def update_products(self, command: BulkUpdateProducts) -> BulkUpdateResult:
        result = BulkUpdateResult(total=len(command.updates))

        for index, entry in enumerate(command.updates):
            changes = dict(entry)
            product_id = changes.pop("id", None) or changes.pop("_id", None)
            if not product_id:
                result.failed += 1
                result.errors.append(UpdateError(index=index, error="Product ID is required"))
                continue

            product = self.products.get_or_none(str(product_id))
            if product is None:
                result.failed += 1
                result.errors.append(UpdateError(index=index, id=str(product_id), error="Product not found"))
                continue

            try:
                product.update_details(changes, updated_by=command.updated_by)
            except (ValidationError, pydantic.ValidationError) as exc:
                result.failed += 1
                result.errors.append(UpdateError(index=index, id=product.id, error=str(exc)))
                continue

            self.products.add(product)
            result.successful += 1
            result.updated_products.append({"id": product.id, "name": product.name, "sku": product.sku})

        logger.info("Bulk update completed", successful=result.successful, failed=result.failed)
        return result

    def delete_products(self, command: BulkDeleteProducts) -> int:
        deleted = self.products.deactivate_many(command.product_ids, updated_by=command.updated_by)
        logger.info("Bulk delete completed", requested=len(command.product_ids), deleted=deleted)
        return deleted

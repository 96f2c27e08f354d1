"""Bulk product upload — command, result and handler.

Rows are processed sequentially and independently. A row that fails
validation, collides on SKU or is rejected by the product model is recorded
with its file row number (the header is row 1) and processing moves on, so
partial success is a normal outcome.
"""

import pydantic
import structlog
from pydantic import BaseModel, Field
from pymongo.errors import DuplicateKeyError

from catalog.bulk.rows import generate_sku, product_fields, read_rows, validate_row
from catalog.category.repository import CategoryRepository
from catalog.product.product import Product
from catalog.product.repository import ProductRepository
from shared.command import Command
from shared.exceptions import ValidationError

logger = structlog.get_logger(__name__)

# Data rows start on line 2 of the file
_FIRST_DATA_ROW = 2


class BulkUploadProducts(Command):
    content: str
    uploaded_by: str | None = None


class RowError(BaseModel):
    row: int
    product: str
    errors: list[str]


class CreatedProduct(BaseModel):
    row: int
    id: str
    name: str
    sku: str


class BulkUploadResult(BaseModel):
    total: int = 0
    successful: int = 0
    failed: int = 0
    errors: list[RowError] = Field(default_factory=list)
    created_products: list[CreatedProduct] = Field(default_factory=list)

    def record_failure(self, row: int, product: str, errors: list[str]) -> None:
        self.failed += 1
        self.errors.append(RowError(row=row, product=product, errors=errors))

    def record_success(self, row: int, product: Product) -> None:
        self.successful += 1
        self.created_products.append(CreatedProduct(row=row, id=product.id, name=product.name, sku=product.sku))


def _messages(exc) -> list[str]:
    if isinstance(exc, ValidationError):
        return [msg for field_messages in exc.messages.values() for msg in field_messages]
    if isinstance(exc, pydantic.ValidationError):
        return [f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()]
    return [str(exc) or "Failed to create product"]


class BulkUploadHandler:
    def __init__(self, products: ProductRepository, categories: CategoryRepository, sku_generator=generate_sku):
        self.products = products
        self.categories = categories
        self.generate_sku = sku_generator

    def upload_products(self, command: BulkUploadProducts) -> BulkUploadResult:
        rows = read_rows(command.content)
        if not rows:
            raise ValidationError({"file": ["CSV file is empty or invalid"]})

        categories = self.categories.active()
        result = BulkUploadResult(total=len(rows))

        for index, row in enumerate(rows):
            row_number = index + _FIRST_DATA_ROW
            name = (row.get("name") or "").strip() or "Unknown"

            errors = validate_row(row, categories)
            if errors:
                result.record_failure(row_number, name, errors)
                continue

            category = self.categories.find_by_name(row["category"], categories)

            sku = (row.get("sku") or "").strip()
            if not sku:
                sku = self.generate_sku(category.name, (row.get("brand") or "").strip() or "GENERIC", name)

            if self.products.sku_exists(sku):
                result.record_failure(row_number, name, [f'Product with SKU "{sku}" already exists'])
                continue

            try:
                product = Product.create(
                    created_by=command.uploaded_by,
                    sku=sku,
                    **product_fields(row, category.id),
                )
                self.products.add(product)
            except (ValidationError, pydantic.ValidationError, DuplicateKeyError) as exc:
                logger.warning("Bulk upload row rejected", row=row_number, product=name, error=str(exc))
                result.record_failure(row_number, name, _messages(exc))
                continue

            result.record_success(row_number, product)

        logger.info(
            "Bulk upload completed",
            total=result.total,
            successful=result.successful,
            failed=result.failed,
        )
        return result

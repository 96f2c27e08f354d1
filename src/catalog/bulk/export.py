"""CSV template and export of the catalog in the bulk upload column layout.

An exported file can be fed back into the bulk upload unchanged.
"""

import csv
import io

from catalog.bulk.rows import COLUMNS
from catalog.category.repository import CategoryRepository
from catalog.product.product import Product
from catalog.product.repository import ProductRepository
from shared.exceptions import NotFound

TEMPLATE_FILENAME = "bulk-product-upload-template.csv"
EXPORT_FILENAME = "products-export.csv"

_SAMPLE_ROWS = [
    {
        "name": "Aurora 55 4K Smart TV",
        "description": "55 inch 4K UHD smart television with HDR10 and built-in streaming apps",
        "price": "54999",
        "originalPrice": "64999",
        "discount": "10",
        "category": "Televisions",
        "brand": "Aurora",
        "specifications": "Screen Size:55 inch|Resolution:3840x2160|Refresh Rate:60Hz",
        "features": "HDR10|Dolby Audio|Voice Remote",
        "tags": "tv,4k,smart tv",
        "warranty": "2 years manufacturer warranty",
        "isFeatured": "true",
        "isActive": "true",
        "imageUrls": "https://example.com/images/aurora-55-front.jpg,https://example.com/images/aurora-55-side.jpg",
        "dimensions_length": "123",
        "dimensions_width": "8",
        "dimensions_height": "72",
        "dimensions_weight": "14.5",
        "sku": "",
    },
    {
        "name": "Pulse Wireless Earbuds",
        "description": "True wireless earbuds with active noise cancellation and 30 hour battery",
        "price": "3499",
        "originalPrice": "",
        "discount": "0",
        "category": "Audio",
        "brand": "Pulse",
        "specifications": "Battery Life:30 hours|Bluetooth:5.3",
        "features": "Active Noise Cancellation|Fast Charging",
        "tags": "earbuds,wireless,audio",
        "warranty": "1 year",
        "isFeatured": "false",
        "isActive": "true",
        "imageUrls": "https://example.com/images/pulse-earbuds.jpg",
        "dimensions_length": "",
        "dimensions_width": "",
        "dimensions_height": "",
        "dimensions_weight": "0.05",
        "sku": "AUDPUPUL001",
    },
]


def _write(rows) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=COLUMNS, lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def _number(value) -> str:
    if value is None:
        return ""
    return str(int(value)) if float(value).is_integer() else str(value)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def product_row(product: Product, category_name: str) -> dict[str, str]:
    dimensions = product.dimensions
    return {
        "name": product.name,
        "description": product.description,
        "price": _number(product.price),
        "originalPrice": _number(product.original_price),
        "discount": str(product.discount),
        "category": category_name,
        "brand": product.brand,
        "specifications": "|".join(f"{spec.name}:{spec.value}" for spec in product.specifications),
        "features": "|".join(product.features),
        "tags": ",".join(product.tags),
        "warranty": product.warranty,
        "isFeatured": _flag(product.is_featured),
        "isActive": _flag(product.is_active),
        "imageUrls": ",".join(image.url for image in product.images),
        "dimensions_length": _number(dimensions.length) if dimensions else "",
        "dimensions_width": _number(dimensions.width) if dimensions else "",
        "dimensions_height": _number(dimensions.height) if dimensions else "",
        "dimensions_weight": _number(dimensions.weight) if dimensions else "",
        "sku": product.sku,
    }


def template_csv() -> str:
    return _write(_SAMPLE_ROWS)


class ExportHandler:
    def __init__(self, products: ProductRepository, categories: CategoryRepository):
        self.products = products
        self.categories = categories

    def export_products(self) -> str:
        products, _ = self.products.list_active(sort=[("created_at", -1)])
        if not products:
            raise NotFound("No products found to export")

        category_names = {category.id: category.name for category in self.categories.all()}
        return _write(product_row(product, category_names.get(product.category_id, "")) for product in products)

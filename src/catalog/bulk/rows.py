"""Parsing and validation of bulk product CSV rows.

Each row is validated on its own; a bad row never affects its neighbours.
Sub-fields are lenient: a malformed specification, feature, tag or image
entry is dropped rather than failing the row.
"""

import csv
import io
import math
import random
from uuid import uuid4

COLUMNS = [
    "name",
    "description",
    "price",
    "originalPrice",
    "discount",
    "category",
    "brand",
    "specifications",
    "features",
    "tags",
    "warranty",
    "isFeatured",
    "isActive",
    "imageUrls",
    "dimensions_length",
    "dimensions_width",
    "dimensions_height",
    "dimensions_weight",
    "sku",
]

_DIMENSION_COLUMNS = {
    "length": "dimensions_length",
    "width": "dimensions_width",
    "height": "dimensions_height",
    "weight": "dimensions_weight",
}


def read_rows(content: str) -> list[dict[str, str]]:
    """Parse CSV text into one dict per data row, keyed by stripped header names."""
    reader = csv.DictReader(io.StringIO(content))
    if reader.fieldnames is None:
        return []
    reader.fieldnames = [name.strip() for name in reader.fieldnames]
    return [{key: (value or "") for key, value in row.items() if key is not None} for row in reader]


def _cell(row, column) -> str:
    return (row.get(column) or "").strip()


def parse_number(value: str) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def validate_row(row: dict[str, str], categories) -> list[str]:
    """Return the reasons ``row`` cannot be imported; empty when it can."""
    errors = []

    if not _cell(row, "name"):
        errors.append("Product name is required")

    if not _cell(row, "description"):
        errors.append("Description is required")

    price = parse_number(_cell(row, "price"))
    if price is None or price <= 0:
        errors.append("Valid price is required")

    category_name = _cell(row, "category")
    if not category_name:
        errors.append("Category is required")
    elif not any(category.matches(category_name) for category in categories):
        errors.append(f'Category "{category_name}" not found')

    return errors


def parse_specifications(value: str) -> list[dict[str, str]]:
    specifications = []
    for entry in value.split("|"):
        name, _, spec_value = entry.partition(":")
        name, spec_value = name.strip(), spec_value.strip()
        if name and spec_value:
            specifications.append({"name": name, "value": spec_value})
    return specifications


def parse_list(value: str, separator: str) -> list[str]:
    return [item.strip() for item in value.split(separator) if item.strip()]


def parse_images(value: str) -> list[dict[str, str]]:
    return [
        {"url": url, "public_id": f"external_{uuid4().hex}_{index}"}
        for index, url in enumerate(parse_list(value, ","))
    ]


def parse_dimensions(row: dict[str, str]) -> dict[str, float] | None:
    dimensions = {}
    for key, column in _DIMENSION_COLUMNS.items():
        number = parse_number(_cell(row, column))
        if number is not None:
            dimensions[key] = number
    return dimensions or None


def parse_flag(value: str, default: bool) -> bool:
    value = value.strip().lower()
    if default:
        return value not in ("false", "0")
    return value in ("true", "1")


def generate_sku(category_name: str, brand: str, product_name: str, rng=random) -> str:
    """Category, brand and name prefixes plus a random 3-digit suffix.

    Not guaranteed unique; callers reject a colliding SKU instead of retrying.
    """
    category_code = category_name[:3].upper()
    brand_code = brand[:2].upper()
    product_code = product_name[:3].upper()
    return f"{category_code}{brand_code}{product_code}{rng.randrange(1000):03d}"


def product_fields(row: dict[str, str], category_id: str) -> dict:
    """Map a validated row onto ``Product`` fields (everything except the SKU)."""
    original_price = parse_number(_cell(row, "originalPrice"))
    discount = parse_number(_cell(row, "discount"))
    return {
        "name": _cell(row, "name"),
        "description": _cell(row, "description"),
        "price": parse_number(_cell(row, "price")),
        "original_price": original_price,
        "discount": discount if discount is not None else 0,
        "category_id": category_id,
        "brand": _cell(row, "brand"),
        "specifications": parse_specifications(_cell(row, "specifications")),
        "features": parse_list(_cell(row, "features"), "|"),
        "tags": parse_list(_cell(row, "tags"), ","),
        "dimensions": parse_dimensions(row),
        "warranty": _cell(row, "warranty"),
        "is_featured": parse_flag(_cell(row, "isFeatured"), default=False),
        "is_active": parse_flag(_cell(row, "isActive"), default=True),
        "images": parse_images(_cell(row, "imageUrls")),
    }

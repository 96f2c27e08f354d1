"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the API's request schemas, using
the exact snake_case field names the schemas expect. CSV rows use the
camelCase bulk upload headers.
"""

import csv
import io
import random
import uuid

from faker import Faker

from catalog.bulk.rows import COLUMNS

fake = Faker("en_IN")

BRANDS = ["Aurora", "Pulse", "Voltix", "Nimbus", "Zenith"]

# ---------- Catalog ----------


def unique_sku(prefix: str = "LT") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


def category_data() -> dict:
    """CreateCategoryRequest payload; names carry a suffix to stay unique."""
    return {
        "name": f"{fake.word().capitalize()} {uuid.uuid4().hex[:6]}"[:50],
        "description": fake.sentence()[:500],
    }


def product_data(category_id: str) -> dict:
    """CreateProductRequest payload."""
    brand = random.choice(BRANDS)
    return {
        "name": f"{brand} {fake.word().capitalize()} {random.randint(10, 99)}"[:100],
        "description": fake.paragraph(nb_sentences=3)[:2000],
        "price": random.randint(499, 99999),
        "discount": random.choice([0, 0, 5, 10, 15, 25]),
        "category_id": category_id,
        "brand": brand,
        "sku": unique_sku("PROD"),
        "images": [{"url": f"https://cdn.example.com/images/{uuid.uuid4().hex}.jpg", "public_id": uuid.uuid4().hex}],
        "features": [fake.word().capitalize() for _ in range(3)],
        "tags": [fake.word() for _ in range(2)],
    }


def bulk_csv(category_name: str, rows: int = 5, bad_rows: int = 1) -> str:
    """A bulk upload file where the last ``bad_rows`` rows name an unknown category."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=COLUMNS, lineterminator="\n")
    writer.writeheader()
    for index in range(rows):
        brand = random.choice(BRANDS)
        writer.writerow(
            {
                "name": f"{brand} {fake.word().capitalize()}",
                "description": fake.sentence(),
                "price": str(random.randint(499, 49999)),
                "discount": str(random.choice([0, 10])),
                "category": category_name if index < rows - bad_rows else f"Missing {uuid.uuid4().hex[:4]}",
                "brand": brand,
                "specifications": f"Warranty:{random.randint(1, 3)} years|Colour:{fake.color_name()}",
                "features": "Fast Charging|Bluetooth 5.3",
                "tags": "loadtest,electronics",
                "sku": unique_sku("BULK"),
            }
        )
    return buffer.getvalue()


# ---------- Ordering ----------


def shipping_info() -> dict:
    return {
        "name": fake.name()[:100],
        "phone": fake.msisdn()[:20],
        "address": fake.street_address()[:250],
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "country": "India",
        "zip_code": fake.postcode()[:20],
    }


def order_data() -> dict:
    """PlaceOrderRequest payload."""
    return {
        "shipping_info": shipping_info(),
        "payment_method": random.choice(["card", "upi", "netbanking", "wallet", "cod"]),
        "tax_price": random.choice([0, 18, 180]),
        "shipping_price": random.choice([0, 50]),
    }


# ---------- Reviews ----------


def review_data(product_id: str) -> dict:
    """SubmitCommentRequest payload."""
    return {
        "product_id": product_id,
        "rating": random.randint(1, 5),
        "title": fake.sentence(nb_words=4)[:100],
        "comment": fake.paragraph(nb_sentences=2)[:1000],
    }

from functools import lru_cache

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from shared.config import get_settings

# Collection names, one per document type
PRODUCTS = "products"
CATEGORIES = "categories"
CARTS = "carts"
WISHLISTS = "wishlists"
ORDERS = "orders"
COMMENTS = "comments"


@lru_cache
def get_client() -> MongoClient:
    """Process-wide client; pymongo pools connections internally."""
    return MongoClient(get_settings().mongodb_uri, tz_aware=True)


def get_database() -> Database:
    """FastAPI dependency yielding the storefront database.

    Tests override this dependency with a mongomock database.
    """
    return get_client()[get_settings().mongodb_database]


def setup_db(database: Database) -> None:
    """Create the indexes the storefront relies on"""
    database[PRODUCTS].create_index([("sku", ASCENDING)], unique=True)
    database[PRODUCTS].create_index([("is_active", ASCENDING), ("category_id", ASCENDING), ("price", ASCENDING)])
    database[PRODUCTS].create_index([("created_at", DESCENDING), ("is_active", ASCENDING)])

    database[CATEGORIES].create_index([("name", ASCENDING)], unique=True)

    database[CARTS].create_index([("user_id", ASCENDING)], unique=True)
    database[WISHLISTS].create_index([("user_id", ASCENDING)], unique=True)

    database[ORDERS].create_index([("user_id", ASCENDING)])
    database[ORDERS].create_index([("order_status", ASCENDING)])
    database[ORDERS].create_index([("created_at", DESCENDING)])

    database[COMMENTS].create_index([("product_id", ASCENDING), ("created_at", DESCENDING)])
    database[COMMENTS].create_index([("user_id", ASCENDING), ("product_id", ASCENDING)])
    database[COMMENTS].create_index([("status", ASCENDING), ("is_active", ASCENDING)])


def drop_db(database: Database) -> None:
    """Drop every storefront collection"""
    for name in (PRODUCTS, CATEGORIES, CARTS, WISHLISTS, ORDERS, COMMENTS):
        database.drop_collection(name)

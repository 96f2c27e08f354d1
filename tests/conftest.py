import os
from pathlib import Path

import mongomock
import pytest

os.environ.setdefault("ENV", "test")
os.environ.setdefault("JWT_SECRET", "test-secret")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------
@pytest.fixture()
def database():
    """A fresh in-memory database with the storefront indexes."""
    from shared.db import drop_db, setup_db

    db = mongomock.MongoClient(tz_aware=True)["skyelectrotech_test"]
    setup_db(db)

    yield db

    drop_db(db)


@pytest.fixture()
def products(database):
    from catalog.product.repository import ProductRepository

    return ProductRepository(database)


@pytest.fixture()
def categories(database):
    from catalog.category.repository import CategoryRepository

    return CategoryRepository(database)


@pytest.fixture()
def carts(database):
    from ordering.cart.repository import CartRepository

    return CartRepository(database)


@pytest.fixture()
def wishlists(database):
    from ordering.wishlist.repository import WishlistRepository

    return WishlistRepository(database)


@pytest.fixture()
def orders(database):
    from ordering.order.repository import OrderRepository

    return OrderRepository(database)


@pytest.fixture()
def comments(database):
    from reviews.comment.repository import CommentRepository

    return CommentRepository(database)


# ---------------------------------------------------------------------------
# Catalog data
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_category(categories):
    from catalog.category.category import Category

    def _make(name="Televisions", **overrides):
        category = Category.create(name=name, description=overrides.pop("description", ""))
        for field, value in overrides.items():
            setattr(category, field, value)
        categories.add(category)
        return category

    return _make


@pytest.fixture()
def category(make_category):
    return make_category()


@pytest.fixture()
def make_product(products, category):
    from catalog.product.product import Product

    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        defaults = {
            "name": f"Product {counter['n']}",
            "description": "A test product",
            "price": 1000,
            "category_id": category.id,
            "sku": f"SKU-{counter['n']:03d}",
        }
        defaults.update(overrides)
        product = Product.create(**defaults)
        products.add(product)
        return product

    return _make


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def client(database):
    from fastapi.testclient import TestClient

    from app import create_app
    from shared.db import get_database

    app = create_app()
    app.dependency_overrides[get_database] = lambda: database

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def auth_headers():
    """Build an Authorization header for an actor with the given role."""
    from shared.auth import Actor, create_access_token

    def _headers(user_id="user-1", role="user", name="Test User"):
        token = create_access_token(Actor(id=user_id, role=role, name=name))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def user_headers(auth_headers):
    return auth_headers()


@pytest.fixture()
def admin_headers(auth_headers):
    return auth_headers(user_id="admin-1", role="admin", name="Store Admin")


@pytest.fixture()
def employee_headers(auth_headers):
    return auth_headers(user_id="employee-1", role="employee", name="Warehouse")


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------
@pytest.fixture()
def shipping_info():
    from ordering.order.order import ShippingInfo

    return ShippingInfo(
        name="Asha Rao",
        phone="9876543210",
        address="12 MG Road",
        city="Bengaluru",
        state="Karnataka",
        country="India",
        zip_code="560001",
    )


@pytest.fixture()
def cart_handler(carts, products):
    from ordering.cart.items import ManageCartItemsHandler

    return ManageCartItemsHandler(carts, products)


@pytest.fixture()
def place_order(orders, carts, products, cart_handler, shipping_info):
    """Fill ``user_id``'s cart with ``(product, quantity)`` lines and check it out."""
    from ordering.cart.items import AddToCart
    from ordering.order.creation import PlaceOrder, PlaceOrderHandler

    def _place(*lines, user_id="user-1", **overrides):
        for product, quantity in lines:
            cart_handler.add_to_cart(AddToCart(user_id=user_id, product_id=product.id, quantity=quantity))
        command = PlaceOrder(user_id=user_id, shipping_info=shipping_info, **overrides)
        return PlaceOrderHandler(orders, carts, products).place_order(command)

    return _place

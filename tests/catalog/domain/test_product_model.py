"""Tests for the Product aggregate."""

import pydantic
import pytest
from catalog.product.product import Product
from shared.exceptions import ValidationError


def _make_product(**overrides):
    defaults = {
        "name": "Aurora 55 4K Smart TV",
        "description": "55 inch 4K television",
        "price": 54999,
        "category_id": "cat-tv",
        "sku": "TELAUAUR001",
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_sets_defaults_and_timestamps(self):
        product = _make_product(created_by="admin-1")

        assert product.is_active is True
        assert product.discount == 0
        assert product.ratings.average == 0
        assert product.ratings.count == 0
        assert product.created_by == "admin-1"
        assert product.created_at is not None
        assert product.created_at == product.updated_at

    def test_blank_name_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_product(name="   ")
        assert exc.value.messages == {"name": ["Product name is required"]}

    def test_discount_above_100_is_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            _make_product(discount=101)

    def test_negative_price_is_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            _make_product(price=-1)


class TestDiscountPrice:
    def test_discount_applies_to_price_not_original_price(self):
        product = _make_product(price=1000, original_price=2000, discount=10)
        assert product.discount_price == 900

    def test_summary_carries_current_discount_price(self):
        product = _make_product(price=1000, discount=25)
        summary = product.summary()

        assert summary["id"] == product.id
        assert summary["discount_price"] == 750
        assert summary["is_active"] is True


class TestProductChanges:
    def test_update_details_patches_fields(self):
        product = _make_product()
        product.update_details({"price": 49999, "brand": "Aurora"}, updated_by="admin-1")

        assert product.price == 49999
        assert product.brand == "Aurora"
        assert product.updated_by == "admin-1"

    def test_update_details_rejects_unknown_fields(self):
        product = _make_product()
        with pytest.raises(ValidationError) as exc:
            product.update_details({"sku": "NEW-SKU"})
        assert exc.value.messages == {"sku": ["Field cannot be updated"]}

    def test_update_details_validates_values(self):
        product = _make_product()
        with pytest.raises(pydantic.ValidationError):
            product.update_details({"discount": 150})

    def test_deactivate_and_activate(self):
        product = _make_product()

        product.deactivate(updated_by="admin-1")
        assert product.is_active is False

        product.activate(updated_by="admin-1")
        assert product.is_active is True

"""Tests for the Category aggregate."""

import pytest
from catalog.category.category import Category
from shared.exceptions import ValidationError


class TestCategory:
    def test_create_trims_name(self):
        category = Category.create(name="  Audio  ")
        assert category.name == "Audio"
        assert category.is_active is True

    def test_blank_name_is_rejected(self):
        with pytest.raises(ValidationError):
            Category.create(name="   ")

    def test_matches_ignores_case_and_whitespace(self):
        category = Category.create(name="Smart Home")
        assert category.matches(" smart home ")
        assert not category.matches("Smart Homes")

    def test_update_only_changes_given_fields(self):
        category = Category.create(name="Audio", description="Speakers")
        category.update(description="Speakers and earbuds")

        assert category.name == "Audio"
        assert category.description == "Speakers and earbuds"

    def test_deactivate(self):
        category = Category.create(name="Audio")
        category.deactivate()
        assert category.is_active is False

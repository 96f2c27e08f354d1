"""Category management — commands and handler."""

import structlog
from pydantic import Field

from catalog.category.category import Category
from catalog.category.repository import CategoryRepository
from catalog.product.repository import ProductRepository
from shared.command import Command
from shared.exceptions import ValidationError

logger = structlog.get_logger(__name__)


class CreateCategory(Command):
    name: str = Field(min_length=1, max_length=50)
    description: str = Field(default="", max_length=500)
    created_by: str | None = None


class UpdateCategory(Command):
    category_id: str
    name: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None


class DeactivateCategory(Command):
    category_id: str


class ManageCategoryHandler:
    def __init__(self, categories: CategoryRepository, products: ProductRepository):
        self.categories = categories
        self.products = products

    def _assert_name_available(self, name, exclude_id=None):
        existing = self.categories.find_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ValidationError({"name": ["Category with this name already exists"]})

    def create_category(self, command: CreateCategory) -> Category:
        self._assert_name_available(command.name)
        category = Category.create(
            name=command.name,
            description=command.description,
            created_by=command.created_by,
        )
        self.categories.add(category)
        logger.info("Category created", category_id=category.id, name=category.name)
        return category

    def update_category(self, command: UpdateCategory) -> Category:
        category = self.categories.get(command.category_id)
        if command.name is not None:
            self._assert_name_available(command.name, exclude_id=category.id)
        category.update(
            name=command.name,
            description=command.description,
            is_active=command.is_active,
        )
        self.categories.add(category)
        return category

    def deactivate_category(self, command: DeactivateCategory) -> None:
        category = self.categories.get(command.category_id)
        if self.products.count_active_in_category(category.id):
            raise ValidationError({"category": ["Cannot delete a category that still has active products"]})
        category.deactivate()
        self.categories.add(category)
        logger.info("Category deactivated", category_id=category.id)

    def list_categories(self, active_only: bool = True) -> list[dict]:
        categories = self.categories.active() if active_only else self.categories.all()
        return [
            {**category.model_dump(), "product_count": self.products.count_active_in_category(category.id)}
            for category in categories
        ]

from catalog.category.category import Category
from shared.db import CATEGORIES
from shared.repository import Repository


class CategoryRepository(Repository[Category]):
    collection_name = CATEGORIES
    model = Category
    label = "Category"

    def active(self) -> list[Category]:
        return self.find({"is_active": True}, sort=[("name", 1)])

    def all(self) -> list[Category]:
        return self.find({}, sort=[("name", 1)])

    def find_by_name(self, name: str, categories=None) -> Category | None:
        """Case-insensitive name lookup, optionally against a preloaded list."""
        candidates = categories if categories is not None else self.all()
        return next((category for category in candidates if category.matches(name)), None)

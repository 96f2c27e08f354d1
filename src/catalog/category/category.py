"""Category aggregate.

Categories group products and are resolved by name during bulk import, so
names are unique regardless of case.
"""

from datetime import UTC, datetime

from pydantic import Field, model_validator

from shared.exceptions import ValidationError
from shared.repository import Document


class Category(Document):
    name: str = Field(max_length=50)
    description: str = Field(default="", max_length=500)
    is_active: bool = True
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def name_must_not_be_blank(self):
        if not self.name.strip():
            raise ValidationError({"name": ["Category name is required"]})
        return self

    @classmethod
    def create(cls, name, description="", created_by=None):
        now = datetime.now(UTC)
        return cls(
            name=name.strip(),
            description=description or "",
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )

    def matches(self, name: str) -> bool:
        return self.name.lower() == name.strip().lower()

    def update(self, name=None, description=None, is_active=None):
        if name is not None:
            self.name = name.strip()
        if description is not None:
            self.description = description
        if is_active is not None:
            self.is_active = is_active
        self.updated_at = datetime.now(UTC)

    def deactivate(self):
        self.is_active = False
        self.updated_at = datetime.now(UTC)

"""Document models and the repository base class.

Aggregates are pydantic models persisted one document per aggregate; the
string ``id`` is stored as the Mongo ``_id``. Repositories are constructed
per request around the request's ``Database`` and injected into command
handlers, so no handler reaches for a module-level collection.
"""

from typing import Any, ClassVar, Generic, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from shared.exceptions import NotFound


def new_id() -> str:
    return str(uuid4())


class Document(BaseModel):
    """Base for aggregates and their embedded entities."""

    model_config = ConfigDict(use_enum_values=True, validate_assignment=True, validate_default=True)

    id: str = Field(default_factory=new_id)


T = TypeVar("T", bound=Document)


def parse_sort(sort: str | None, allowed: set[str], default: str = "-created_at") -> list[tuple[str, int]]:
    """Translate ``-created_at``/``rating`` style sort strings into pymongo sort specs."""
    sort = sort or default
    field = sort.lstrip("-+")
    if field not in allowed:
        sort, field = default, default.lstrip("-+")
    direction = DESCENDING if sort.startswith("-") else ASCENDING
    return [(field, direction)]


class Repository(Generic[T]):
    collection_name: ClassVar[str]
    model: ClassVar[type[Document]]
    label: ClassVar[str] = "Document"

    def __init__(self, database: Database):
        self.database = database
        self._collection = database[self.collection_name]

    # -------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------
    def _to_document(self, obj: T) -> dict[str, Any]:
        document = obj.model_dump()
        document["_id"] = document.pop("id")
        return document

    def _from_document(self, document: dict[str, Any]) -> T:
        data = dict(document)
        data["id"] = str(data.pop("_id"))
        return self.model.model_validate(data)

    # -------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------
    def get_or_none(self, identifier: str) -> T | None:
        document = self._collection.find_one({"_id": str(identifier)})
        return self._from_document(document) if document else None

    def get(self, identifier: str) -> T:
        obj = self.get_or_none(identifier)
        if obj is None:
            raise NotFound(f"{self.label} not found")
        return obj

    def find_one(self, query: dict[str, Any]) -> T | None:
        document = self._collection.find_one(query)
        return self._from_document(document) if document else None

    def find(
        self,
        query: dict[str, Any] | None = None,
        sort: list[tuple[str, int]] | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[T]:
        cursor = self._collection.find(query or {})
        if sort:
            cursor = cursor.sort(sort)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [self._from_document(document) for document in cursor]

    def count(self, query: dict[str, Any] | None = None) -> int:
        return self._collection.count_documents(query or {})

    def exists(self, query: dict[str, Any]) -> bool:
        return self._collection.find_one(query, {"_id": 1}) is not None

    # -------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------
    def add(self, obj: T) -> T:
        """Insert or fully replace the aggregate's document."""
        self._collection.replace_one({"_id": obj.id}, self._to_document(obj), upsert=True)
        return obj

    def remove(self, obj: T) -> None:
        self._collection.delete_one({"_id": obj.id})

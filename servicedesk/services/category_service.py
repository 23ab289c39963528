"""Category manager use cases."""

from __future__ import annotations

import logging

from servicedesk.domain.records import ServiceCategory, category_name, next_timestamp_id
from servicedesk.repositories import CATEGORIES_KEY, KeyValueStore, get_store, read_collection, write_collection

logger = logging.getLogger(__name__)


class CategoryError(Exception):
    """Base exception for category workflow."""


class InvalidCategoryNameError(CategoryError):
    """Raised when the name is empty after trimming."""


class CategoryNotFoundError(CategoryError):
    """Raised when no category has the requested id."""


class CategoryService:
    """Add, rename and delete service categories."""

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store or get_store()

    def list_categories(self) -> list[ServiceCategory]:
        return [ServiceCategory.from_dict(item) for item in read_collection(self.store, CATEGORIES_KEY)]

    def get(self, category_id: int) -> ServiceCategory | None:
        for category in self.list_categories():
            if category.id == category_id:
                return category
        return None

    def name_of(self, category_id: int | None) -> str:
        return category_name(self.list_categories(), category_id)

    def _clean(self, name: str | None) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidCategoryNameError("Category name is empty")
        return cleaned

    def add_category(self, name: str | None) -> ServiceCategory:
        cleaned = self._clean(name)
        with self.store.locked() as store:
            items = read_collection(store, CATEGORIES_KEY)
            category = ServiceCategory(id=next_timestamp_id(item.get("id") for item in items), name=cleaned)
            items.append(category.to_dict())
            write_collection(store, CATEGORIES_KEY, items)
        logger.info("Category %s added: %s", category.id, category.name)
        return category

    def rename_category(self, category_id: int, name: str | None) -> ServiceCategory:
        cleaned = self._clean(name)
        with self.store.locked() as store:
            items = read_collection(store, CATEGORIES_KEY)
            for item in items:
                if ServiceCategory.from_dict(item).id == category_id:
                    item["name"] = cleaned
                    break
            else:
                raise CategoryNotFoundError(f"Category {category_id} not found")
            write_collection(store, CATEGORIES_KEY, items)
        logger.info("Category %s renamed to %s", category_id, cleaned)
        return ServiceCategory(id=category_id, name=cleaned)

    def delete_category(self, category_id: int) -> ServiceCategory:
        """Remove the category; services pointing at it keep the dangling id."""
        with self.store.locked() as store:
            items = read_collection(store, CATEGORIES_KEY)
            matches = [c for c in map(ServiceCategory.from_dict, items) if c.id == category_id]
            if not matches:
                raise CategoryNotFoundError(f"Category {category_id} not found")
            removed = matches[0]
            kept = [item for item in items if ServiceCategory.from_dict(item).id != category_id]
            write_collection(store, CATEGORIES_KEY, kept)
        logger.info("Category %s deleted", category_id)
        return removed

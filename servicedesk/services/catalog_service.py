"""Service manager use cases (the services offered in the catalog)."""

from __future__ import annotations

import base64
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from servicedesk.core.config import get_settings
from servicedesk.domain.records import Service, next_timestamp_id
from servicedesk.repositories import SERVICES_KEY, KeyValueStore, get_store, read_collection, write_collection

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for the service manager."""


class MissingCategoryError(ServiceError):
    """Raised when no category was selected."""


class InvalidServiceError(ServiceError):
    """Raised when title or description is blank."""


class InvalidImageError(ServiceError):
    """Raised when the upload is not an image or is too large."""


class ServiceNotFoundError(ServiceError):
    """Raised when no service has the requested id."""


class ServiceStorageError(ServiceError):
    """Raised when the store could not be written."""


@dataclass(frozen=True)
class ServiceForm:
    title: str = ""
    description: str = ""
    category_id: str = ""


@dataclass(frozen=True)
class ImageUpload:
    content_type: str
    data: bytes


def image_data_url(upload: ImageUpload | None, max_bytes: int | None = None) -> str:
    """Encode an uploaded image as a ``data:`` URL; empty uploads give ``""``."""
    if upload is None or not upload.data:
        return ""
    content_type = (upload.content_type or "").split(";", 1)[0].strip().lower()
    if not content_type.startswith("image/"):
        raise InvalidImageError("Please choose an image file")
    limit = max_bytes if max_bytes is not None else get_settings().max_image_bytes
    if limit and len(upload.data) > limit:
        raise InvalidImageError(f"Image is larger than {limit} bytes")
    payload = base64.b64encode(upload.data).decode("ascii")
    return f"data:{content_type};base64,{payload}"


class CatalogService:
    """Create, edit and delete services."""

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self._store = store

    @property
    def store(self) -> KeyValueStore:
        return self._store or get_store()

    def list_services(self) -> list[Service]:
        return [Service.from_dict(item) for item in read_collection(self.store, SERVICES_KEY)]

    def get(self, service_id: str) -> Service | None:
        for service in self.list_services():
            if service.id == service_id:
                return service
        return None

    def services_in(self, category_id: int | None) -> list[Service]:
        services = self.list_services()
        if category_id is None:
            return services
        return [service for service in services if service.categoryId == category_id]

    def _validate(self, form: ServiceForm) -> tuple[str, str, int]:
        raw_category = (form.category_id or "").strip()
        if not raw_category:
            raise MissingCategoryError("Please select a category")
        try:
            category_id = int(raw_category)
        except ValueError:
            raise MissingCategoryError("Please select a category")
        title = (form.title or "").strip()
        description = (form.description or "").strip()
        if not title or not description:
            raise InvalidServiceError("Title and description are required")
        return title, description, category_id

    @contextmanager
    def _storage_cycle(self) -> Iterator[KeyValueStore]:
        """Locked read-modify-write; any store failure becomes ServiceStorageError."""
        try:
            with self.store.locked() as store:
                yield store
        except (OSError, SQLAlchemyError) as exc:
            logger.exception("Service operation failed")
            raise ServiceStorageError("Operation failed") from exc

    def add_service(self, form: ServiceForm, image: ImageUpload | None = None) -> Service:
        title, description, category_id = self._validate(form)
        image_url = image_data_url(image)
        with self._storage_cycle() as store:
            items = read_collection(store, SERVICES_KEY)
            new_id = next_timestamp_id(item.get("id") for item in items)
            service = Service(
                id=str(new_id),
                title=title,
                description=description,
                imageUrl=image_url,
                categoryId=category_id,
            )
            items.append(service.to_dict())
            write_collection(store, SERVICES_KEY, items)
        logger.info("Service %s added: %s", service.id, service.title)
        return service

    def update_service(self, service_id: str, form: ServiceForm, image: ImageUpload | None = None) -> Service:
        """Replace the editable fields; the image is kept unless a new one is uploaded."""
        title, description, category_id = self._validate(form)
        image_url = image_data_url(image)
        with self._storage_cycle() as store:
            items = read_collection(store, SERVICES_KEY)
            for index, item in enumerate(items):
                current = Service.from_dict(item)
                if current.id == service_id:
                    updated = Service(
                        id=current.id,
                        title=title,
                        description=description,
                        imageUrl=image_url or current.imageUrl,
                        categoryId=category_id,
                    )
                    items[index] = {**item, **updated.to_dict()}
                    break
            else:
                raise ServiceNotFoundError(f"Service {service_id} not found")
            write_collection(store, SERVICES_KEY, items)
        logger.info("Service %s updated", service_id)
        return updated

    def delete_service(self, service_id: str) -> Service:
        with self._storage_cycle() as store:
            items = read_collection(store, SERVICES_KEY)
            matches = [Service.from_dict(item) for item in items if Service.from_dict(item).id == service_id]
            if not matches:
                raise ServiceNotFoundError(f"Service {service_id} not found")
            removed = matches[0]
            kept = [item for item in items if Service.from_dict(item).id != service_id]
            write_collection(store, SERVICES_KEY, kept)
        logger.info("Service %s deleted", service_id)
        return removed

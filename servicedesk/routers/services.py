from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse

from servicedesk.core.csrf import csrf_protect
from servicedesk.domain.records import category_name
from servicedesk.routers.common import get_service, redirect, render
from servicedesk.services.catalog_service import (
    CatalogService,
    ImageUpload,
    InvalidImageError,
    InvalidServiceError,
    MissingCategoryError,
    ServiceForm,
    ServiceNotFoundError,
    ServiceStorageError,
)
from servicedesk.services.identity_service import require_admin
from servicedesk.services.notifications import ERROR, SUCCESS, WARNING, Notice

router = APIRouter(prefix="/services", tags=["services"], dependencies=[Depends(require_admin)])

OPERATION_FAILED = Notice("Operation failed. Please try again.", ERROR)


def _svc(request: Request) -> CatalogService:
    return get_service(request, "catalog_service")


async def _read_upload(image: UploadFile | None) -> ImageUpload | None:
    if image is None or not image.filename:
        return None
    data = await image.read()
    return ImageUpload(content_type=image.content_type or "", data=data)


def _error_notice(exc: Exception) -> Notice:
    if isinstance(exc, MissingCategoryError):
        return Notice("Please select a category", ERROR)
    if isinstance(exc, (InvalidServiceError, InvalidImageError)):
        return Notice(str(exc), ERROR)
    if isinstance(exc, ServiceNotFoundError):
        return Notice("Service not found.", ERROR)
    return OPERATION_FAILED


@router.get("", response_class=HTMLResponse)
def service_manager(request: Request, edit: str | None = None):
    categories = get_service(request, "category_service").list_categories()
    services = _svc(request).list_services()
    editing = next((s for s in services if s.id == edit), None) if edit else None
    rows = [(service, category_name(categories, service.categoryId)) for service in services]
    return render(
        request,
        "services.html",
        {"categories": categories, "rows": rows, "editing": editing},
        active="services",
    )


@router.post("", dependencies=[Depends(csrf_protect)])
async def add_service(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    categoryId: str = Form(""),
    image: UploadFile | None = File(None),
):
    form = ServiceForm(title=title, description=description, category_id=categoryId)
    try:
        service = _svc(request).add_service(form, await _read_upload(image))
    except (MissingCategoryError, InvalidServiceError, InvalidImageError, ServiceStorageError) as exc:
        return redirect("/services", _error_notice(exc))
    return redirect("/services", Notice(f'Service "{service.title}" added successfully!', SUCCESS))


@router.post("/{service_id}", dependencies=[Depends(csrf_protect)])
async def update_service(
    request: Request,
    service_id: str,
    title: str = Form(""),
    description: str = Form(""),
    categoryId: str = Form(""),
    image: UploadFile | None = File(None),
):
    form = ServiceForm(title=title, description=description, category_id=categoryId)
    try:
        service = _svc(request).update_service(service_id, form, await _read_upload(image))
    except (MissingCategoryError, InvalidServiceError, InvalidImageError) as exc:
        return redirect("/services", _error_notice(exc), edit=service_id)
    except (ServiceNotFoundError, ServiceStorageError) as exc:
        return redirect("/services", _error_notice(exc))
    return redirect("/services", Notice(f'Service "{service.title}" updated successfully!', SUCCESS))


@router.post("/{service_id}/delete", dependencies=[Depends(csrf_protect)])
def delete_service(request: Request, service_id: str):
    try:
        service = _svc(request).delete_service(service_id)
    except (ServiceNotFoundError, ServiceStorageError) as exc:
        return redirect("/services", _error_notice(exc))
    return redirect("/services", Notice(f'Service "{service.title}" deleted!', WARNING))

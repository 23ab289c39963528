from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from servicedesk.core.csrf import csrf_protect
from servicedesk.routers.common import get_service, redirect, render
from servicedesk.services.category_service import (
    CategoryNotFoundError,
    CategoryService,
    InvalidCategoryNameError,
)
from servicedesk.services.identity_service import require_admin
from servicedesk.services.notifications import ERROR, SUCCESS, WARNING, Notice

router = APIRouter(prefix="/categories", tags=["categories"], dependencies=[Depends(require_admin)])

NOT_FOUND = Notice("Category not found.", ERROR)


def _svc(request: Request) -> CategoryService:
    return get_service(request, "category_service")


@router.get("", response_class=HTMLResponse)
def category_manager(request: Request, edit: int | None = None):
    categories = _svc(request).list_categories()
    editing = next((c for c in categories if c.id == edit), None)
    return render(
        request,
        "categories.html",
        {"categories": categories, "editing": editing},
        active="categories",
    )


@router.post("", dependencies=[Depends(csrf_protect)])
def add_category(request: Request, name: str = Form("")):
    try:
        category = _svc(request).add_category(name)
    except InvalidCategoryNameError:
        return redirect("/categories")
    return redirect("/categories", Notice(f'Category "{category.name}" added successfully!', SUCCESS))


@router.post("/{category_id}/rename", dependencies=[Depends(csrf_protect)])
def rename_category(request: Request, category_id: int, name: str = Form("")):
    try:
        category = _svc(request).rename_category(category_id, name)
    except InvalidCategoryNameError:
        return redirect("/categories", edit=category_id)
    except CategoryNotFoundError:
        return redirect("/categories", NOT_FOUND)
    return redirect("/categories", Notice(f'Category updated to "{category.name}"!', SUCCESS))


@router.post("/{category_id}/delete", dependencies=[Depends(csrf_protect)])
def delete_category(request: Request, category_id: int):
    try:
        category = _svc(request).delete_category(category_id)
    except CategoryNotFoundError:
        return redirect("/categories", NOT_FOUND)
    return redirect("/categories", Notice(f'Category "{category.name}" deleted!', WARNING))

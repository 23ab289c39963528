"""Landing redirect and the read-only JSON views of the three collections."""
from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from servicedesk.routers.common import get_service
from servicedesk.services.identity_service import current_user

router = APIRouter(prefix="", tags=["pages"])


@router.get("/")
def home():
    return RedirectResponse("/categories", status_code=302)


@router.get("/healthz")
def healthz():
    return {"ok": True}


@router.get("/api/categories")
def api_categories(request: Request):
    return [c.to_dict() for c in get_service(request, "category_service").list_categories()]


@router.get("/api/services")
def api_services(request: Request, category: int | None = None):
    return [s.to_dict() for s in get_service(request, "catalog_service").services_in(category)]


@router.get("/api/bookings")
def api_bookings(request: Request):
    bookings = get_service(request, "booking_service").bookings_for(current_user(request))
    return [b.to_dict() for b in bookings]

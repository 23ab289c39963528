from __future__ import annotations

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse

from servicedesk.core.csrf import csrf_protect
from servicedesk.core.rate_limiter import limit_bookings
from servicedesk.domain.schedule import booking_dates
from servicedesk.routers.common import get_service, redirect, render
from servicedesk.services.booking_service import BookingService, InvalidSlotError, NotSignedInError
from servicedesk.services.identity_service import current_user
from servicedesk.services.notifications import ERROR, SUCCESS, Notice

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _bookings(request: Request) -> BookingService:
    return get_service(request, "booking_service")


@router.get("", response_class=HTMLResponse)
def catalog(request: Request, category: int | None = None):
    categories = get_service(request, "category_service").list_categories()
    services = get_service(request, "catalog_service").services_in(category)
    return render(
        request,
        "catalog.html",
        {"categories": categories, "services": services, "selected_category": category},
        active="catalog",
    )


@router.get("/{service_id}", response_class=HTMLResponse)
def booking_page(request: Request, service_id: str, date: str = ""):
    service = get_service(request, "catalog_service").get(service_id)
    if not service:
        raise HTTPException(404, "Service not found")
    bookings = _bookings(request)
    today = bookings.clock().date()
    return render(
        request,
        "book.html",
        {
            "service": service,
            "dates": booking_dates(today),
            "selected_date": date,
            "slots": bookings.offered_slots(date),
        },
        active="catalog",
    )


@router.post("/{service_id}/book", dependencies=[Depends(csrf_protect), Depends(limit_bookings)])
def book_service(
    request: Request,
    service_id: str,
    date: str = Form(""),
    time: str = Form(""),
):
    service = get_service(request, "catalog_service").get(service_id)
    if not service:
        raise HTTPException(404, "Service not found")
    path = f"/catalog/{service_id}"
    try:
        _bookings(request).book_service(service, date, time, current_user(request))
    except NotSignedInError:
        return redirect(path, Notice("Please sign in to book an appointment.", ERROR), date=date)
    except InvalidSlotError:
        return redirect(path, Notice("Please select a date and an available time.", ERROR), date=date)
    return redirect("/catalog", Notice("Booking confirmed successfully!", SUCCESS))

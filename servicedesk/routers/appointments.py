from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse

from servicedesk.core.csrf import csrf_protect
from servicedesk.domain.schedule import format_date
from servicedesk.routers.common import get_service, redirect, render
from servicedesk.services.booking_service import (
    BookingForm,
    BookingNotFoundError,
    BookingService,
    NotSignedInError,
)
from servicedesk.services.identity_service import current_user
from servicedesk.services.notifications import ERROR, SUCCESS, WARNING, Notice

router = APIRouter(prefix="/appointments", tags=["appointments"])

SIGN_IN = Notice("Please sign in to manage your appointments.", ERROR)


def _svc(request: Request) -> BookingService:
    return get_service(request, "booking_service")


@router.get("", response_class=HTMLResponse)
def appointment_manager(request: Request, new: bool = False, edit: str = ""):
    bookings = _svc(request).bookings_for(current_user(request))
    editing = next((b for b in bookings if b.bookedAt == edit), None) if edit else None
    return render(
        request,
        "appointments.html",
        {
            "bookings": bookings,
            "creating": new and editing is None,
            "editing": editing,
            "format_date": format_date,
        },
        active="appointments",
    )


@router.post("", dependencies=[Depends(csrf_protect)])
def create_booking(
    request: Request,
    serviceName: str = Form(""),
    date: str = Form(""),
    time: str = Form(""),
):
    form = BookingForm(service_name=serviceName, date=date, time=time)
    try:
        _svc(request).create_booking(form, current_user(request))
    except NotSignedInError:
        return redirect("/appointments", SIGN_IN)
    return redirect("/appointments", Notice("Booking created.", SUCCESS))


@router.post("/update", dependencies=[Depends(csrf_protect)])
def update_booking(
    request: Request,
    bookedAt: str = Form(""),
    serviceName: str = Form(""),
    date: str = Form(""),
    time: str = Form(""),
):
    form = BookingForm(service_name=serviceName, date=date, time=time)
    try:
        _svc(request).update_booking(bookedAt, form, current_user(request))
    except NotSignedInError:
        return redirect("/appointments", SIGN_IN)
    except BookingNotFoundError:
        return redirect("/appointments", Notice("Booking not found.", ERROR))
    return redirect("/appointments", Notice("Booking updated.", SUCCESS))


@router.post("/delete", dependencies=[Depends(csrf_protect)])
def delete_booking(request: Request, bookedAt: str = Form("")):
    try:
        removed = _svc(request).delete_booking(bookedAt, current_user(request))
    except NotSignedInError:
        return redirect("/appointments", SIGN_IN)
    if not removed:
        return redirect("/appointments", Notice("Booking not found.", ERROR))
    return redirect("/appointments", Notice("Booking deleted.", WARNING))

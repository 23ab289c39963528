"""
Double-submit CSRF protection for the HTML forms.

Every rendered page sets a readable ``csrf_token`` cookie and embeds the same
value in its forms; mutating routes depend on ``csrf_protect`` which compares
the two and checks that the request came from our own origin.
"""
from __future__ import annotations

import secrets
from urllib import parse as urlparse

from fastapi import HTTPException, Request, Response

from servicedesk.core.config import get_settings

CSRF_COOKIE_NAME = "csrf_token"
CSRF_HEADER_NAME = "x-csrf-token"
CSRF_FORM_FIELD = "csrf_token"
CSRF_COOKIE_MAX_AGE = 7 * 24 * 60 * 60


def ensure_csrf_token(request: Request) -> str:
    """Reuse the cookie token when it looks sane, otherwise mint a new one."""
    token = request.cookies.get(CSRF_COOKIE_NAME) or ""
    return token if len(token) >= 16 else secrets.token_urlsafe(32)


def set_csrf_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        CSRF_COOKIE_NAME,
        token,
        max_age=CSRF_COOKIE_MAX_AGE,
        httponly=False,
        secure=get_settings().app_env == "prod",
        samesite="strict",
        path="/",
    )


def _same_origin(request: Request) -> bool:
    source = request.headers.get("origin") or request.headers.get("referer") or ""
    if not source:
        return True
    try:
        parsed = urlparse.urlparse(source)
    except ValueError:
        return False
    host = (request.headers.get("host") or "").split(":", 1)[0].lower()
    if parsed.hostname and host and parsed.hostname.lower() != host:
        return False
    return not parsed.scheme or parsed.scheme == request.url.scheme


def check_csrf(request: Request, supplied: str | None) -> None:
    expected = request.cookies.get(CSRF_COOKIE_NAME) or ""
    token = (supplied or request.headers.get(CSRF_HEADER_NAME) or "").strip()
    if not expected or not token:
        raise HTTPException(403, "Missing CSRF token.")
    if not secrets.compare_digest(expected, token):
        raise HTTPException(403, "Invalid CSRF token.")
    if not _same_origin(request):
        raise HTTPException(403, "Invalid origin.")


async def csrf_protect(request: Request) -> None:
    """Route dependency: validate the token posted in the form (or header)."""
    supplied = None
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        value = form.get(CSRF_FORM_FIELD)
        supplied = value if isinstance(value, str) else None
    check_csrf(request, supplied)

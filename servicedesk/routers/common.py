"""Helpers shared by the HTML routers."""
from __future__ import annotations

from fastapi import Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from servicedesk.core import csrf
from servicedesk.services.identity_service import current_user, is_admin
from servicedesk.services.notifications import Notice, notice_from_query, notice_url


def get_templates(request: Request) -> Jinja2Templates:
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates not configured")


def get_service(request: Request, name: str):
    svc = getattr(getattr(request.app, "state", None), name, None)
    if not svc:
        raise RuntimeError(f"{name} not configured")
    return svc


def render(request: Request, template: str, context: dict, *, active: str = "", status_code: int = 200):
    """Render a page with the shared layout context and refresh the CSRF cookie."""
    token = csrf.ensure_csrf_token(request)
    user = current_user(request)
    notice = notice_from_query(request.query_params.get("notice"), request.query_params.get("kind"))
    base = {
        "csrf_token": token,
        "user": user,
        "is_admin": is_admin(user),
        "notice": notice,
        "active": active,
    }
    response = get_templates(request).TemplateResponse(
        request, template, {**base, **context}, status_code=status_code
    )
    csrf.set_csrf_cookie(response, token)
    return response


def redirect(path: str, notice: Notice | None = None, **params) -> RedirectResponse:
    return RedirectResponse(notice_url(path, notice, **params), status_code=303)

"""Signed-in user as forwarded by the external identity provider."""
from __future__ import annotations

from dataclasses import dataclass

from fastapi import HTTPException, Request

from servicedesk.core.config import get_settings


@dataclass(frozen=True)
class Identity:
    id: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    username: str = ""

    @property
    def display_name(self) -> str:
        full = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full or self.username or ""


def current_user(request: Request) -> Identity | None:
    """Return the identity carried by the request headers, if any."""
    prefix = get_settings().identity_header_prefix

    def _header(name: str) -> str:
        return (request.headers.get(prefix + name) or "").strip()

    user_id = _header("id")
    if not user_id:
        return None
    return Identity(
        id=user_id,
        email=_header("email"),
        first_name=_header("first-name"),
        last_name=_header("last-name"),
        username=_header("username"),
    )


def is_admin(user: Identity | None) -> bool:
    allowed = get_settings().admin_emails
    if not allowed:
        return True
    return bool(user and user.email.lower() in allowed)


def require_admin(request: Request) -> Identity | None:
    user = current_user(request)
    if not is_admin(user):
        raise HTTPException(403, "forbidden")
    return user

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.templating import Jinja2Templates
from starlette.middleware.base import BaseHTTPMiddleware

from servicedesk import __version__
from servicedesk.core.config import get_settings
from servicedesk.core.log import configure_logging
from servicedesk.routers import appointments as appointments_router
from servicedesk.routers import catalog as catalog_router
from servicedesk.routers import categories as categories_router
from servicedesk.routers import pages as pages_router
from servicedesk.routers import services as services_router
from servicedesk.services.booking_service import BookingService
from servicedesk.services.catalog_service import CatalogService
from servicedesk.services.category_service import CategoryService

logger = logging.getLogger(__name__)

BASE = os.path.dirname(__file__)
TEMPLATES = os.path.join(BASE, "templates")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (CSP, anti clickjacking, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; "
            "img-src 'self' data:; "
            "style-src 'self' 'unsafe-inline' https://unpkg.com; "
            "script-src 'self' 'unsafe-inline'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (``--factory``)."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Service Desk", version=__version__)

    allowed_cors = {settings.public_base_url}
    if settings.app_env != "prod":
        allowed_cors.update({"http://localhost:8000", "http://127.0.0.1:8000"})
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    app.state.templates = Jinja2Templates(directory=TEMPLATES)
    app.state.category_service = CategoryService()
    app.state.catalog_service = CatalogService()
    app.state.booking_service = BookingService()

    app.include_router(pages_router.router)
    app.include_router(categories_router.router)
    app.include_router(services_router.router)
    app.include_router(catalog_router.router)
    app.include_router(appointments_router.router)

    logger.info("Service Desk ready (env=%s, storage=%s)", settings.app_env, settings.storage_backend)
    return app

"""
FastAPI routers grouped by view (categories, services, catalog, appointments).

Each module exposes an APIRouter included by app.py. Routers translate
service exceptions into notices, redirects or HTTP errors.
"""

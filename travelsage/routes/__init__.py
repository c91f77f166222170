"""API routers, mounted under /api by the application factory"""
from . import admin, assistant, auth, bookings, catalog, itineraries

ROUTERS = [
    auth.router,
    catalog.router,
    bookings.router,
    itineraries.router,
    assistant.router,
    admin.router,
]

__all__ = ["ROUTERS"]

"""Stores and the auth gate: the domain operations behind the HTTP routes"""
from .auth_gate import AuthGate
from .booking_store import BookingStore
from .catalog_store import CatalogStore
from .itinerary_store import ItineraryStore

__all__ = ["AuthGate", "BookingStore", "CatalogStore", "ItineraryStore"]

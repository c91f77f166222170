"""Domain models (persisted entities)"""
from .base import CamelModel
from .user import User, Session
from .itinerary import (
    Itinerary,
    ItineraryDay,
    ItineraryItem,
    ItemStatus,
    ItemType,
    ITEM_STATUSES,
    ITEM_TYPES,
)
from .booking import Booking, BookingStatus, BookingType, BOOKING_STATUSES, BOOKING_TYPES
from .catalog import Activity, Destination, Restaurant

__all__ = [
    "CamelModel",
    "User",
    "Session",
    "Itinerary",
    "ItineraryDay",
    "ItineraryItem",
    "ItemStatus",
    "ItemType",
    "ITEM_STATUSES",
    "ITEM_TYPES",
    "Booking",
    "BookingStatus",
    "BookingType",
    "BOOKING_STATUSES",
    "BOOKING_TYPES",
    "Activity",
    "Destination",
    "Restaurant",
]

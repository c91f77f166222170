"""Booking model"""
from datetime import date, datetime
from typing import Literal, Optional, Tuple, get_args
from pydantic import Field

from .base import CamelModel
from ..utils.identifiers import new_id, utc_now

BookingType = Literal["restaurant", "activity", "accommodation"]
BookingStatus = Literal["confirmed", "pending", "cancelled"]

BOOKING_TYPES: Tuple[str, ...] = get_args(BookingType)
BOOKING_STATUSES: Tuple[str, ...] = get_args(BookingStatus)


class Booking(CamelModel):
    """
    Reservation of a catalog item.

    ``item_id`` references a restaurant/activity id but is not a foreign key;
    bookings are never linked back into itineraries automatically.
    """
    id: str = Field(default_factory=new_id)
    user_id: str
    type: BookingType
    item_id: str
    date: date
    time: Optional[str] = None
    party_size: Optional[int] = Field(default=None, ge=1)
    status: BookingStatus = "pending"
    notes: Optional[str] = None
    confirmation_code: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)

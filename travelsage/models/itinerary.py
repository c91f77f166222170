"""Itinerary model: an itinerary owns ordered days, each day owns ordered items"""
from datetime import date, datetime
from typing import Iterator, List, Literal, Optional, Tuple, get_args
from pydantic import Field

from .base import CamelModel
from ..utils.identifiers import new_id, utc_now

ItemType = Literal["activity", "food", "transportation", "accommodation"]
ItemStatus = Literal["confirmed", "pending", "cancelled", "none"]

ITEM_TYPES: Tuple[str, ...] = get_args(ItemType)
ITEM_STATUSES: Tuple[str, ...] = get_args(ItemStatus)


class ItineraryItem(CamelModel):
    """A timed entry within a day"""
    id: str = Field(default_factory=new_id)
    title: str = ""
    description: str = ""
    type: ItemType = "activity"
    start_time: str = Field(default="09:00", description="Free-text HH:MM")
    end_time: str = Field(default="10:00", description="Free-text HH:MM")
    location: Optional[str] = None
    distance: Optional[str] = None
    price: Optional[str] = None
    image_url: Optional[str] = None
    status: ItemStatus = "none"
    booking_reference: Optional[str] = None


class ItineraryDay(CamelModel):
    id: str = Field(default_factory=new_id)
    title: str
    date: date
    items: List[ItineraryItem] = Field(default_factory=list)


class Itinerary(CamelModel):
    """Itinerary document; days and items are embedded, never stored separately"""
    id: str = Field(default_factory=new_id)
    user_id: str
    name: str
    destination: str
    start_date: date
    end_date: Optional[date] = None
    days: List[ItineraryDay] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def iter_items(self) -> Iterator[ItineraryItem]:
        for day in self.days:
            yield from day.items

    def find_item(self, item_id: str) -> Optional[ItineraryItem]:
        for item in self.iter_items():
            if item.id == item_id:
                return item
        return None

    def item_count(self) -> int:
        return sum(len(day.items) for day in self.days)

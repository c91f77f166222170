"""Request schemas for API endpoints"""
from datetime import date
from typing import List, Optional
from pydantic import Field, field_validator

from ..models import BookingStatus, BookingType, ItemStatus, ItemType
from ..models.base import CamelModel


class ItemInput(CamelModel):
    """Itinerary item as sent by the client; ``id`` is generated when absent"""
    id: Optional[str] = None
    title: str = ""
    description: str = ""
    type: ItemType = "activity"
    start_time: str = "09:00"
    end_time: str = "10:00"
    location: Optional[str] = None
    distance: Optional[str] = None
    price: Optional[str] = None
    image_url: Optional[str] = None
    status: ItemStatus = "none"
    booking_reference: Optional[str] = None


class DayInput(CamelModel):
    """Itinerary day as sent by the client; title and date are derived when absent"""
    id: Optional[str] = None
    title: Optional[str] = None
    date: Optional[str] = Field(None, description="YYYY-MM-DD")
    items: List[ItemInput] = Field(default_factory=list)


class CreateItineraryRequest(CamelModel):
    """
    Request body for POST /api/itineraries

    Day content comes from ``days`` when given, else from the assistant when
    ``prompt`` is given, else ``number_of_days`` empty days are created.
    """
    name: Optional[str] = Field(None, max_length=200)
    destination: Optional[str] = Field(None, max_length=200)
    start_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    end_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    number_of_days: Optional[int] = Field(None, description="Number of empty days to create")
    days: Optional[List[DayInput]] = None
    prompt: Optional[str] = Field(None, max_length=1000, description="Free-text request for generated day content")


class UpdateItineraryRequest(CamelModel):
    """Partial update; fields left out keep their value, ``days`` replaces all days"""
    name: Optional[str] = Field(None, max_length=200)
    destination: Optional[str] = Field(None, max_length=200)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    days: Optional[List[DayInput]] = None


class ItemStatusUpdateRequest(CamelModel):
    status: ItemStatus


class BookRestaurantRequest(CamelModel):
    """Request body for POST /api/restaurants/book"""
    restaurant_id: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1, description="YYYY-MM-DD")
    time: str = Field(..., min_length=1, description="HH:MM")
    party_size: int = Field(default=2, ge=1, le=50)
    notes: Optional[str] = Field(None, max_length=500)


class CreateBookingRequest(CamelModel):
    """Request body for POST /api/bookings"""
    type: BookingType
    item_id: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1, description="YYYY-MM-DD")
    time: Optional[str] = None
    party_size: Optional[int] = Field(None, ge=1, le=50)
    notes: Optional[str] = Field(None, max_length=500)
    status: BookingStatus = "pending"


class BookingStatusUpdateRequest(CamelModel):
    status: BookingStatus


def _not_blank(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("Must not be blank")
    return v.strip()


class QueryRequest(CamelModel):
    query: str

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, v):
        return _not_blank(v)


class GenerateItineraryRequest(CamelModel):
    prompt: str
    start_date: Optional[date] = None

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, v):
        return _not_blank(v)


class RestaurantRecommendationRequest(CamelModel):
    preferences: str
    location: Optional[str] = Field(None, max_length=200)

    @field_validator("preferences")
    @classmethod
    def preferences_not_blank(cls, v):
        return _not_blank(v)


class AnalyzePreferencesRequest(CamelModel):
    input: str

    @field_validator("input")
    @classmethod
    def input_not_blank(cls, v):
        return _not_blank(v)


class VoiceQueryRequest(CamelModel):
    transcript: str

    @field_validator("transcript")
    @classmethod
    def transcript_not_blank(cls, v):
        return _not_blank(v)

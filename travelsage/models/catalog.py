"""Catalog models (read-only reference data)"""
from typing import List, Optional
from pydantic import Field

from .base import CamelModel


class Destination(CamelModel):
    id: str
    name: str
    country: str
    continent: str
    description: str
    image_url: str = ""
    rating: Optional[float] = Field(None, ge=0, le=5)
    average_cost: Optional[int] = None
    interests: List[str] = Field(default_factory=list)
    is_featured: bool = False


class Restaurant(CamelModel):
    id: str
    name: str
    description: str
    image_url: str = ""
    location: str
    distance: Optional[str] = None
    cuisine: List[str] = Field(default_factory=list)
    price_range: str = Field(..., description="Price display ($, $$, $$$, $$$$)")
    rating: Optional[float] = Field(None, ge=0, le=5)
    review_count: Optional[int] = None
    opening_time: Optional[str] = None
    is_recommended: bool = False


class Activity(CamelModel):
    id: str
    name: str
    description: str
    image_url: str = ""
    location: str
    price: int
    currency: str = "USD"
    rating: Optional[float] = Field(None, ge=0, le=5)
    duration: Optional[str] = None
    category: List[str] = Field(default_factory=list)
    is_recommended: bool = False

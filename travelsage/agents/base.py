"""Assistant Responder interface and the result shapes every implementation returns"""
from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Dict, List, Literal, Optional
from pydantic import Field

from ..models import ItemStatus, ItemType
from ..models.base import CamelModel
from ..tools.preference_parser import ParsedPreferences

ResponderSource = Literal["rules", "gemini"]
VoiceIntent = Literal["restaurant_search", "restaurant_booking", "itinerary", "destination", "general"]


class TokenUsage(CamelModel):
    """Model token accounting; all zeros for the rule-based responder"""
    prompt: int = 0
    completion: int = 0
    total: int = 0


class AssistantResult(CamelModel):
    tokens: TokenUsage = Field(default_factory=TokenUsage)
    source: ResponderSource = "rules"


class AssistantReply(AssistantResult):
    """Answer to a free-text travel question"""
    intent: str
    entities: Dict[str, Any] = Field(default_factory=dict)
    response: str


class DraftItem(CamelModel):
    """Itinerary item as produced by the assistant (no id until stored)"""
    title: str
    description: str = ""
    type: ItemType = "activity"
    start_time: str = "09:00"
    end_time: str = "10:00"
    location: Optional[str] = None
    distance: Optional[str] = None
    price: Optional[str] = None
    status: ItemStatus = "none"


class DraftDay(CamelModel):
    title: str
    date: date
    items: List[DraftItem] = Field(default_factory=list)


class DraftItinerary(CamelModel):
    name: str
    destination: str
    days: List[DraftDay] = Field(default_factory=list)


class ItineraryResult(AssistantResult):
    itinerary: DraftItinerary


class RestaurantSuggestion(CamelModel):
    name: str
    cuisine: List[str] = Field(default_factory=list)
    description: str = ""
    price_range: str = "$$"
    location: str = ""
    recommendation_reason: str = ""


class RecommendationResult(AssistantResult):
    recommendations: List[RestaurantSuggestion] = Field(default_factory=list)


class PreferencesResult(AssistantResult):
    preferences: ParsedPreferences


class VoiceEntities(CamelModel):
    destination: Optional[str] = None
    cuisine: Optional[str] = None
    restaurant: Optional[str] = None
    date: Optional[str] = Field(default=None, description="ISO date")
    time: Optional[str] = Field(default=None, description="24-hour HH:MM")
    party_size: Optional[int] = None
    preferences: List[str] = Field(default_factory=list)


class VoiceQueryResult(AssistantResult):
    intent: VoiceIntent
    entities: VoiceEntities = Field(default_factory=VoiceEntities)
    response: str


class AssistantResponder(ABC):
    """
    Stateless mapping from free text to assistant results.

    Implementations keep no state between calls; callers never need to
    know whether a rule table or a hosted model produced the answer.
    """

    source: ResponderSource

    @abstractmethod
    async def respond(self, text: str) -> AssistantReply:
        """Answer a general travel question"""

    @abstractmethod
    async def generate_itinerary(self, prompt: str, start_date: Optional[date] = None) -> ItineraryResult:
        """
        Draft a multi-day itinerary from a request like "3 days in Tokyo"

        Args:
            prompt: Free-text trip description
            start_date: Date of day 1 (today when omitted)
        """

    @abstractmethod
    async def recommend_restaurants(self, preferences: str, location: Optional[str] = None) -> RecommendationResult:
        """Suggest restaurants matching free-text dining preferences"""

    @abstractmethod
    async def analyze_preferences(self, text: str) -> PreferencesResult:
        """Extract structured travel preferences"""

    @abstractmethod
    async def classify_voice(self, transcript: str, today: Optional[date] = None) -> VoiceQueryResult:
        """
        Classify a voice transcript into an intent and extract entities

        Args:
            transcript: Speech-to-text output
            today: Reference day for "today"/"tomorrow"/"next week"
        """

    async def close(self) -> None:
        """Release client resources"""
        return None

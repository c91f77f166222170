"""Assistant responders: rule-based templates and the Gemini-backed alternative"""
import logging

from ..config import Settings
from .base import (
    AssistantReply,
    AssistantResponder,
    DraftDay,
    DraftItem,
    DraftItinerary,
    ItineraryResult,
    PreferencesResult,
    RecommendationResult,
    RestaurantSuggestion,
    TokenUsage,
    VoiceEntities,
    VoiceQueryResult,
)
from .rule_based import GENERIC_RESPONSE, RuleBasedResponder

logger = logging.getLogger(__name__)


def build_responder(settings: Settings) -> AssistantResponder:
    """
    Select the assistant implementation at startup

    ``ASSISTANT_BACKEND=gemini`` without a ``GEMINI_API_KEY`` degrades to
    the rule-based responder with a warning.

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = settings.assistant_backend
    if backend == "rules":
        logger.info("Using rule-based assistant")
        return RuleBasedResponder()
    if backend == "gemini":
        if not settings.gemini_api_key:
            logger.warning("ASSISTANT_BACKEND=gemini but GEMINI_API_KEY is not set, using rule-based assistant")
            return RuleBasedResponder()
        from .gemini import GeminiResponder
        logger.info("Using Gemini assistant (%s)", settings.model_name)
        return GeminiResponder(
            api_key=settings.gemini_api_key,
            model_name=settings.model_name,
            temperature=settings.model_temperature,
        )
    raise ValueError(f"Unknown assistant backend: {backend!r}")


__all__ = [
    "AssistantResponder",
    "AssistantReply",
    "DraftDay",
    "DraftItem",
    "DraftItinerary",
    "ItineraryResult",
    "PreferencesResult",
    "RecommendationResult",
    "RestaurantSuggestion",
    "TokenUsage",
    "VoiceEntities",
    "VoiceQueryResult",
    "GENERIC_RESPONSE",
    "RuleBasedResponder",
    "build_responder",
]

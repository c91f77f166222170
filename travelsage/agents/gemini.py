"""Gemini-backed assistant with automatic fallback to the rule-based responder"""
import json
import logging
from datetime import date, timedelta
from typing import Any, Awaitable, Callable, Optional, Tuple, TypeVar

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from ..tools.preference_parser import ParsedPreferences, PreferenceParser
from ..utils.content_safety import check_content_safety, configure_safety_settings, validate_agent_output
from ..utils.prompt_injection import PromptInjectionDetector
from .base import (
    AssistantReply,
    AssistantResponder,
    DraftItinerary,
    ItineraryResult,
    PreferencesResult,
    RecommendationResult,
    RestaurantSuggestion,
    TokenUsage,
    VoiceEntities,
    VoiceQueryResult,
)
from .rule_based import RuleBasedResponder

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")

QUERY_SYSTEM_PROMPT = (
    "You are a helpful travel assistant named TravelSage. You provide concise, informative "
    "responses about travel destinations, restaurants, activities, and general travel advice. "
    "Be friendly and conversational."
)

ITINERARY_SYSTEM_PROMPT = """You are an AI travel planner that creates detailed itineraries.
Generate a travel itinerary based on user preferences. Day 1 is {start_date}.
Return ONLY a JSON object with the following structure:
{{
  "name": "Trip name",
  "destination": "Main destination",
  "days": [
    {{
      "title": "Day 1: Title",
      "date": "YYYY-MM-DD",
      "items": [
        {{
          "title": "Activity name",
          "description": "Detailed description",
          "type": "activity|food|transportation|accommodation",
          "startTime": "HH:MM",
          "endTime": "HH:MM",
          "location": "Location name",
          "distance": "Distance from previous stop or hotel",
          "price": "$, $$, $$$ or $$$$"
        }}
      ]
    }}
  ]
}}"""

RESTAURANT_SYSTEM_PROMPT = """You are a restaurant recommendation system. Based on the user's preferences
and location (if provided), generate a list of 3 to 5 restaurant recommendations.
Return ONLY a JSON array with the following structure for each restaurant:
[
  {
    "name": "Restaurant name",
    "cuisine": ["Cuisine type"],
    "description": "Brief description",
    "priceRange": "$, $$, $$$ or $$$$",
    "location": "Location/address",
    "recommendationReason": "Why you recommend this"
  }
]"""

PREFERENCES_SYSTEM_PROMPT = """Analyze the user's text input and extract travel preferences.
Return ONLY a JSON object with the following structure:
{
  "destinations": ["List of mentioned destinations"],
  "interests": ["List of activities or interests"],
  "cuisines": ["Food preferences"],
  "budget": "low, medium or high (null if not mentioned)",
  "travelStyle": ["Adventure/luxury/cultural/etc"],
  "travelDuration": "Number of days as an integer (null if not mentioned)",
  "accommodation": ["Preferences like hotel/hostel/etc"]
}"""

VOICE_SYSTEM_PROMPT = """Analyze the voice transcript and identify the intent of the query. Today is {today}.
Determine if it's a restaurant search, a restaurant booking, an itinerary request,
a destination query or a general travel question.
Return ONLY a JSON object with the following structure:
{{
  "intent": "restaurant_search|restaurant_booking|itinerary|destination|general",
  "entities": {{
    "destination": "Extracted destination or null",
    "cuisine": "For restaurant searches, or null",
    "restaurant": "Restaurant name for bookings, or null",
    "date": "YYYY-MM-DD or null",
    "time": "HH:MM (24-hour) or null",
    "partySize": "Number of people as an integer, or null",
    "preferences": ["Any other preferences mentioned"]
  }},
  "response": "A natural language response to the query"
}}"""


def _message_text(response: Any) -> str:
    """Text of an AIMessage whose content may be a string or a list of parts"""
    content = getattr(response, "content", response)
    if isinstance(content, list):
        return "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )
    return str(content)


def _token_usage(response: Any) -> TokenUsage:
    usage = getattr(response, "usage_metadata", None) or {}
    return TokenUsage(
        prompt=usage.get("input_tokens", 0),
        completion=usage.get("output_tokens", 0),
        total=usage.get("total_tokens", 0),
    )


def extract_json(text: str) -> Any:
    """
    Parse the first JSON object or array embedded in model output

    Code fences and prose around the JSON are ignored.

    Raises:
        ValueError: If no JSON is found or it does not parse
    """
    starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
    if not starts:
        raise ValueError("No JSON found in response")
    start = min(starts)
    end = text.rfind("}" if text[start] == "{" else "]") + 1
    if end <= start:
        raise ValueError("Unterminated JSON in response")
    return json.loads(text[start:end])


class GeminiResponder(AssistantResponder):
    """
    Same operations as the rule-based responder, answered by Gemini.

    Input flagged by the prompt-injection detector never reaches the model.
    Any model failure, unparseable answer or unsafe output is logged and the
    rule-based responder answers instead; nothing is retried.
    """

    source = "gemini"

    def __init__(
        self,
        api_key: str,
        model_name: str,
        temperature: float = 0.2,
        fallback: Optional[AssistantResponder] = None,
        llm: Optional[Any] = None,
    ):
        self.llm = llm or ChatGoogleGenerativeAI(
            model=model_name,
            temperature=temperature,
            google_api_key=api_key,
            safety_settings=configure_safety_settings()
        )
        self.fallback = fallback or RuleBasedResponder()

    async def _ask(self, system_prompt: str, user_text: str) -> Tuple[str, TokenUsage]:
        """
        One model round trip with safety checks

        Raises:
            ContentSafetyError: If the response is flagged
            ValueError: If the model returned nothing
        """
        response = await self.llm.ainvoke([
            SystemMessage(content=system_prompt),
            HumanMessage(content=PromptInjectionDetector.sanitize_text(user_text, max_length=4000)),
        ])
        if response is None:
            raise ValueError("Empty response from model")

        check_content_safety(response)
        text = _message_text(response)
        if not text.strip():
            raise ValueError("Empty response from model")
        validate_agent_output(text)
        return text, _token_usage(response)

    async def _guarded(
        self,
        operation: str,
        text: str,
        call: Callable[[], Awaitable[ResultT]],
        fallback: Callable[[], Awaitable[ResultT]],
        location: Optional[str] = None,
    ) -> ResultT:
        is_safe, patterns = PromptInjectionDetector.detect_injection(text)
        if location:
            location_safe, location_patterns = PromptInjectionDetector.detect_injection(location, check_location=True)
            is_safe, patterns = is_safe and location_safe, patterns + location_patterns
        if not is_safe:
            logger.warning("Suspicious %s input (%s), answering with rules", operation, ", ".join(patterns))
            return await fallback()

        try:
            return await call()
        except Exception as e:
            logger.warning(
                "Gemini %s failed (%s: %s), falling back to rules",
                operation, type(e).__name__, e
            )
            return await fallback()

    async def respond(self, text: str) -> AssistantReply:
        async def call() -> AssistantReply:
            answer, tokens = await self._ask(QUERY_SYSTEM_PROMPT, text)
            # Topic tagging stays rule-based; only the answer text comes from the model
            tagged = await self.fallback.respond(text)
            return AssistantReply(
                intent=tagged.intent,
                entities=tagged.entities,
                response=answer.strip(),
                tokens=tokens,
                source=self.source,
            )

        return await self._guarded("query", text, call, lambda: self.fallback.respond(text))

    async def generate_itinerary(self, prompt: str, start_date: Optional[date] = None) -> ItineraryResult:
        start = start_date or date.today()

        async def call() -> ItineraryResult:
            answer, tokens = await self._ask(ITINERARY_SYSTEM_PROMPT.format(start_date=start.isoformat()), prompt)
            raw = extract_json(answer)

            # Models often leave dates blank; day N is start + (N - 1)
            for index, day in enumerate(raw.get("days") or []):
                if not day.get("date"):
                    day["date"] = (start + timedelta(days=index)).isoformat()
                for item in day.get("items") or []:
                    item["status"] = "none"

            itinerary = DraftItinerary.model_validate(raw)
            if not itinerary.days:
                raise ValueError("Generated itinerary has no days")
            return ItineraryResult(itinerary=itinerary, tokens=tokens, source=self.source)

        return await self._guarded(
            "itinerary generation", prompt, call,
            lambda: self.fallback.generate_itinerary(prompt, start_date),
        )

    async def recommend_restaurants(self, preferences: str, location: Optional[str] = None) -> RecommendationResult:
        async def call() -> RecommendationResult:
            hints = PreferenceParser.format_for_llm(PreferenceParser.parse(preferences))
            user_text = f"Preferences: {preferences}"
            if location:
                user_text += f"\nLocation: {location}"
            user_text += f"\n\nParsed hints:\n{hints}"

            answer, tokens = await self._ask(RESTAURANT_SYSTEM_PROMPT, user_text)
            raw = extract_json(answer)
            if isinstance(raw, dict):
                raw = raw.get("recommendations") or []

            recommendations = [RestaurantSuggestion.model_validate(entry) for entry in raw]
            if not recommendations:
                raise ValueError("No recommendations in response")
            return RecommendationResult(recommendations=recommendations, tokens=tokens, source=self.source)

        return await self._guarded(
            "restaurant recommendation", preferences, call,
            lambda: self.fallback.recommend_restaurants(preferences, location),
            location=location,
        )

    async def analyze_preferences(self, text: str) -> PreferencesResult:
        async def call() -> PreferencesResult:
            answer, tokens = await self._ask(PREFERENCES_SYSTEM_PROMPT, text)
            raw = extract_json(answer)

            duration = raw.get("travelDuration")
            if isinstance(duration, str):
                raw["travelDuration"] = PreferenceParser.extract_duration(duration) or (
                    int(duration) if duration.strip().isdigit() else None
                )

            return PreferencesResult(
                preferences=ParsedPreferences.model_validate(raw),
                tokens=tokens,
                source=self.source,
            )

        return await self._guarded(
            "preference analysis", text, call,
            lambda: self.fallback.analyze_preferences(text),
        )

    async def classify_voice(self, transcript: str, today: Optional[date] = None) -> VoiceQueryResult:
        today = today or date.today()

        async def call() -> VoiceQueryResult:
            answer, tokens = await self._ask(VOICE_SYSTEM_PROMPT.format(today=today.isoformat()), transcript)
            raw = extract_json(answer)
            return VoiceQueryResult(
                intent=raw.get("intent") or "general",
                entities=VoiceEntities.model_validate(raw.get("entities") or {}),
                response=raw.get("response") or "",
                tokens=tokens,
                source=self.source,
            )

        return await self._guarded(
            "voice query", transcript, call,
            lambda: self.fallback.classify_voice(transcript, today),
        )

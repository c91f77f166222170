"""Rule-based assistant: keyword tables and canned templates, no model involved"""
import logging
import re
from datetime import date, timedelta
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from ..tools.preference_parser import PreferenceParser
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
    VoiceEntities,
    VoiceQueryResult,
)

logger = logging.getLogger(__name__)

GENERIC_RESPONSE = (
    "I'm TravelSage, your travel assistant. I can help with destination information, "
    "restaurant recommendations, itinerary planning, and travel tips. "
    "What would you like to know about?"
)


def _destination_answer(place: Optional[str], cuisine: Optional[str]) -> str:
    text = (
        "Popular travel destinations include Paris, Tokyo, New York, Rome, and Bali. "
        "Each offers unique cultural experiences, cuisine, and attractions."
    )
    if place:
        return (
            f"{place} is a wonderful choice. Look into its best-known neighborhoods, "
            "the local food scene and a day trip or two outside the center.\n\n" + text
        )
    return text + " Where would you like to know more about?"


def _restaurant_answer(place: Optional[str], cuisine: Optional[str]) -> str:
    text = (
        "When traveling, try local cuisine and restaurants recommended by locals. "
        "Food markets and family-owned establishments often provide authentic experiences."
    )
    if place or cuisine:
        what = f"{cuisine} food" if cuisine else "good food"
        where = f" in {place}" if place else ""
        return (
            f"Looking for {what}{where}? Check recent reviews, book ahead for dinner "
            "and ask locals for their favorite spots.\n\n" + text
        )
    return text + " Would you like recommendations for a specific location?"


def _itinerary_answer(place: Optional[str], cuisine: Optional[str]) -> str:
    text = (
        "A good travel itinerary balances sightseeing, relaxation, and free time for unexpected "
        "discoveries. Consider 2-3 major activities per day and leave room for spontaneity."
    )
    if place:
        return text + f"\n\nFor {place}, group sights by neighborhood to cut down on travel time."
    return text


def _budget_answer(place: Optional[str], cuisine: Optional[str]) -> str:
    return (
        "Travel costs vary widely by destination, season, and style. Southeast Asia and parts of "
        "Latin America are budget-friendly, while Western Europe and Japan tend to be more expensive."
    )


def _tips_answer(place: Optional[str], cuisine: Optional[str]) -> str:
    return (
        "Some travel tips: research local customs before you go, learn a few phrases in the local "
        "language, keep digital copies of important documents, and pack less than you think you need."
    )


# (intent, keywords, template) in priority order; the first rule with a keyword match wins
QUERY_RULES: List[Tuple[str, Tuple[str, ...], Callable[[Optional[str], Optional[str]], str]]] = [
    ("destination", ("destination", "where"), _destination_answer),
    ("restaurant_search", ("restaurant", "food", "eat"), _restaurant_answer),
    ("itinerary", ("itinerary", "plan"), _itinerary_answer),
    ("budget", ("budget", "cost", "price"), _budget_answer),
    ("tips", ("tip", "advice"), _tips_answer),
]


class _CityHighlights(NamedTuple):
    landmark: Tuple[str, str]
    culture: Tuple[str, str]
    evening_area: str
    walk: Tuple[str, str]
    shopping_area: str
    cruise: str
    day_trip: Tuple[str, str]
    farewell: str


# (keywords, destination) for itinerary generation; Paris when nothing matches
ITINERARY_DESTINATIONS: List[Tuple[Tuple[str, ...], str]] = [
    (("tokyo", "japan"), "Tokyo"),
    (("new york", "nyc"), "New York City"),
    (("rome", "italy"), "Rome"),
    (("bali", "indonesia"), "Bali"),
]
DEFAULT_ITINERARY_DESTINATION = "Paris"

CITY_HIGHLIGHTS: Dict[str, _CityHighlights] = {
    "Paris": _CityHighlights(
        landmark=("Visit the Eiffel Tower", "Eiffel Tower"),
        culture=("Louvre Museum Tour", "Louvre Museum"),
        evening_area="Seine River area",
        walk=("Montmartre Walk", "Montmartre"),
        shopping_area="Galeries Lafayette",
        cruise="Seine River Cruise",
        day_trip=("Visit Versailles", "Palace of Versailles"),
        farewell="Moulin Rouge Show",
    ),
    "Tokyo": _CityHighlights(
        landmark=("Visit Tokyo Skytree", "Tokyo Skytree"),
        culture=("Senso-ji Temple Visit", "Senso-ji Temple"),
        evening_area="Shibuya",
        walk=("Harajuku Exploration", "Harajuku"),
        shopping_area="Takeshita Street",
        cruise="Tokyo Bay Cruise",
        day_trip=("Day trip to Kamakura", "Kamakura"),
        farewell="Karaoke in Shinjuku",
    ),
    "New York City": _CityHighlights(
        landmark=("Visit Empire State Building", "Empire State Building"),
        culture=("Metropolitan Museum of Art", "Metropolitan Museum"),
        evening_area="Times Square",
        walk=("Central Park Walk", "Central Park"),
        shopping_area="Fifth Avenue",
        cruise="Hudson River Cruise",
        day_trip=("Brooklyn Bridge & DUMBO", "Brooklyn"),
        farewell="Broadway Show",
    ),
    "Rome": _CityHighlights(
        landmark=("Visit the Colosseum", "Colosseum"),
        culture=("Vatican Museums", "Vatican City"),
        evening_area="Trastevere",
        walk=("Spanish Steps and Trevi Fountain", "Historic Center"),
        shopping_area="Via del Corso",
        cruise="Tiber River Walk",
        day_trip=("Ostia Antica Archaeological Park", "Ostia Antica"),
        farewell="Evening Piazza Walk",
    ),
    "Bali": _CityHighlights(
        landmark=("Visit Beach", "Famous Beach"),
        culture=("Cultural Tour", "Cultural Center"),
        evening_area="Downtown",
        walk=("Nature Hike", "Natural Area"),
        shopping_area="Shopping District",
        cruise="Boat Tour",
        day_trip=("Day Trip", "Nearby Attraction"),
        farewell="Entertainment Venue",
    ),
}

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

_NUMBER = r"(\d{1,2}|" + "|".join(PreferenceParser.NUMBER_WORDS) + r")"
_BOOKING_PATTERN = re.compile(
    r"(?:book a table|make a reservation|reserve a table) at (.+?)"
    r"(?=\s+(?:for|on|at\s+\d|tomorrow|today|tonight|next)\b|$)"
)
_SEARCH_PATTERN = re.compile(r"(?:find|search for|looking for) (?:an? |some )?(.+?) restaurants?\b")
_TRIP_PATTERN = re.compile(
    r"(?:plan a trip|create (?:an )?itinerary|trip) (?:to|for) (.+?)"
    r"(?=\s+(?:for|in|next|this|on)\b|$)"
)
_TIME_12H = re.compile(r"\b(\d{1,2})(?::(\d{2}))?\s*(am|pm|a\.m\.|p\.m\.)(?![a-z])")
_TIME_24H = re.compile(r"\b([01]?\d|2[0-3]):([0-5]\d)\b")
_PEOPLE = re.compile(r"\b" + _NUMBER + r"\s+(?:people|persons|guests|adults)\b")
_PARTY_OF = re.compile(
    r"\b(?:for|party of)\s+" + _NUMBER
    + r"\b(?!\s*(?::\d|am\b|pm\b|a\.m|p\.m|o'clock|days?\b|nights?\b|weeks?\b))"
)
_ISO_DATE = re.compile(r"\b(\d{4}-\d{2}-\d{2})\b")


def detect_place(text: str) -> Optional[str]:
    """First known place mentioned in the text"""
    places = PreferenceParser.extract_destinations(text)
    return places[0] if places else None


def detect_cuisine(text: str) -> Optional[str]:
    cuisines = PreferenceParser.extract_cuisines(text)
    return cuisines[0] if cuisines else None


def detect_price_range(text: str) -> str:
    """Price tier for restaurant suggestions: "$", "$$" or "$$$$" """
    text = text.lower()
    if any(word in text for word in ("cheap", "budget", "affordable")):
        return "$"
    if any(word in text for word in ("luxury", "fine dining", "expensive")):
        return "$$$$"
    return "$$"


def _mentions(text: str, *words: str) -> bool:
    """Whole-word, optionally plural match ("eat" does not fire on "great")"""
    return any(re.search(rf"\b{re.escape(word)}s?\b", text) for word in words)


def _to_number(raw: str) -> int:
    return int(raw) if raw.isdigit() else PreferenceParser.NUMBER_WORDS[raw]


def extract_date(text: str, today: date) -> Optional[str]:
    """
    Best-effort ISO date from relative words

    "today"/"tonight", "tomorrow", "next week" (+7 days), a weekday name
    (its next occurrence, never today) or a literal YYYY-MM-DD.
    """
    text = text.lower()
    iso = _ISO_DATE.search(text)
    if iso:
        return iso.group(1)
    if "tomorrow" in text:
        return (today + timedelta(days=1)).isoformat()
    if "today" in text or "tonight" in text:
        return today.isoformat()
    if "next week" in text:
        return (today + timedelta(days=7)).isoformat()
    for index, weekday in enumerate(WEEKDAYS):
        if re.search(rf"\b{weekday}\b", text):
            days_ahead = (index - today.weekday()) % 7 or 7
            return (today + timedelta(days=days_ahead)).isoformat()
    return None


def extract_time(text: str) -> Optional[str]:
    """
    Best-effort 24-hour "HH:MM"

    Examples:
        "at 7pm" -> "19:00"
        "7:30 p.m." -> "19:30"
        "12am" -> "00:00"
        "at 18:45" -> "18:45"
        "noon" -> "12:00"
    """
    text = text.lower()
    match = _TIME_12H.search(text)
    if match:
        hour, minute, meridiem = int(match.group(1)), int(match.group(2) or 0), match.group(3)
        if 1 <= hour <= 12 and minute < 60:
            hour = hour % 12 + (12 if meridiem.startswith("p") else 0)
            return f"{hour:02d}:{minute:02d}"
    match = _TIME_24H.search(text)
    if match:
        return f"{int(match.group(1)):02d}:{match.group(2)}"
    if "noon" in text:
        return "12:00"
    return None


def extract_party_size(text: str) -> Optional[int]:
    """
    Examples:
        "for 4 people" -> 4
        "a table for two" -> 2
        "party of 6" -> 6
        "for 5 days" -> None
    """
    text = text.lower()
    match = _PEOPLE.search(text) or _PARTY_OF.search(text)
    return _to_number(match.group(1)) if match else None


class RuleBasedResponder(AssistantResponder):
    """Keyword tables and canned templates; every result reports zero tokens"""

    source = "rules"

    async def respond(self, text: str) -> AssistantReply:
        lowered = text.lower()
        place, cuisine = detect_place(text), detect_cuisine(text)
        entities = {key: value for key, value in (("destination", place), ("cuisine", cuisine)) if value}

        for intent, keywords, template in QUERY_RULES:
            if any(keyword in lowered for keyword in keywords):
                logger.debug("Query matched the %s rule", intent)
                return AssistantReply(intent=intent, entities=entities, response=template(place, cuisine))

        return AssistantReply(intent="general", entities=entities, response=GENERIC_RESPONSE)

    async def generate_itinerary(self, prompt: str, start_date: Optional[date] = None) -> ItineraryResult:
        """
        One of five fixed 3-day templates, chosen by the destination named in the prompt
        """
        lowered = prompt.lower()
        destination = next(
            (name for keywords, name in ITINERARY_DESTINATIONS if any(k in lowered for k in keywords)),
            DEFAULT_ITINERARY_DESTINATION,
        )
        start = start_date or date.today()
        days = self._template_days(destination, start)
        return ItineraryResult(itinerary=DraftItinerary(
            name=f"Trip to {destination}",
            destination=destination,
            days=days,
        ))

    @staticmethod
    def _template_days(destination: str, start: date) -> List[DraftDay]:
        city = CITY_HIGHLIGHTS[destination]
        return [
            DraftDay(
                title=f"Day 1: Exploring {destination}",
                date=start,
                items=[
                    DraftItem(title="Breakfast at hotel", description="Start your day with a delicious breakfast at your hotel.",
                              type="food", start_time="08:00", end_time="09:00", location="Hotel", price="$"),
                    DraftItem(title=city.landmark[0], description="Explore one of the most iconic landmarks in the city.",
                              start_time="10:00", end_time="12:00", location=city.landmark[1],
                              distance="2 km from hotel", price="$$"),
                    DraftItem(title="Lunch at local restaurant", description="Enjoy authentic local cuisine at a popular restaurant.",
                              type="food", start_time="12:30", end_time="14:00", location="City Center", price="$$"),
                    DraftItem(title=city.culture[0], description="Immerse yourself in the local culture and history.",
                              start_time="14:30", end_time="17:00", location=city.culture[1],
                              distance="3 km from lunch spot", price="$$"),
                    DraftItem(title="Dinner and evening stroll",
                              description="Enjoy a relaxing dinner followed by an evening walk in a scenic area.",
                              type="food", start_time="19:00", end_time="21:00", location=city.evening_area, price="$$$"),
                ],
            ),
            DraftDay(
                title=f"Day 2: More {destination} Adventures",
                date=start + timedelta(days=1),
                items=[
                    DraftItem(title="Breakfast at local café", description="Try a different breakfast spot today.",
                              type="food", start_time="08:30", end_time="09:30", location="Local Café", price="$"),
                    DraftItem(title=city.walk[0], description="Explore a different part of the city.",
                              start_time="10:00", end_time="13:00", location=city.walk[1],
                              distance="4 km from hotel", price="$"),
                    DraftItem(title="Lunch and shopping", description="Enjoy lunch and then shop for souvenirs or local products.",
                              type="food", start_time="13:00", end_time="16:00", location=city.shopping_area, price="$$"),
                    DraftItem(title=city.cruise, description="Relax and see the city from a different perspective.",
                              start_time="17:00", end_time="19:00", location="River/Bay Area", price="$$"),
                    DraftItem(title="Fine dining experience", description="Treat yourself to a special dinner tonight.",
                              type="food", start_time="20:00", end_time="22:00", location="Upscale Restaurant", price="$$$$"),
                ],
            ),
            DraftDay(
                title=f"Day 3: Final Day in {destination}",
                date=start + timedelta(days=2),
                items=[
                    DraftItem(title="Leisurely breakfast", description="Take your time with breakfast today.",
                              type="food", start_time="09:00", end_time="10:30", location="Hotel or nearby café", price="$$"),
                    DraftItem(title=city.day_trip[0], description="Take a short trip outside the main city center.",
                              start_time="11:00", end_time="16:00", location=city.day_trip[1],
                              distance="30-60 minutes from city center", price="$$"),
                    DraftItem(title="Last dinner in the city", description="Enjoy your final evening meal with local specialties.",
                              type="food", start_time="19:00", end_time="21:00", location="Local Restaurant", price="$$$"),
                    DraftItem(title="Evening farewell activity",
                              description="Make the most of your last night with a special activity.",
                              start_time="21:30", end_time="23:00", location=city.farewell, price="$$$"),
                ],
            ),
        ]

    async def recommend_restaurants(self, preferences: str, location: Optional[str] = None) -> RecommendationResult:
        """
        Three entries templated on the detected cuisine and price tier, a
        vegetarian entry when asked for, and a local-specialties entry
        """
        wants = preferences.lower()
        cuisine = detect_cuisine(preferences) or "International"
        cuisine_lower = cuisine.lower()
        price = detect_price_range(preferences)
        where = (location or "").strip() or "City Center"

        occasion = "family dining" if "family" in wants else "a romantic evening" if "romantic" in wants else "a casual meal"
        approach = "authentic" if "authentic" in wants else "creative"
        views = "beautiful views and " if "view" in wants else ""

        recommendations = [
            RestaurantSuggestion(
                name=f"{cuisine} Delight",
                cuisine=[cuisine],
                description=f"A charming {cuisine_lower} restaurant known for authentic flavors and welcoming atmosphere.",
                price_range=price,
                location=where,
                recommendation_reason=f"Perfect for {occasion} with excellent {cuisine_lower} cuisine.",
            ),
            RestaurantSuggestion(
                name=f"{cuisine} House",
                cuisine=[cuisine],
                description=f"Popular spot offering traditional and modern {cuisine_lower} dishes in a stylish setting.",
                price_range={"$": "$$", "$$$$": "$$$"}.get(price, "$$"),
                location=where,
                recommendation_reason=f"Known for its exceptional service and {approach} approach to {cuisine_lower} cooking.",
            ),
            RestaurantSuggestion(
                name=f"The {cuisine} Experience",
                cuisine=[cuisine, "Fusion"],
                description=f"Innovative restaurant blending {cuisine_lower} traditions with modern culinary techniques.",
                price_range={"$": "$$", "$$": "$$$"}.get(price, "$$$$"),
                location=where,
                recommendation_reason=f"Offers a unique dining experience with {views}inventive dishes that surprise and delight.",
            ),
        ]

        if "vegetarian" in wants or "vegan" in wants:
            recommendations.append(RestaurantSuggestion(
                name="Green Palette",
                cuisine=["Vegetarian", "Vegan", "Health Food"],
                description="Specializing in plant-based cuisine that satisfies even non-vegetarians.",
                price_range=price,
                location=where,
                recommendation_reason=(
                    "Perfect for those seeking delicious vegetarian and vegan options "
                    "with locally-sourced ingredients."
                ),
            ))

        recommendations.append(RestaurantSuggestion(
            name="Local Flavors",
            cuisine=["Regional", "Traditional"],
            description="A beloved restaurant showcasing the best local and regional specialties.",
            price_range="$$",
            location=where,
            recommendation_reason="Offers an authentic taste of local cuisine with recipes passed down through generations.",
        ))
        return RecommendationResult(recommendations=recommendations)

    async def analyze_preferences(self, text: str) -> PreferencesResult:
        return PreferencesResult(preferences=PreferenceParser.parse(text))

    async def classify_voice(self, transcript: str, today: Optional[date] = None) -> VoiceQueryResult:
        """
        Intent checks run in order: booking, restaurant search, itinerary,
        destination, then general
        """
        today = today or date.today()
        text = transcript.lower().strip().rstrip(".!?")

        entities = VoiceEntities(
            destination=detect_place(transcript),
            cuisine=detect_cuisine(transcript),
            date=extract_date(text, today),
            time=extract_time(text),
            party_size=extract_party_size(text),
            preferences=PreferenceParser.extract_interests(transcript),
        )

        if any(phrase in text for phrase in ("book a table", "make a reservation", "reserve a table", "reservation")):
            match = _BOOKING_PATTERN.search(text)
            if match:
                entities.restaurant = match.group(1).strip().title()
            return VoiceQueryResult(
                intent="restaurant_booking",
                entities=entities,
                response=self._booking_response(entities),
            )

        if _mentions(text, "restaurant", "food", "eat", "dinner", "lunch", "dine"):
            if not entities.cuisine:
                match = _SEARCH_PATTERN.search(text)
                if match:
                    entities.cuisine = match.group(1).strip().title()
            what = f"{entities.cuisine} restaurants" if entities.cuisine else "restaurants"
            where = f" in {entities.destination}" if entities.destination else " near you"
            return VoiceQueryResult(
                intent="restaurant_search",
                entities=entities,
                response=f"Searching for {what}{where}.",
            )

        if _mentions(text, "itinerary", "plan", "trip"):
            if not entities.destination:
                match = _TRIP_PATTERN.search(text)
                if match:
                    entities.destination = match.group(1).strip().title()
            where = f" to {entities.destination}" if entities.destination else ""
            return VoiceQueryResult(
                intent="itinerary",
                entities=entities,
                response=f"Let's plan your trip{where}. I'll put together a day-by-day itinerary.",
            )

        if entities.destination or _mentions(text, "destination", "where", "visit", "travel to"):
            response = (
                f"Here's what you should know about {entities.destination}."
                if entities.destination else "Here are some popular destinations you might enjoy."
            )
            return VoiceQueryResult(intent="destination", entities=entities, response=response)

        reply = await self.respond(transcript)
        return VoiceQueryResult(intent="general", entities=entities, response=reply.response)

    @staticmethod
    def _booking_response(entities: VoiceEntities) -> str:
        parts = ["I can help you book a table"]
        if entities.restaurant:
            parts.append(f" at {entities.restaurant}")
        if entities.party_size:
            parts.append(f" for {entities.party_size}")
        if entities.date:
            parts.append(f" on {entities.date}")
        if entities.time:
            parts.append(f" at {entities.time}")
        parts.append(". Please confirm the details to complete your reservation.")
        return "".join(parts)

"""Preference parsing tool - extracts structured travel preferences from free text"""
import re
from typing import Dict, List, Optional, Tuple
from pydantic import Field

from ..models.base import CamelModel


class ParsedPreferences(CamelModel):
    """Structured output from preference parsing"""
    destinations: List[str] = Field(default_factory=list, description="Mentioned destinations")
    interests: List[str] = Field(default_factory=list, description="Activities or interests")
    cuisines: List[str] = Field(default_factory=list, description="Food preferences")
    budget: Optional[str] = Field(None, description="Budget level (low/medium/high)")
    travel_style: List[str] = Field(default_factory=list, description="Adventure/luxury/cultural/etc")
    travel_duration: Optional[int] = Field(None, description="Number of days if mentioned")
    accommodation: List[str] = Field(default_factory=list, description="Hotel/hostel/etc")


# Known places: lower-case keyword -> display name. Longer keywords first so
# "new york" wins over "york"-style partial matches.
PLACE_KEYWORDS: List[Tuple[str, str]] = [
    ('new york city', 'New York City'),
    ('new york', 'New York City'),
    ('nyc', 'New York City'),
    ('rio de janeiro', 'Rio de Janeiro'),
    ('cape town', 'Cape Town'),
    ('hong kong', 'Hong Kong'),
    ('santorini', 'Santorini'),
    ('barcelona', 'Barcelona'),
    ('amsterdam', 'Amsterdam'),
    ('singapore', 'Singapore'),
    ('marrakech', 'Marrakech'),
    ('istanbul', 'Istanbul'),
    ('bangkok', 'Bangkok'),
    ('lisbon', 'Lisbon'),
    ('london', 'London'),
    ('sydney', 'Sydney'),
    ('prague', 'Prague'),
    ('venice', 'Venice'),
    ('tokyo', 'Tokyo'),
    ('kyoto', 'Kyoto'),
    ('paris', 'Paris'),
    ('dubai', 'Dubai'),
    ('rome', 'Rome'),
    ('bali', 'Bali'),
]

# Cuisine display name -> keywords; order is detection priority
CUISINE_KEYWORDS: List[Tuple[str, List[str]]] = [
    ('Italian', ['italian', 'pasta', 'pizza']),
    ('Japanese', ['japanese', 'sushi']),
    ('Chinese', ['chinese']),
    ('Indian', ['indian', 'curry']),
    ('Mexican', ['mexican', 'taco']),
    ('French', ['french']),
    ('Thai', ['thai']),
    ('Vegetarian/Vegan', ['vegetarian', 'vegan']),
]


class PreferenceParser:
    """Parse unstructured preferences into destinations, interests, budget level and more"""

    # Interest keyword -> normalized interest
    INTEREST_MAPPING = {
        'nightlife': 'nightlife',
        'party': 'nightlife',
        'bars': 'nightlife',
        'clubs': 'nightlife',
        'family': 'family',
        'kids': 'family',
        'children': 'family',
        'culture': 'culture',
        'museum': 'museums',
        'art': 'art',
        'history': 'history',
        'historic': 'history',
        'food': 'food',
        'foodie': 'food',
        'dining': 'food',
        'beach': 'beach',
        'hiking': 'hiking',
        'outdoor': 'outdoors',
        'nature': 'nature',
        'shopping': 'shopping',
        'spa': 'wellness',
        'wellness': 'wellness',
        'architecture': 'architecture',
        'photography': 'photography',
        'wine': 'wine',
    }

    STYLE_KEYWORDS = {
        'adventure': ['adventure', 'adventurous', 'thrill'],
        'luxury': ['luxury', 'luxurious', 'five-star', '5-star'],
        'cultural': ['cultural', 'culture', 'museum', 'history'],
        'relaxation': ['relax', 'relaxing', 'chill', 'unwind'],
        'romantic': ['romantic', 'honeymoon', 'couple'],
        'family': ['family', 'kids', 'children'],
        'backpacking': ['backpack', 'backpacking', 'hostel'],
    }

    ACCOMMODATION_KEYWORDS = {
        'hotel': ['hotel'],
        'hostel': ['hostel'],
        'resort': ['resort'],
        'apartment': ['apartment', 'airbnb', 'rental'],
        'villa': ['villa'],
        'bed and breakfast': ['bed and breakfast', 'b&b'],
        'camping': ['camping', 'campsite'],
    }

    LOW_BUDGET_WORDS = ['cheap', 'budget', 'affordable', 'backpack', 'inexpensive']
    HIGH_BUDGET_WORDS = ['luxury', 'expensive', 'splurge', 'high-end', 'fine dining']
    MEDIUM_BUDGET_WORDS = ['mid-range', 'moderate', 'reasonable']

    NUMBER_WORDS = {
        'one': 1, 'two': 2, 'three': 3, 'four': 4, 'five': 5,
        'six': 6, 'seven': 7, 'eight': 8, 'nine': 9, 'ten': 10,
    }

    @staticmethod
    def _contains_word(text: str, keyword: str) -> bool:
        # Whole word, optionally plural ("museum" matches "museums", "art" never matches "party")
        return re.search(rf'(?<![a-z]){re.escape(keyword)}s?(?![a-z])', text) is not None

    @classmethod
    def extract_destinations(cls, text: str) -> List[str]:
        """Known places mentioned in the text, in keyword-table order, without duplicates"""
        if not text:
            return []
        text_lower = text.lower()
        found: List[str] = []
        for keyword, name in PLACE_KEYWORDS:
            if name not in found and cls._contains_word(text_lower, keyword):
                found.append(name)
        return found

    @classmethod
    def extract_cuisines(cls, text: str) -> List[str]:
        if not text:
            return []
        text_lower = text.lower()
        return [
            cuisine for cuisine, keywords in CUISINE_KEYWORDS
            if any(keyword in text_lower for keyword in keywords)
        ]

    @classmethod
    def extract_budget(cls, text: str) -> Optional[float]:
        """
        Extract a budget amount from text using regex

        Examples:
            "$1500" -> 1500.0
            "1500 dollars" -> 1500.0
            "budget of 1500" -> 1500.0
            "$1,500" -> 1500.0
        """
        if not text:
            return None

        patterns = [
            r'\$\s*(\d{1,3}(?:,\d{3})*(?:\.\d{2})?|\d+)',  # $1500, $1,500
            r'(\d{1,3}(?:,\d{3})*(?:\.\d{2})?|\d+)\s*(?:dollars|usd|bucks|euros|eur)',  # 1500 dollars
            r'budget\s*(?:of|is)?\s*\$?\s*(\d{1,3}(?:,\d{3})*(?:\.\d{2})?|\d+)',  # budget of $1500
        ]

        for pattern in patterns:
            match = re.search(pattern, text.lower())
            if match:
                amount_str = match.group(1).replace(',', '')
                try:
                    return float(amount_str)
                except ValueError:
                    continue

        return None

    @classmethod
    def extract_budget_level(cls, text: str) -> Optional[str]:
        """
        Budget level from keywords, else from an amount

        Amounts under 1000 are "low", under 3000 "medium", anything else "high".
        """
        if not text:
            return None
        text_lower = text.lower()

        if any(word in text_lower for word in cls.HIGH_BUDGET_WORDS):
            return 'high'
        if any(word in text_lower for word in cls.LOW_BUDGET_WORDS):
            return 'low'
        if any(word in text_lower for word in cls.MEDIUM_BUDGET_WORDS):
            return 'medium'

        amount = cls.extract_budget(text)
        if amount is None:
            return None
        if amount < 1000:
            return 'low'
        if amount < 3000:
            return 'medium'
        return 'high'

    @classmethod
    def extract_interests(cls, text: str) -> List[str]:
        """
        Extract high-level interests from text

        Returns:
            Normalized interests (e.g., ['nightlife', 'culture'])
        """
        if not text:
            return []

        text_lower = text.lower()
        interests: List[str] = []
        for keyword, interest in cls.INTEREST_MAPPING.items():
            if interest not in interests and cls._contains_word(text_lower, keyword):
                interests.append(interest)
        return interests

    @classmethod
    def _match_table(cls, text: str, table: Dict[str, List[str]]) -> List[str]:
        text_lower = text.lower()
        return [
            label for label, keywords in table.items()
            if any(keyword in text_lower for keyword in keywords)
        ]

    @classmethod
    def extract_travel_style(cls, text: str) -> List[str]:
        return cls._match_table(text, cls.STYLE_KEYWORDS) if text else []

    @classmethod
    def extract_accommodation(cls, text: str) -> List[str]:
        return cls._match_table(text, cls.ACCOMMODATION_KEYWORDS) if text else []

    @classmethod
    def extract_duration(cls, text: str) -> Optional[int]:
        """
        Trip length in days

        Examples:
            "5 days" -> 5
            "a week" -> 7
            "two weeks" -> 14
            "weekend" -> 2
        """
        if not text:
            return None
        text_lower = text.lower()
        number = r'(\d{1,3}|' + '|'.join(cls.NUMBER_WORDS) + r')'

        match = re.search(number + r'[\s-]*(day|days|night|nights|week|weeks)\b', text_lower)
        if match:
            raw, unit = match.groups()
            count = int(raw) if raw.isdigit() else cls.NUMBER_WORDS[raw]
            return count * 7 if unit.startswith('week') else count

        if re.search(r'\ba week\b', text_lower):
            return 7
        if 'weekend' in text_lower:
            return 2
        return None

    @classmethod
    def parse(cls, preferences_text: Optional[str]) -> ParsedPreferences:
        """
        Parse unstructured preferences into structured format

        Args:
            preferences_text: Optional user preferences text

        Returns:
            ParsedPreferences with every field the text gives evidence for

        Example:
            Input: "5 days in Tokyo, I love sushi and museums, staying in a cheap hostel"
            Output: ParsedPreferences(
                destinations=['Tokyo'],
                interests=['museums'],
                cuisines=['Japanese'],
                budget='low',
                travel_style=['cultural', 'backpacking'],
                travel_duration=5,
                accommodation=['hostel'],
            )
        """
        if not preferences_text:
            return ParsedPreferences()

        return ParsedPreferences(
            destinations=cls.extract_destinations(preferences_text),
            interests=cls.extract_interests(preferences_text),
            cuisines=cls.extract_cuisines(preferences_text),
            budget=cls.extract_budget_level(preferences_text),
            travel_style=cls.extract_travel_style(preferences_text),
            travel_duration=cls.extract_duration(preferences_text),
            accommodation=cls.extract_accommodation(preferences_text),
        )

    @classmethod
    def format_for_llm(cls, parsed: ParsedPreferences) -> str:
        """
        Format parsed preferences as prompt context

        Args:
            parsed: ParsedPreferences object

        Returns:
            Formatted string for an LLM prompt
        """
        lines = []

        if parsed.destinations:
            lines.append(f"Destinations: {', '.join(parsed.destinations)}")
        if parsed.budget:
            lines.append(f"Budget level: {parsed.budget}")
        if parsed.interests:
            lines.append(f"Interests: {', '.join(parsed.interests)}")
        if parsed.cuisines:
            lines.append(f"Cuisines: {', '.join(parsed.cuisines)}")
        if parsed.travel_duration:
            lines.append(f"Duration: {parsed.travel_duration} days")

        return "\n".join(lines) if lines else "No preferences specified"

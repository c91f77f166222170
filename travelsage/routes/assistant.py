"""Assistant endpoints (free-text queries, drafting, recommendations, voice)"""
import logging

from fastapi import APIRouter, Depends

from ..agents import (
    AssistantReply,
    ItineraryResult,
    PreferencesResult,
    RecommendationResult,
    VoiceQueryResult,
)
from ..container import Container
from ..middleware.auth import get_container
from ..middleware.rate_limit import limit_assistant
from ..schemas.request import (
    AnalyzePreferencesRequest,
    GenerateItineraryRequest,
    QueryRequest,
    RestaurantRecommendationRequest,
    VoiceQueryRequest,
)
from ..schemas.response import ERROR_RESPONSES
from ..utils.errors import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ai",
    tags=["assistant"],
    dependencies=[Depends(limit_assistant)],
    responses=ERROR_RESPONSES,
)


def check_length(container: Container, field: str, value: str) -> str:
    """
    Raises:
        ValidationError: If ``value`` exceeds MAX_ASSISTANT_INPUT_LENGTH
    """
    limit = container.settings.max_assistant_input_length
    if len(value) > limit:
        logger.warning("Rejected %s of %d characters", field, len(value))
        raise ValidationError.for_fields(
            f"{field} is too long",
            [{"field": field, "message": f"At most {limit} characters"}],
        )
    return value


@router.post("/query", response_model=AssistantReply)
async def query(body: QueryRequest, container: Container = Depends(get_container)):
    """Answer a free-text travel question with an intent tag and reply text"""
    return await container.assistant.respond(check_length(container, "query", body.query))


@router.post("/generate-itinerary", response_model=ItineraryResult)
async def generate_itinerary(body: GenerateItineraryRequest, container: Container = Depends(get_container)):
    """
    Draft a day-by-day itinerary from a prompt

    The draft is not stored; create an itinerary with it to keep it.
    """
    prompt = check_length(container, "prompt", body.prompt)
    return await container.assistant.generate_itinerary(prompt, body.start_date)


@router.post("/restaurant-recommendations", response_model=RecommendationResult)
async def restaurant_recommendations(
    body: RestaurantRecommendationRequest,
    container: Container = Depends(get_container),
):
    preferences = check_length(container, "preferences", body.preferences)
    return await container.assistant.recommend_restaurants(preferences, body.location)


@router.post("/analyze-preferences", response_model=PreferencesResult)
async def analyze_preferences(body: AnalyzePreferencesRequest, container: Container = Depends(get_container)):
    return await container.assistant.analyze_preferences(check_length(container, "input", body.input))


@router.post("/voice-query", response_model=VoiceQueryResult)
async def voice_query(body: VoiceQueryRequest, container: Container = Depends(get_container)):
    """Classify a voice transcript and pull out date, time and party size"""
    return await container.assistant.classify_voice(check_length(container, "transcript", body.transcript))

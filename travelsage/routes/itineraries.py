"""Itinerary lifecycle endpoints"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, status

from ..container import Container
from ..middleware.auth import get_container, optional_user, require_auth
from ..models import Itinerary, ItineraryItem, User
from ..schemas.request import CreateItineraryRequest, ItemStatusUpdateRequest, UpdateItineraryRequest
from ..schemas.response import ERROR_RESPONSES, MessageResponse
from ..services import AuthGate
from ..services.itinerary_store import parse_date
from ..utils.errors import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/itineraries", tags=["itineraries"])

# Owner of itineraries created without a session
ANONYMOUS_USER_ID = "anonymous"


async def generated_days(container: Container, body: CreateItineraryRequest) -> Optional[List[Dict[str, Any]]]:
    """
    Day content drafted by the assistant for ``body.prompt``

    The draft is cut to ``number_of_days`` or padded with empty days up to it,
    after the day count is range-checked.
    Returns None when the assistant produced no days.
    """
    if len(body.prompt) > container.settings.max_assistant_input_length:
        raise ValidationError.for_fields(
            "Prompt is too long",
            [{"field": "prompt", "message": f"At most {container.settings.max_assistant_input_length} characters"}],
        )

    number_of_days = None
    if body.number_of_days is not None:
        number_of_days = container.itineraries.check_number_of_days(body.number_of_days)

    start = parse_date(body.start_date, "startDate")
    request_text = f"{body.destination}: {body.prompt}" if body.destination else body.prompt
    result = await container.assistant.generate_itinerary(request_text, start)

    days: List[Dict[str, Any]] = [
        day.model_dump(exclude_none=True) for day in result.itinerary.days
    ]
    if not days:
        logger.warning("Assistant returned no days for prompt, keeping empty days")
        return None

    if number_of_days:
        days = days[:number_of_days]
        # Empty dicts become "Day N in <destination>" days dated start + index
        days.extend({} for _ in range(number_of_days - len(days)))
    return days[:container.itineraries.max_days]


@router.get("/current", response_model=Itinerary, responses=ERROR_RESPONSES)
async def current_itinerary(
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    """The itinerary the user touched most recently"""
    return await container.itineraries.get_current_itinerary(user.id)


@router.get("/user", response_model=List[Itinerary], responses=ERROR_RESPONSES)
async def user_itineraries(
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    return await container.itineraries.get_user_itineraries(user.id)


@router.post("", response_model=Itinerary, status_code=status.HTTP_201_CREATED, responses=ERROR_RESPONSES)
async def create_itinerary(
    body: CreateItineraryRequest,
    user: Optional[User] = Depends(optional_user),
    container: Container = Depends(get_container),
):
    """
    Create an itinerary from explicit days, an assistant prompt, or a day count

    Works without a session; such itineraries belong to the anonymous owner.
    """
    days: Optional[List[Any]] = body.days
    if not days and body.prompt and body.prompt.strip() and body.start_date:
        days = await generated_days(container, body)

    return await container.itineraries.create_itinerary(
        user_id=user.id if user else ANONYMOUS_USER_ID,
        name=body.name,
        destination=body.destination,
        start_date=body.start_date,
        number_of_days=body.number_of_days,
        days=days,
        end_date=body.end_date,
    )


@router.get("/{itinerary_id}", response_model=Itinerary, responses=ERROR_RESPONSES)
async def get_itinerary(
    itinerary_id: str,
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    itinerary = await container.itineraries.get_itinerary_by_id(itinerary_id)
    AuthGate.ensure_owner(user, itinerary.user_id, "itinerary")
    return itinerary


@router.patch("/{itinerary_id}", response_model=Itinerary, responses=ERROR_RESPONSES)
async def update_itinerary(
    itinerary_id: str,
    body: UpdateItineraryRequest,
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    """Partial update; a supplied ``days`` list replaces every day"""
    itinerary = await container.itineraries.get_itinerary_by_id(itinerary_id)
    AuthGate.ensure_owner(user, itinerary.user_id, "itinerary")
    return await container.itineraries.update_itinerary(itinerary_id, body.model_dump(exclude_none=True))


@router.delete("/{itinerary_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_itinerary(
    itinerary_id: str,
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    itinerary = await container.itineraries.get_itinerary_by_id(itinerary_id)
    AuthGate.ensure_owner(user, itinerary.user_id, "itinerary")
    await container.itineraries.delete_itinerary(itinerary_id)
    return MessageResponse(message="Itinerary deleted successfully")


@router.patch("/items/{item_id}/status", response_model=ItineraryItem, responses=ERROR_RESPONSES)
async def update_item_status(
    item_id: str,
    body: ItemStatusUpdateRequest,
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    """Set one item's status (confirmed, pending, cancelled or none)"""
    itinerary = await container.itineraries.get_itinerary_by_item_id(item_id)
    AuthGate.ensure_owner(user, itinerary.user_id, "itinerary")
    return await container.itineraries.update_item_status(item_id, body.status)

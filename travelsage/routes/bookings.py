"""Booking endpoints (restaurant reservations and generic bookings)"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..container import Container
from ..middleware.auth import get_container, require_auth
from ..models import Booking, User
from ..schemas.request import BookingStatusUpdateRequest, BookRestaurantRequest, CreateBookingRequest
from ..schemas.response import ERROR_RESPONSES
from ..services import AuthGate

router = APIRouter(tags=["bookings"])


@router.post(
    "/restaurants/book",
    response_model=Booking,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def book_restaurant(
    body: BookRestaurantRequest,
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    """Reserve a table; the booking is confirmed immediately and carries a confirmation code"""
    return await container.bookings.create_booking(
        user_id=user.id,
        booking_type="restaurant",
        item_id=body.restaurant_id,
        booking_date=body.date,
        time=body.time,
        party_size=body.party_size,
        notes=body.notes,
        status="confirmed",
    )


@router.post(
    "/bookings",
    response_model=Booking,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_booking(
    body: CreateBookingRequest,
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    return await container.bookings.create_booking(
        user_id=user.id,
        booking_type=body.type,
        item_id=body.item_id,
        booking_date=body.date,
        time=body.time,
        party_size=body.party_size,
        notes=body.notes,
        status=body.status,
    )


@router.get("/bookings", response_model=List[Booking], responses=ERROR_RESPONSES)
async def list_bookings(
    booking_type: Optional[str] = Query(None, alias="type", description="restaurant, activity, accommodation or all"),
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    """The caller's bookings, newest first"""
    return await container.bookings.get_user_bookings(user.id, booking_type)


@router.get("/bookings/{booking_id}", response_model=Booking, responses=ERROR_RESPONSES)
async def get_booking(
    booking_id: str,
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    booking = await container.bookings.get_booking_by_id(booking_id)
    AuthGate.ensure_owner(user, booking.user_id, "booking")
    return booking


@router.patch("/bookings/{booking_id}/status", response_model=Booking, responses=ERROR_RESPONSES)
async def update_booking_status(
    booking_id: str,
    body: BookingStatusUpdateRequest,
    user: User = Depends(require_auth),
    container: Container = Depends(get_container),
):
    booking = await container.bookings.get_booking_by_id(booking_id)
    AuthGate.ensure_owner(user, booking.user_id, "booking")
    return await container.bookings.update_booking_status(booking_id, body.status)

"""Booking Store: reservations of restaurants, activities and accommodation"""
import logging
from datetime import date
from typing import List, Optional, Union

from ..models import BOOKING_STATUSES, BOOKING_TYPES, Booking
from ..repositories import BookingRepository, CatalogRepository
from ..utils.errors import NotFoundError, ValidationError
from ..utils.identifiers import new_confirmation_code
from .itinerary_store import parse_date

logger = logging.getLogger(__name__)


def _invalid_choice(field: str, choices) -> ValidationError:
    return ValidationError.for_fields(
        f"Valid {field} is required",
        [{"field": field, "message": f"Must be one of: {', '.join(choices)}"}],
    )


class BookingStore:
    """Bookings have their own lifecycle; they are never written into itineraries"""

    def __init__(self, bookings: BookingRepository, catalog: CatalogRepository):
        self.bookings = bookings
        self.catalog = catalog

    async def _check_item_exists(self, booking_type: str, item_id: str) -> None:
        if booking_type == "restaurant":
            found = await self.catalog.get_restaurant(item_id)
            label = "Restaurant"
        elif booking_type == "activity":
            found = await self.catalog.get_activity(item_id)
            label = "Activity"
        else:
            # Accommodation has no catalog collection to check against
            return
        if found is None:
            raise NotFoundError(f"{label} not found", {"itemId": item_id})

    async def create_booking(
        self,
        user_id: str,
        booking_type: Optional[str],
        item_id: Optional[str],
        booking_date: Union[str, date, None],
        time: Optional[str] = None,
        party_size: Optional[int] = None,
        notes: Optional[str] = None,
        status: str = "pending",
    ) -> Booking:
        """
        Store a new booking

        Args:
            user_id: Owner
            booking_type: restaurant, activity or accommodation
            item_id: Id of the booked catalog item
            booking_date: Day of the reservation
            time: Free-text time ("19:30")
            party_size: Number of guests, defaults to 1
            notes: Free-text notes
            status: Initial status; confirmed bookings always get a confirmation code

        Returns:
            The stored booking

        Raises:
            ValidationError: If type, item id or date is missing or invalid
            NotFoundError: If the referenced restaurant or activity does not exist
        """
        missing = [
            field for field, value in (("type", booking_type), ("itemId", item_id), ("date", booking_date))
            if not value
        ]
        if missing:
            raise ValidationError.missing(*missing)
        if booking_type not in BOOKING_TYPES:
            raise _invalid_choice("type", BOOKING_TYPES)
        if status not in BOOKING_STATUSES:
            raise _invalid_choice("status", BOOKING_STATUSES)
        if party_size is not None and party_size < 1:
            raise ValidationError.for_fields(
                "Invalid party size",
                [{"field": "partySize", "message": "Must be at least 1"}],
            )

        await self._check_item_exists(booking_type, item_id)

        booking = await self.bookings.add(Booking(
            user_id=user_id,
            type=booking_type,
            item_id=item_id,
            date=parse_date(booking_date, "date"),
            time=time,
            party_size=party_size or 1,
            notes=notes,
            status=status,
            confirmation_code=new_confirmation_code() if status == "confirmed" else None,
        ))
        logger.info(
            "Created %s booking %s for user %s (status=%s)",
            booking.type, booking.id, user_id, booking.status
        )
        return booking

    async def get_user_bookings(self, user_id: str, booking_type: Optional[str] = None) -> List[Booking]:
        """
        Bookings owned by the user, newest first

        Args:
            booking_type: Only bookings of this type; ``None``, "" or "all" means every type
        """
        if not booking_type or booking_type == "all":
            booking_type = None
        elif booking_type not in BOOKING_TYPES:
            raise _invalid_choice("type", BOOKING_TYPES)
        return await self.bookings.list_for_user(user_id, booking_type)

    async def get_booking_by_id(self, booking_id: str) -> Booking:
        booking = await self.bookings.get(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    async def update_booking_status(self, booking_id: str, status: str) -> Booking:
        """
        Raises:
            ValidationError: If status is not confirmed/pending/cancelled
            NotFoundError: If the booking does not exist
        """
        if status not in BOOKING_STATUSES:
            raise _invalid_choice("status", BOOKING_STATUSES)

        booking = await self.get_booking_by_id(booking_id)
        booking.status = status
        if status == "confirmed" and not booking.confirmation_code:
            booking.confirmation_code = new_confirmation_code()

        logger.info("Booking %s moved to %s", booking_id, status)
        return await self.bookings.save(booking)

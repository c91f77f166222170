"""Repository interfaces, one per persisted entity"""
from typing import List, Optional, Protocol

from ..models import Activity, Booking, Destination, Itinerary, Restaurant, Session, User


class UserRepository(Protocol):
    async def get(self, user_id: str) -> Optional[User]: ...

    async def get_by_username(self, username: str) -> Optional[User]:
        """Case-insensitive lookup"""
        ...

    async def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup"""
        ...

    async def add(self, user: User) -> User: ...

    async def save(self, user: User) -> User: ...

    async def list_all(self) -> List[User]: ...


class SessionRepository(Protocol):
    async def add(self, session: Session) -> Session: ...

    async def get(self, session_id: str) -> Optional[Session]: ...

    async def delete(self, session_id: str) -> None: ...


class ItineraryRepository(Protocol):
    async def add(self, itinerary: Itinerary) -> Itinerary: ...

    async def get(self, itinerary_id: str) -> Optional[Itinerary]: ...

    async def save(self, itinerary: Itinerary) -> Itinerary: ...

    async def delete(self, itinerary_id: str) -> bool: ...

    async def list_for_user(self, user_id: str) -> List[Itinerary]:
        """Itineraries owned by ``user_id``, most recently updated first"""
        ...

    async def find_by_item_id(self, item_id: str) -> Optional[Itinerary]:
        """
        Itinerary containing the item.

        Scans every itinerary, day and item: O(itineraries x days x items).
        """
        ...


class BookingRepository(Protocol):
    async def add(self, booking: Booking) -> Booking: ...

    async def get(self, booking_id: str) -> Optional[Booking]: ...

    async def save(self, booking: Booking) -> Booking: ...

    async def list_for_user(self, user_id: str, booking_type: Optional[str] = None) -> List[Booking]:
        """Bookings owned by ``user_id``, newest first"""
        ...


class CatalogRepository(Protocol):
    """Read-only access to destinations, restaurants and activities (collection order)"""

    async def list_destinations(self) -> List[Destination]: ...

    async def get_destination(self, destination_id: str) -> Optional[Destination]: ...

    async def list_restaurants(self) -> List[Restaurant]: ...

    async def get_restaurant(self, restaurant_id: str) -> Optional[Restaurant]: ...

    async def list_activities(self) -> List[Activity]: ...

    async def get_activity(self, activity_id: str) -> Optional[Activity]: ...

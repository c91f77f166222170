"""In-memory repositories (per-process, used for development and tests)"""
from typing import Dict, Iterable, List, Optional, TypeVar

from pydantic import BaseModel

from ..models import Activity, Booking, Destination, Itinerary, Restaurant, Session, User

ModelT = TypeVar("ModelT", bound=BaseModel)


def _copy(model: ModelT) -> ModelT:
    # Callers must never alias stored state
    return model.model_copy(deep=True)


class InMemoryUserRepository:
    def __init__(self, users: Iterable[User] = ()):
        self._users: Dict[str, User] = {u.id: u for u in users}

    async def get(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return _copy(user) if user else None

    async def get_by_username(self, username: str) -> Optional[User]:
        wanted = username.lower()
        for user in self._users.values():
            if user.username.lower() == wanted:
                return _copy(user)
        return None

    async def get_by_email(self, email: str) -> Optional[User]:
        wanted = email.lower()
        for user in self._users.values():
            if user.email and user.email.lower() == wanted:
                return _copy(user)
        return None

    async def add(self, user: User) -> User:
        self._users[user.id] = _copy(user)
        return _copy(user)

    async def save(self, user: User) -> User:
        self._users[user.id] = _copy(user)
        return _copy(user)

    async def list_all(self) -> List[User]:
        return [_copy(user) for user in self._users.values()]


class InMemorySessionRepository:
    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    async def add(self, session: Session) -> Session:
        self._sessions[session.id] = _copy(session)
        return _copy(session)

    async def get(self, session_id: str) -> Optional[Session]:
        session = self._sessions.get(session_id)
        return _copy(session) if session else None

    async def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)


class InMemoryItineraryRepository:
    def __init__(self):
        self._itineraries: Dict[str, Itinerary] = {}

    async def add(self, itinerary: Itinerary) -> Itinerary:
        self._itineraries[itinerary.id] = _copy(itinerary)
        return _copy(itinerary)

    async def get(self, itinerary_id: str) -> Optional[Itinerary]:
        itinerary = self._itineraries.get(itinerary_id)
        return _copy(itinerary) if itinerary else None

    async def save(self, itinerary: Itinerary) -> Itinerary:
        self._itineraries[itinerary.id] = _copy(itinerary)
        return _copy(itinerary)

    async def delete(self, itinerary_id: str) -> bool:
        return self._itineraries.pop(itinerary_id, None) is not None

    async def list_for_user(self, user_id: str) -> List[Itinerary]:
        owned = [it for it in self._itineraries.values() if it.user_id == user_id]
        # Reverse insertion first so ties on updated_at still come out newest-first
        owned = sorted(reversed(owned), key=lambda it: it.updated_at, reverse=True)
        return [_copy(it) for it in owned]

    async def find_by_item_id(self, item_id: str) -> Optional[Itinerary]:
        for itinerary in self._itineraries.values():
            if itinerary.find_item(item_id) is not None:
                return _copy(itinerary)
        return None


class InMemoryBookingRepository:
    def __init__(self):
        self._bookings: Dict[str, Booking] = {}

    async def add(self, booking: Booking) -> Booking:
        self._bookings[booking.id] = _copy(booking)
        return _copy(booking)

    async def get(self, booking_id: str) -> Optional[Booking]:
        booking = self._bookings.get(booking_id)
        return _copy(booking) if booking else None

    async def save(self, booking: Booking) -> Booking:
        self._bookings[booking.id] = _copy(booking)
        return _copy(booking)

    async def list_for_user(self, user_id: str, booking_type: Optional[str] = None) -> List[Booking]:
        owned = [
            b for b in self._bookings.values()
            if b.user_id == user_id and (booking_type is None or b.type == booking_type)
        ]
        owned = sorted(reversed(owned), key=lambda b: b.created_at, reverse=True)
        return [_copy(b) for b in owned]


class InMemoryCatalogRepository:
    """Catalog collections kept in insertion order"""

    def __init__(
        self,
        destinations: Iterable[Destination] = (),
        restaurants: Iterable[Restaurant] = (),
        activities: Iterable[Activity] = (),
    ):
        self._destinations: Dict[str, Destination] = {d.id: d for d in destinations}
        self._restaurants: Dict[str, Restaurant] = {r.id: r for r in restaurants}
        self._activities: Dict[str, Activity] = {a.id: a for a in activities}

    async def list_destinations(self) -> List[Destination]:
        return [_copy(d) for d in self._destinations.values()]

    async def get_destination(self, destination_id: str) -> Optional[Destination]:
        destination = self._destinations.get(destination_id)
        return _copy(destination) if destination else None

    async def list_restaurants(self) -> List[Restaurant]:
        return [_copy(r) for r in self._restaurants.values()]

    async def get_restaurant(self, restaurant_id: str) -> Optional[Restaurant]:
        restaurant = self._restaurants.get(restaurant_id)
        return _copy(restaurant) if restaurant else None

    async def list_activities(self) -> List[Activity]:
        return [_copy(a) for a in self._activities.values()]

    async def get_activity(self, activity_id: str) -> Optional[Activity]:
        activity = self._activities.get(activity_id)
        return _copy(activity) if activity else None
